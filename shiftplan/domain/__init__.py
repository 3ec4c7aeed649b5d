"""Domain models, typed views and data access layer."""

from .models import (
    FILLING,
    PREPARATION,
    Base,
    OrderProcessStep,
    ProcessStep,
    ProductionAlert,
    ProductionArea,
    ProductionOrder,
    ShiftAssignment,
    Worker,
)
from .repositories import (
    AlertRepository,
    OrderProcessStepRepository,
    ProcessStepRepository,
    ProductionAreaRepository,
    ProductionOrderRepository,
    ShiftAssignmentRepository,
    WorkerRepository,
)
from .views import OrderStepView, OrderWithSteps, SchedulingInputs

__all__ = [
    "PREPARATION",
    "FILLING",
    "Base",
    "Worker",
    "ProductionArea",
    "ProcessStep",
    "ProductionOrder",
    "OrderProcessStep",
    "ShiftAssignment",
    "ProductionAlert",
    "WorkerRepository",
    "ProductionAreaRepository",
    "ProcessStepRepository",
    "ProductionOrderRepository",
    "OrderProcessStepRepository",
    "ShiftAssignmentRepository",
    "AlertRepository",
    "OrderStepView",
    "OrderWithSteps",
    "SchedulingInputs",
]
