"""Types and base class shared by the preparation and filling passes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from shiftplan.config import SchedulerConfig
from shiftplan.domain.models import ProductionArea, Worker
from shiftplan.domain.views import OrderStepView, OrderWithSteps, SchedulingInputs
from shiftplan.services.timeplan import at_time_string

SHARED_CLOCK = "*"


@dataclass(frozen=True)
class ScheduledTask:
    """One worker placed on one order step for a concrete interval."""

    order_id: str
    order_process_step_id: str
    process_step_id: str
    worker_id: str
    start_time: datetime
    end_time: datetime
    duration_minutes: float
    production_area_id: Optional[str]
    area_kind: Optional[str]
    status: str = "scheduled"


@dataclass
class PassResult:
    """Output of one scheduling pass. Clocks hold the final value per timeline."""

    tasks: List[ScheduledTask] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)
    clocks: Dict[str, datetime] = field(default_factory=dict)


def build_tasks(
    order_view: OrderWithSteps,
    step: OrderStepView,
    workers: Sequence[Worker],
    start: datetime,
    end: datetime,
    duration_minutes: float,
) -> List[ScheduledTask]:
    return [
        ScheduledTask(
            order_id=order_view.order_id,
            order_process_step_id=step.order_step.id,
            process_step_id=step.process_step.id,
            worker_id=worker.id,
            start_time=start,
            end_time=end,
            duration_minutes=duration_minutes,
            production_area_id=step.area_id,
            area_kind=step.area_kind,
        )
        for worker in workers
    ]


def staffing_issue(order_view: OrderWithSteps, step: OrderStepView, found: int) -> str:
    return (
        f"Insufficient skilled staff for {step.process_step.name} in {order_view.order.product_name}: "
        f"need {step.process_step.required_employees}, found {found}"
    )


class BaseScheduler(ABC):
    """
    Base class for a single scheduling pass over one area kind.
    
    A pass owns its clocks: one shared timeline by default, or one per
    production area when cfg.per_area_clocks is set.
    """
    
    area_kind: str | None = None  # Override in subclasses
    
    @abstractmethod
    def make_schedule(
        self,
        inputs: SchedulingInputs,
        placed: Sequence[ScheduledTask],
        cfg: SchedulerConfig,
    ) -> PassResult:
        """
        Place this pass's steps for the sequenced orders in inputs.
        
        Args:
            inputs: Workers, areas, templates and orders in processing sequence
            placed: Tasks from earlier passes of the same run
            cfg: SchedulerConfig with business rules
        
        Returns:
            PassResult with new tasks, issues and final clocks
        """
        pass
    
    @abstractmethod
    def anchor_time(self, areas: Sequence[ProductionArea], inputs: SchedulingInputs, cfg: SchedulerConfig) -> datetime:
        """Starting clock value for a timeline covering the given areas."""
        pass
    
    def clock_key(self, step: OrderStepView, cfg: SchedulerConfig) -> str:
        if cfg.per_area_clocks and step.area_id is not None:
            return step.area_id
        return SHARED_CLOCK
    
    def current_clock(
        self,
        clocks: Dict[str, datetime],
        key: str,
        inputs: SchedulingInputs,
        cfg: SchedulerConfig,
    ) -> datetime:
        """Clock value for a timeline, starting it at its anchor on first use."""
        if key not in clocks:
            if key == SHARED_CLOCK:
                areas = inputs.areas_of_kind(self.area_kind)
            else:
                areas = [a for a in inputs.areas if a.id == key]
            clocks[key] = self.anchor_time(areas, inputs, cfg)
        return clocks[key]


def area_anchors(areas: Sequence[ProductionArea], attr: str, inputs: SchedulingInputs, fallback: str) -> List[datetime]:
    """Anchors set on the given areas, or the fallback when none is set."""
    values = [getattr(a, attr) for a in areas if getattr(a, attr)]
    if not values:
        values = [fallback]
    return [at_time_string(inputs.day, v) for v in values]
