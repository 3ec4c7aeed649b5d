"""Typed, read-only views of a day's orders handed to the scheduling passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from .models import OrderProcessStep, ProcessStep, ProductionArea, ProductionOrder, Worker


@dataclass(frozen=True)
class OrderStepView:
    """An order step joined with its process-step template and area."""

    order_step: OrderProcessStep
    process_step: ProcessStep
    area: Optional[ProductionArea]
    sequence: int

    @property
    def area_kind(self) -> Optional[str]:
        return self.area.kind if self.area is not None else None

    @property
    def area_id(self) -> Optional[str]:
        return self.area.id if self.area is not None else None


@dataclass(frozen=True)
class OrderWithSteps:
    """A production order and its steps, ordered by sequence."""

    order: ProductionOrder
    steps: Tuple[OrderStepView, ...] = ()

    @property
    def order_id(self) -> str:
        return self.order.id

    @property
    def total_quantity(self) -> float:
        return self.order.total_quantity

    def steps_in_area(self, kind: str) -> List[OrderStepView]:
        """Steps of the given area kind in ascending sequence."""
        return sorted(
            (s for s in self.steps if s.area_kind == kind),
            key=lambda s: s.sequence,
        )

    def duration_minutes(self, step: OrderStepView) -> float:
        """Minutes needed for a step: time per kg times the order quantity."""
        return step.process_step.time_per_kg * self.order.total_quantity


@dataclass
class SchedulingInputs:
    """Everything a scheduling run reads, loaded once per run."""

    day: date
    workers: List[Worker] = field(default_factory=list)
    areas: List[ProductionArea] = field(default_factory=list)
    process_steps: List[ProcessStep] = field(default_factory=list)
    orders: List[OrderWithSteps] = field(default_factory=list)

    def areas_of_kind(self, kind: str) -> List[ProductionArea]:
        return [a for a in self.areas if a.kind == kind]
