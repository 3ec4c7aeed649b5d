"""Fatal errors raised while building a schedule."""

from __future__ import annotations


class SchedulingError(RuntimeError):
    """A scheduling run cannot continue."""


class MissingTemplateError(SchedulingError):
    """An order step references a process-step template that does not exist."""

    def __init__(self, order_step_id: str, process_step_id: str):
        super().__init__(
            f"Order step {order_step_id} references unknown process step {process_step_id}"
        )
        self.order_step_id = order_step_id
        self.process_step_id = process_step_id


class InvalidTemplateError(SchedulingError):
    """A process-step template cannot produce a task with positive length."""

    def __init__(self, process_step_id: str, time_per_kg: float):
        super().__init__(
            f"Process step {process_step_id} has non-positive time_per_kg {time_per_kg}"
        )
        self.process_step_id = process_step_id
        self.time_per_kg = time_per_kg
