"""Cross-area dependency rule for filling steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from shiftplan.domain.models import FILLING, PREPARATION
from shiftplan.domain.views import OrderStepView, OrderWithSteps

LOOSE = "loose"
STRICT = "strict"


@dataclass(frozen=True)
class DependencyCheck:
    met: bool
    reason: str = ""


def check_dependencies(
    order_view: OrderWithSteps,
    step: OrderStepView,
    preparation_tasks: Iterable,
    strictness: str = LOOSE,
) -> DependencyCheck:
    """
    Decide whether a filling step may be placed.
    
    Args:
        order_view: Order the step belongs to
        step: Step to check; non-filling steps are always met
        preparation_tasks: Tasks produced by the preparation pass
        strictness: "loose" needs any preparation task for the order,
            "strict" needs a task on the closest preceding preparation step
    
    Returns:
        DependencyCheck with a reason when unmet
    """
    if step.area_kind != FILLING:
        return DependencyCheck(True)

    order_tasks = [t for t in preparation_tasks if t.order_id == order_view.order_id]

    if strictness == LOOSE:
        if not any(t.area_kind == PREPARATION for t in order_tasks):
            return DependencyCheck(False, "Preparation steps must be completed before filling")
        return DependencyCheck(True)

    if strictness != STRICT:
        raise ValueError(f"Unknown dependency strictness: {strictness!r}")

    predecessors = [
        s for s in order_view.steps_in_area(PREPARATION) if s.sequence < step.sequence
    ]
    if not predecessors:
        return DependencyCheck(False, "No preparation step precedes this filling step")
    predecessor = predecessors[-1]
    if not any(t.order_process_step_id == predecessor.order_step.id for t in order_tasks):
        return DependencyCheck(
            False, f"Preceding step {predecessor.process_step.name} was not scheduled"
        )
    return DependencyCheck(True)
