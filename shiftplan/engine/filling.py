"""Backward pass: filling steps packed against the fixed end time."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Sequence

from shiftplan.config import SchedulerConfig
from shiftplan.domain.models import FILLING, PREPARATION, ProductionArea
from shiftplan.domain.views import SchedulingInputs
from shiftplan.services.dependencies import check_dependencies
from shiftplan.services.matching import find_suitable_workers
from shiftplan.services.timeplan import add_minutes

from .base import BaseScheduler, PassResult, ScheduledTask, area_anchors, build_tasks, staffing_issue

logger = logging.getLogger(__name__)


class FillingScheduler(BaseScheduler):
    """
    Walks time backward from the filling end.
    
    Orders are taken in reverse sequence and each order's filling steps by
    descending step sequence, so the last step of the last order ends at
    the anchor. Steps whose dependency is unmet or that cannot be staffed
    are skipped and leave the clock where it is.
    """
    
    area_kind = FILLING
    
    def anchor_time(self, areas: Sequence[ProductionArea], inputs: SchedulingInputs, cfg: SchedulerConfig) -> datetime:
        return max(area_anchors(areas, "end_time", inputs, cfg.filling_end))
    
    def make_schedule(
        self,
        inputs: SchedulingInputs,
        placed: Sequence[ScheduledTask],
        cfg: SchedulerConfig,
    ) -> PassResult:
        result = PassResult()
        clocks: Dict[str, datetime] = {}
        preparation_tasks = [t for t in placed if t.area_kind == PREPARATION]
        
        for order_view in reversed(inputs.orders):
            for step in reversed(order_view.steps_in_area(FILLING)):
                key = self.clock_key(step, cfg)
                end = self.current_clock(clocks, key, inputs, cfg)
                duration = order_view.duration_minutes(step)
                start = add_minutes(end, -duration)
                
                dependency = check_dependencies(
                    order_view, step, preparation_tasks, strictness=cfg.dependency_strictness
                )
                if not dependency.met:
                    issue = (
                        f"Dependency not met for {step.process_step.name} in "
                        f"{order_view.order.product_name}: {dependency.reason}"
                    )
                    logger.warning(issue)
                    result.issues.append(issue)
                    continue
                
                suitable = find_suitable_workers(
                    step.process_step,
                    start,
                    duration,
                    inputs.workers,
                    [*result.tasks, *placed],
                    enforce_availability=cfg.enforce_availability,
                )
                needed = step.process_step.required_employees
                if len(suitable) < needed:
                    issue = staffing_issue(order_view, step, len(suitable))
                    logger.warning(issue)
                    result.issues.append(issue)
                    continue
                
                result.tasks.extend(build_tasks(order_view, step, suitable[:needed], start, end, duration))
                clocks[key] = start
        
        result.clocks = clocks
        logger.info("Filling pass placed %d tasks with %d issues", len(result.tasks), len(result.issues))
        return result
