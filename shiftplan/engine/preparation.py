"""Forward pass: preparation steps packed from the fixed start time."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Sequence

from shiftplan.config import SchedulerConfig
from shiftplan.domain.models import PREPARATION, ProductionArea
from shiftplan.domain.views import SchedulingInputs
from shiftplan.services.matching import find_suitable_workers
from shiftplan.services.timeplan import add_minutes

from .base import BaseScheduler, PassResult, ScheduledTask, area_anchors, build_tasks, staffing_issue

logger = logging.getLogger(__name__)


class PreparationScheduler(BaseScheduler):
    """
    Walks time forward from the preparation start.
    
    Orders are taken in sequence and each order's preparation steps by
    ascending step sequence. A step that cannot be staffed is skipped and
    does not consume time.
    """
    
    area_kind = PREPARATION
    
    def anchor_time(self, areas: Sequence[ProductionArea], inputs: SchedulingInputs, cfg: SchedulerConfig) -> datetime:
        return min(area_anchors(areas, "start_time", inputs, cfg.preparation_start))
    
    def make_schedule(
        self,
        inputs: SchedulingInputs,
        placed: Sequence[ScheduledTask],
        cfg: SchedulerConfig,
    ) -> PassResult:
        result = PassResult()
        clocks: Dict[str, datetime] = {}
        
        for order_view in inputs.orders:
            for step in order_view.steps_in_area(PREPARATION):
                key = self.clock_key(step, cfg)
                start = self.current_clock(clocks, key, inputs, cfg)
                duration = order_view.duration_minutes(step)
                
                suitable = find_suitable_workers(
                    step.process_step,
                    start,
                    duration,
                    inputs.workers,
                    [*placed, *result.tasks],
                    enforce_availability=cfg.enforce_availability,
                )
                needed = step.process_step.required_employees
                if len(suitable) < needed:
                    issue = staffing_issue(order_view, step, len(suitable))
                    logger.warning(issue)
                    result.issues.append(issue)
                    continue
                
                end = add_minutes(start, duration)
                result.tasks.extend(build_tasks(order_view, step, suitable[:needed], start, end, duration))
                clocks[key] = end
        
        result.clocks = clocks
        logger.info("Preparation pass placed %d tasks with %d issues", len(result.tasks), len(result.issues))
        return result
