"""Orchestrator - runs both passes, validation and the optional post-processing stages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List

from sqlalchemy.orm import Session

from shiftplan.config import SchedulerConfig
from shiftplan.domain.models import ShiftAssignment
from shiftplan.domain.repositories import AlertRepository, ShiftAssignmentRepository
from shiftplan.services.loading import load_inputs
from shiftplan.services.recommendations import generate_recommendations
from shiftplan.services.sequencing import sequence_orders
from shiftplan.services.validation import validate_schedule

from .base import ScheduledTask
from .filling import FillingScheduler
from .preparation import PreparationScheduler

logger = logging.getLogger(__name__)

NO_ORDERS_MESSAGE = "No production orders scheduled for this date"
ERRORED_MESSAGE = "Please review input data and try again"


class RunState(str, Enum):
    IDLE = "idle"
    SEQUENCING = "sequencing"
    SCHEDULING_PREPARATION = "scheduling_preparation"
    SCHEDULING_FILLING = "scheduling_filling"
    VALIDATING = "validating"
    RECOMMENDING = "recommending"
    PERSISTING = "persisting"
    DONE = "done"
    ERRORED = "errored"


@dataclass
class SchedulingResult:
    """Outcome of one run. feasible is True iff issues is empty."""

    tasks: List[ScheduledTask] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    state: RunState = RunState.DONE

    @property
    def feasible(self) -> bool:
        return not self.issues

    def as_dict(self) -> dict:
        return {
            "tasks": list(self.tasks),
            "feasible": self.feasible,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
        }


class SchedulingEngine:
    """
    Single-pass scheduler for one production day.
    
    Runs Sequencing -> SchedulingPreparation -> SchedulingFilling ->
    Validating -> Recommending -> Persisting -> Done. Any exception moves
    the run to Errored and yields an empty, infeasible result.
    """
    
    def __init__(self, session: Session, cfg: SchedulerConfig | None = None):
        self.session = session
        self.cfg = cfg or SchedulerConfig()
        self.state = RunState.IDLE
        self.history: List[RunState] = [RunState.IDLE]
    
    def _enter(self, state: RunState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug("Scheduling run state: %s", state.value)
    
    def generate_schedule(self, day: date) -> SchedulingResult:
        """
        Build assignments for all orders scheduled on a day.
        
        Args:
            day: Production date
        
        Returns:
            SchedulingResult; returned whether or not the schedule is feasible
        """
        self.state = RunState.IDLE
        self.history = [RunState.IDLE]
        logger.info("Building schedule for %s", day)
        
        try:
            return self._run(day)
        except Exception as e:
            logger.exception("Scheduling failed for %s", day)
            self.session.rollback()
            self._enter(RunState.ERRORED)
            return SchedulingResult(
                tasks=[],
                issues=[f"Scheduling failed: {e}"],
                recommendations=[ERRORED_MESSAGE],
                state=RunState.ERRORED,
            )
    
    def _run(self, day: date) -> SchedulingResult:
        cfg = self.cfg
        
        self._enter(RunState.SEQUENCING)
        inputs = load_inputs(self.session, day)
        if not inputs.orders:
            self._enter(RunState.DONE)
            return SchedulingResult(recommendations=[NO_ORDERS_MESSAGE])
        inputs.orders = sequence_orders(inputs.orders, cfg.sequencing_policy)
        
        tasks: List[ScheduledTask] = []
        issues: List[str] = []
        
        self._enter(RunState.SCHEDULING_PREPARATION)
        preparation = PreparationScheduler().make_schedule(inputs, [], cfg)
        tasks.extend(preparation.tasks)
        issues.extend(preparation.issues)
        
        self._enter(RunState.SCHEDULING_FILLING)
        filling = FillingScheduler().make_schedule(inputs, preparation.tasks, cfg)
        tasks.extend(filling.tasks)
        issues.extend(filling.issues)
        
        self._enter(RunState.VALIDATING)
        issues.extend(validate_schedule(tasks, inputs.workers))
        
        recommendations: List[str] = []
        if cfg.generate_recommendations:
            self._enter(RunState.RECOMMENDING)
            recommendations = generate_recommendations(
                tasks, inputs.workers, inputs.process_steps, len(inputs.orders), cfg
            )
        
        if cfg.persist or cfg.raise_alerts:
            self._enter(RunState.PERSISTING)
            if cfg.persist:
                self._persist(day, tasks)
            if cfg.raise_alerts:
                self._raise_alerts(issues, recommendations)
            self.session.commit()
        
        self._enter(RunState.DONE)
        logger.info(
            "Schedule for %s: %d tasks, %d issues, %d recommendations",
            day, len(tasks), len(issues), len(recommendations),
        )
        return SchedulingResult(tasks=tasks, issues=issues, recommendations=recommendations)
    
    def _persist(self, day: date, tasks: List[ScheduledTask]) -> None:
        if self.cfg.replace_existing:
            deleted = ShiftAssignmentRepository.delete_by_date(self.session, day, commit=False)
            if deleted > 0:
                logger.info("Deleted %d existing assignments for %s", deleted, day)
        self.session.add_all(
            ShiftAssignment(
                worker_id=t.worker_id,
                order_process_step_id=t.order_process_step_id,
                start_time=t.start_time,
                end_time=t.end_time,
                status=t.status,
            )
            for t in tasks
        )
        logger.info("Persisting %d assignments", len(tasks))
    
    def _raise_alerts(self, issues: List[str], recommendations: List[str]) -> None:
        for issue in issues:
            AlertRepository.create(self.session, "warning", "Scheduling Issue", issue, commit=False)
        for recommendation in recommendations:
            AlertRepository.create(self.session, "info", "Optimization Suggestion", recommendation, commit=False)


def build_day_schedule(
    session: Session,
    day: date,
    cfg: SchedulerConfig | None = None,
    persist: bool | None = None,
) -> SchedulingResult:
    """
    Convenience function to build a day's schedule.
    
    Args:
        session: Database session
        day: Production date
        cfg: SchedulerConfig, defaults when None
        persist: Overrides cfg.persist when given
    
    Returns:
        SchedulingResult
    """
    cfg = cfg or SchedulerConfig()
    if persist is not None and persist != cfg.persist:
        cfg = SchedulerConfig(**{**vars(cfg), "persist": persist})
    return SchedulingEngine(session, cfg).generate_schedule(day)
