"""Worker matching by skill, working time and existing assignments."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Sequence

from shiftplan.domain.models import ProcessStep, Worker

from .timeplan import add_minutes, hour_of_day, parse_time_string


def has_required_skills(worker: Worker, process_step: ProcessStep) -> bool:
    return set(process_step.required_skills or []).issubset(worker.skills or [])


def within_working_hours(worker: Worker, moment: datetime) -> bool:
    """True if the moment's hour of day lies in the worker's window, bounds included."""
    hour = hour_of_day(moment)
    return parse_time_string(worker.start_time) <= hour <= parse_time_string(worker.end_time)


def has_conflict(worker_id: str, start: datetime, duration_minutes: float, placed: Iterable) -> bool:
    """
    Check whether [start, start + duration) collides with the worker's placed tasks.

    Two intervals conflict if either one starts inside the other.
    """
    end = add_minutes(start, duration_minutes)
    for task in placed:
        if task.worker_id != worker_id:
            continue
        if task.start_time <= start < task.end_time:
            return True
        if start < task.start_time < end:
            return True
    return False


def find_suitable_workers(
    process_step: ProcessStep,
    moment: datetime,
    duration_minutes: float,
    workers: Sequence[Worker],
    placed: Iterable,
    enforce_availability: bool = True,
) -> List[Worker]:
    """
    Return workers who can take a step starting at a given moment.
    
    Args:
        process_step: Template with required skills
        moment: Candidate start
        duration_minutes: Length of the step for this order
        workers: Candidate pool, order is preserved
        placed: Tasks already placed in this run
        enforce_availability: Skip workers whose is_available flag is off
    
    Returns:
        Matching workers in pool order
    """
    placed = list(placed)
    suitable: List[Worker] = []
    for worker in workers:
        if enforce_availability and not worker.is_available:
            continue
        if not has_required_skills(worker, process_step):
            continue
        if not within_working_hours(worker, moment):
            continue
        if has_conflict(worker.id, moment, duration_minutes, placed):
            continue
        suitable.append(worker)
    return suitable
