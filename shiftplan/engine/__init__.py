"""Scheduling engine: preparation and filling passes plus the run orchestrator."""

from .base import BaseScheduler, PassResult, ScheduledTask
from .filling import FillingScheduler
from .orchestrator import RunState, SchedulingEngine, SchedulingResult, build_day_schedule
from .preparation import PreparationScheduler

__all__ = [
    "BaseScheduler",
    "PassResult",
    "ScheduledTask",
    "PreparationScheduler",
    "FillingScheduler",
    "RunState",
    "SchedulingEngine",
    "SchedulingResult",
    "build_day_schedule",
]
