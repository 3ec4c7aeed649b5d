"""Post-placement checks of a finished schedule."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from shiftplan.domain.models import Worker

from .timeplan import hours_between


def validate_schedule(tasks: Sequence, workers: Sequence[Worker]) -> List[str]:
    """
    Report overlapping tasks and max-hours violations per worker.
    
    Args:
        tasks: All tasks of the run
        workers: Worker pool; tasks of unknown workers are ignored
    
    Returns:
        Issue strings. Tasks are neither removed nor retimed.
    """
    worker_lookup: Dict[str, Worker] = {w.id: w for w in workers}
    by_worker: Dict[str, List] = defaultdict(list)
    for task in tasks:
        by_worker[task.worker_id].append(task)

    issues: List[str] = []
    for worker_id, worker_tasks in by_worker.items():
        worker = worker_lookup.get(worker_id)
        if worker is None:
            continue

        ordered = sorted(worker_tasks, key=lambda t: t.start_time)
        for prev, nxt in zip(ordered, ordered[1:]):
            if nxt.start_time < prev.end_time:
                issues.append(
                    f"{worker.name} has overlapping assignments: "
                    f"{prev.start_time:%H:%M}-{prev.end_time:%H:%M} overlaps "
                    f"{nxt.start_time:%H:%M}-{nxt.end_time:%H:%M}"
                )

        total_hours = sum(hours_between(t.start_time, t.end_time) for t in worker_tasks)
        if total_hours > worker.max_hours:
            issues.append(
                f"{worker.name} exceeds maximum working hours: "
                f"{total_hours:.1f}h > {worker.max_hours}h"
            )

    return issues
