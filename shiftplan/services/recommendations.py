"""Advisory messages derived from a finished schedule."""

from __future__ import annotations

from typing import List, Sequence, Set

from shiftplan.config import SchedulerConfig
from shiftplan.domain.models import ProcessStep, Worker


def generate_recommendations(
    tasks: Sequence,
    workers: Sequence[Worker],
    process_steps: Sequence[ProcessStep],
    order_count: int,
    cfg: SchedulerConfig | None = None,
) -> List[str]:
    """
    Build non-blocking advice on utilization, skill gaps and task length.
    
    Args:
        tasks: All tasks of the run
        workers: Worker pool
        process_steps: All process-step templates
        order_count: Number of orders considered
        cfg: Thresholds; defaults when None
    
    Returns:
        Recommendation strings
    """
    cfg = cfg or SchedulerConfig()
    recommendations: List[str] = []
    available = [w for w in workers if w.is_available]

    if available:
        assigned = len({t.worker_id for t in tasks})
        utilization = assigned / len(available)
        if utilization < cfg.utilization_low:
            recommendations.append(
                f"Low employee utilization ({utilization * 100:.1f}%) across {order_count} orders. "
                "Consider optimizing task assignments."
            )
        if utilization > cfg.utilization_high:
            recommendations.append(
                f"High employee utilization ({utilization * 100:.1f}%) across {order_count} orders. "
                "Consider adding staff or extending hours."
            )

    required: List[str] = []
    seen: Set[str] = set()
    for step in process_steps:
        for skill in step.required_skills or []:
            if skill not in seen:
                seen.add(skill)
                required.append(skill)
    held = {skill for w in available for skill in (w.skills or [])}
    for skill in required:
        if skill not in held:
            recommendations.append(f'Skill gap identified: No available employees with "{skill}" skill.')

    if tasks:
        mean_minutes = sum(t.duration_minutes for t in tasks) / len(tasks)
        if mean_minutes > cfg.long_task_minutes:
            recommendations.append(
                "Consider breaking down long tasks into smaller segments for better flexibility."
            )

    return recommendations
