"""Utilization and production-flow reports over scheduled tasks."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import pandas as pd

from shiftplan.domain.models import Worker

TASK_COLUMNS = [
    "order_id",
    "order_process_step_id",
    "process_step_id",
    "worker_id",
    "start_time",
    "end_time",
    "duration_minutes",
    "production_area_id",
    "area_kind",
    "status",
]

BOTTLENECK_DELAY_MINUTES = 30.0


def tasks_to_frame(tasks: Sequence) -> pd.DataFrame:
    """One row per task with TASK_COLUMNS."""
    rows = [{col: getattr(t, col) for col in TASK_COLUMNS} for t in tasks]
    df = pd.DataFrame(rows, columns=TASK_COLUMNS)
    if not df.empty:
        df["start_time"] = pd.to_datetime(df["start_time"])
        df["end_time"] = pd.to_datetime(df["end_time"])
    return df


def worker_utilization(tasks: Sequence, workers: Sequence[Worker]) -> pd.DataFrame:
    """
    Hours and utilization per worker.
    
    Utilization is hours / max_hours as a percentage, capped at 100.
    Workers without tasks are listed with zero hours.
    """
    df = tasks_to_frame(tasks)
    if df.empty:
        hours = pd.Series(dtype=float)
    else:
        df["hours"] = (df["end_time"] - df["start_time"]).dt.total_seconds() / 3600.0
        hours = df.groupby("worker_id")["hours"].sum()

    rows = []
    for worker in workers:
        total = float(hours.get(worker.id, 0.0))
        pct = min(total / worker.max_hours * 100, 100.0) if worker.max_hours else 0.0
        rows.append(
            {
                "worker_id": worker.id,
                "name": worker.name,
                "total_hours": round(total, 1),
                "utilization_percentage": int(round(pct)),
            }
        )
    return pd.DataFrame(rows, columns=["worker_id", "name", "total_hours", "utilization_percentage"])


def analyze_production_flow(tasks: Sequence) -> Tuple[List[str], List[Dict]]:
    """
    Find idle gaps between consecutive tasks of each order.
    
    Returns:
        (bottlenecks, dependencies) where dependencies holds
        {"from", "to", "delay"} edges in minutes and bottlenecks lists gaps
        longer than BOTTLENECK_DELAY_MINUTES
    """
    bottlenecks: List[str] = []
    dependencies: List[Dict] = []
    df = tasks_to_frame(tasks)
    if df.empty:
        return bottlenecks, dependencies

    # Tasks of one step share an interval, keep one row per step
    steps = df.drop_duplicates(subset=["order_id", "order_process_step_id"])
    for order_id, group in steps.groupby("order_id", sort=False):
        group = group.sort_values("start_time", kind="stable")
        prev = None
        for _, row in group.iterrows():
            if prev is not None:
                delay = (row["start_time"] - prev["end_time"]).total_seconds() / 60.0
                if delay > 0:
                    dependencies.append(
                        {"from": prev["process_step_id"], "to": row["process_step_id"], "delay": delay}
                    )
                    if delay > BOTTLENECK_DELAY_MINUTES:
                        bottlenecks.append(
                            f"Delay between {prev['process_step_id']} and {row['process_step_id']} "
                            f"in order {order_id}"
                        )
            prev = row
    return bottlenecks, dependencies


def summarize_schedule(tasks: Sequence, workers: Sequence[Worker]) -> str:
    if not tasks:
        return "No assignments."
    df = tasks_to_frame(tasks)
    per_area = df.groupby("area_kind").agg(
        tasks=("worker_id", "size"),
        first_start=("start_time", "min"),
        last_end=("end_time", "max"),
    )
    utilization = worker_utilization(tasks, workers).set_index("worker_id")
    utilization = utilization[utilization["total_hours"] > 0]

    lines = ["Tasks per area:"]
    lines.append(per_area.to_string())
    lines.append("")
    lines.append("Hours per worker:")
    lines.append(utilization.to_string())
    return "\n".join(lines)
