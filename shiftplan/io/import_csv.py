"""CSV import utilities to load planning data into the database."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd
from sqlalchemy.orm import Session

from shiftplan.domain.models import AREA_KINDS, PRIORITIES, ProcessStep, ProductionArea, ProductionOrder, Worker
from shiftplan.domain.repositories import (
    ProcessStepRepository,
    ProductionAreaRepository,
    ProductionOrderRepository,
    WorkerRepository,
)

logger = logging.getLogger(__name__)

TRUE_VALUES = {"TRUE", "T", "1", "YES", "Y"}


def _read(csv_path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    df.columns = df.columns.str.lower().str.strip()
    return df


def _split_list(value: str) -> List[str]:
    """Split a semicolon-separated cell, dropping blanks and duplicates."""
    items: List[str] = []
    for part in str(value).split(";"):
        part = part.strip()
        if part and part not in items:
            items.append(part)
    return items


def _optional(value: str) -> str | None:
    value = str(value).strip()
    return value or None


def import_workers_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import workers from CSV.
    
    Columns: id, name, skills (semicolon separated), start_time, end_time,
    max_hours, break_minutes, is_available
    
    Returns:
        Number of workers imported
    """
    df = _read(csv_path)
    workers = []
    for _, row in df.iterrows():
        workers.append(
            Worker(
                id=row["id"],
                name=row["name"],
                skills=_split_list(row.get("skills", "")),
                start_time=row["start_time"],
                end_time=row["end_time"],
                max_hours=float(row.get("max_hours") or 8),
                break_minutes=int(row.get("break_minutes") or 30),
                is_available=str(row.get("is_available", "TRUE") or "TRUE").upper() in TRUE_VALUES,
            )
        )
    WorkerRepository.bulk_create(session, workers)
    logger.info("Imported %d workers from %s", len(workers), csv_path)
    return len(workers)


def import_areas_csv(session: Session, csv_path: str | Path) -> int:
    """Import production areas. Columns: id, name, kind, start_time, end_time."""
    df = _read(csv_path)
    df["kind"] = df["kind"].str.lower().str.strip()
    invalid = df[~df["kind"].isin(AREA_KINDS)]
    if not invalid.empty:
        raise ValueError(f"Unknown area kind(s) in {csv_path}: {sorted(invalid['kind'].unique())}")
    areas = [
        ProductionArea(
            id=row["id"],
            name=row["name"],
            kind=row["kind"],
            start_time=_optional(row.get("start_time", "")),
            end_time=_optional(row.get("end_time", "")),
        )
        for _, row in df.iterrows()
    ]
    ProductionAreaRepository.bulk_create(session, areas)
    logger.info("Imported %d production areas from %s", len(areas), csv_path)
    return len(areas)


def import_process_steps_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import process-step templates.
    
    Columns: id, name, required_skills (semicolon separated), time_per_kg,
    required_employees, production_area_id
    """
    df = _read(csv_path)
    df["time_per_kg"] = df["time_per_kg"].astype(float)
    invalid = df[df["time_per_kg"] <= 0]
    if not invalid.empty:
        raise ValueError(f"time_per_kg must be positive for step(s) in {csv_path}: {sorted(invalid['id'])}")
    steps = [
        ProcessStep(
            id=row["id"],
            name=row["name"],
            required_skills=_split_list(row.get("required_skills", "")),
            time_per_kg=float(row["time_per_kg"]),
            required_employees=int(row.get("required_employees") or 1),
            production_area_id=_optional(row.get("production_area_id", "")),
        )
        for _, row in df.iterrows()
    ]
    ProcessStepRepository.bulk_create(session, steps)
    logger.info("Imported %d process steps from %s", len(steps), csv_path)
    return len(steps)


def import_orders_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import production orders with their steps.
    
    Columns: id, product_name, total_quantity, priority, scheduled_date,
    steps ("step-1:1;step-2:2" as process_step_id:sequence)
    
    Process steps must be imported first.
    """
    df = _read(csv_path)
    df["scheduled_date"] = pd.to_datetime(df["scheduled_date"]).dt.date
    df["priority"] = df["priority"].str.lower().replace("", "medium")

    count = 0
    for _, row in df.iterrows():
        if row["priority"] not in PRIORITIES:
            raise ValueError(f"Unknown priority {row['priority']!r} for order {row['id']}")
        steps = []
        for i, item in enumerate(_split_list(row.get("steps", "")), start=1):
            step_id, _, sequence = item.partition(":")
            steps.append((step_id.strip(), int(sequence) if sequence else i))
        order = ProductionOrder(
            id=row["id"],
            product_name=row["product_name"],
            total_quantity=float(row["total_quantity"]),
            priority=row["priority"],
            status="pending",
            scheduled_date=row["scheduled_date"],
        )
        ProductionOrderRepository.create(session, order, steps)
        count += 1

    logger.info("Imported %d orders from %s", count, csv_path)
    return count
