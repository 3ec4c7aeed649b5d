"""Demo dataset: two preparation rooms, one filling room, nine workers, three orders."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from shiftplan.domain.models import FILLING, PREPARATION, ProcessStep, ProductionArea, ProductionOrder, Worker
from shiftplan.domain.repositories import (
    ProcessStepRepository,
    ProductionAreaRepository,
    ProductionOrderRepository,
    WorkerRepository,
)

AREAS = [
    ("prep-1", "Preparation Room 1", PREPARATION, "06:00", None),
    ("prep-2", "Preparation Room 2", PREPARATION, "06:00", None),
    ("filling-1", "Filling Room", FILLING, None, "17:00"),
]

PROCESS_STEPS = [
    ("step-1", "Vegetable Peeling", ["peeling", "food_prep"], 2, 2, "prep-1"),
    ("step-2", "Cutting & Washing", ["cutting", "washing", "food_prep"], 3, 2, "prep-1"),
    ("step-3", "Quality Check", ["quality_control", "food_safety"], 1, 1, "prep-2"),
    ("step-4", "Package Assembly", ["packaging", "assembly"], 4, 2, "filling-1"),
    ("step-5", "Final Packaging", ["packaging", "sealing"], 3, 2, "filling-1"),
]

WORKERS = [
    ("emp-1", "Maria Schmidt", ["peeling", "cutting", "food_prep", "quality_control"], "06:00", "14:00", True),
    ("emp-2", "John Weber", ["peeling", "washing", "food_prep"], "06:00", "14:00", True),
    ("emp-3", "Anna Müller", ["cutting", "washing", "food_prep", "quality_control"], "07:00", "15:00", True),
    ("emp-4", "Peter Fischer", ["cutting", "washing", "food_prep"], "08:00", "16:00", True),
    ("emp-5", "Lisa Brown", ["quality_control", "food_safety", "packaging"], "09:00", "17:00", True),
    ("emp-6", "Michael Johnson", ["packaging", "assembly", "sealing"], "09:00", "17:00", True),
    ("emp-7", "Sarah Davis", ["packaging", "sealing", "quality_control"], "10:00", "18:00", False),
    ("emp-8", "Tom Wilson", ["packaging", "assembly"], "13:00", "21:00", True),
    ("emp-9", "Emma Garcia", ["packaging", "sealing", "assembly"], "14:00", "22:00", True),
]

ORDERS = [
    ("order-1", "Mixed Vegetable Salad", 150, "high",
     [("step-1", 1), ("step-2", 2), ("step-3", 3), ("step-4", 4), ("step-5", 5)]),
    ("order-2", "Organic Vegetable Soup", 300, "medium",
     [("step-1", 1), ("step-2", 2), ("step-4", 3), ("step-5", 4)]),
    ("order-3", "Fresh Fruit Juice Mix", 500, "low",
     [("step-2", 1), ("step-3", 2), ("step-4", 3), ("step-5", 4)]),
]


def seed_sample_data(session: Session, day: date) -> int:
    """
    Insert the demo dataset with all orders scheduled on a day.
    
    Returns:
        Number of orders created
    """
    ProductionAreaRepository.bulk_create(session, [
        ProductionArea(id=area_id, name=name, kind=kind, start_time=start, end_time=end)
        for area_id, name, kind, start, end in AREAS
    ])
    ProcessStepRepository.bulk_create(session, [
        ProcessStep(
            id=step_id,
            name=name,
            required_skills=skills,
            time_per_kg=per_kg,
            required_employees=headcount,
            production_area_id=area_id,
        )
        for step_id, name, skills, per_kg, headcount, area_id in PROCESS_STEPS
    ])
    WorkerRepository.bulk_create(session, [
        Worker(
            id=worker_id,
            name=name,
            skills=skills,
            start_time=start,
            end_time=end,
            max_hours=8,
            break_minutes=30,
            is_available=available,
        )
        for worker_id, name, skills, start, end, available in WORKERS
    ])

    created = datetime.combine(day, datetime.min.time())
    for offset, (order_id, product, quantity, priority, steps) in enumerate(ORDERS):
        order = ProductionOrder(
            id=order_id,
            product_name=product,
            total_quantity=quantity,
            priority=priority,
            status="pending",
            scheduled_date=day,
            created_at=created + timedelta(seconds=offset),
        )
        ProductionOrderRepository.create(session, order, steps)

    return len(ORDERS)
