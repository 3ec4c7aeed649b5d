"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shiftplan.domain.models import (
    Base,
    OrderProcessStep,
    ProcessStep,
    ProductionArea,
    ProductionOrder,
    Worker,
)
from shiftplan.services.loading import build_order_views
from shiftplan.domain.views import SchedulingInputs
from shiftplan.services.sequencing import sequence_orders

DAY = date(2025, 3, 3)


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


class PlantBuilder:
    """Builds areas, templates, workers and orders for one production day."""

    def __init__(self):
        self.areas = []
        self.steps = []
        self.workers = []
        self.orders = []
        self.order_steps = {}

    def area(self, area_id, kind, start_time=None, end_time=None):
        area = ProductionArea(id=area_id, name=area_id, kind=kind, start_time=start_time, end_time=end_time)
        self.areas.append(area)
        return area

    def step(self, step_id, area_id, skills, time_per_kg, required_employees=1, name=None):
        step = ProcessStep(
            id=step_id,
            name=name or step_id,
            required_skills=list(skills),
            time_per_kg=time_per_kg,
            required_employees=required_employees,
            production_area_id=area_id,
        )
        self.steps.append(step)
        return step

    def worker(self, worker_id, skills, start_time="06:00", end_time="14:00", max_hours=8, is_available=True, name=None):
        worker = Worker(
            id=worker_id,
            name=name or worker_id,
            skills=list(skills),
            start_time=start_time,
            end_time=end_time,
            max_hours=max_hours,
            break_minutes=30,
            is_available=is_available,
        )
        self.workers.append(worker)
        return worker

    def order(self, order_id, quantity, step_ids, priority="medium", product_name=None, day=DAY):
        """Add an order; step_ids get sequence 1..n in the given order."""
        templates = {s.id: s for s in self.steps}
        order = ProductionOrder(
            id=order_id,
            product_name=product_name or order_id,
            total_quantity=quantity,
            priority=priority,
            status="pending",
            scheduled_date=day,
            created_at=datetime(2025, 1, 1) + timedelta(seconds=len(self.orders)),
        )
        self.orders.append(order)
        self.order_steps[order_id] = [
            OrderProcessStep(
                id=f"{order_id}:{step_id}",
                order_id=order_id,
                process_step_id=step_id,
                sequence=seq,
                status="pending",
                estimated_duration=templates[step_id].time_per_kg * quantity if step_id in templates else 0,
            )
            for seq, step_id in enumerate(step_ids, start=1)
        ]
        return order

    def inputs(self, day=DAY, policy="quantity"):
        views = build_order_views(self.orders, self.order_steps, self.steps, self.areas)
        return SchedulingInputs(
            day=day,
            workers=list(self.workers),
            areas=list(self.areas),
            process_steps=list(self.steps),
            orders=sequence_orders(views, policy),
        )

    def save(self, session):
        session.add_all(self.areas)
        session.add_all(self.steps)
        session.add_all(self.workers)
        session.commit()
        session.add_all(self.orders)
        for steps in self.order_steps.values():
            session.add_all(steps)
        session.commit()


@pytest.fixture
def plant():
    """Empty plant builder."""
    return PlantBuilder()


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def day():
    """Production date used by the builders."""
    return DAY
