"""Tests for the scheduling run orchestrator."""

from datetime import datetime

import pytest

from shiftplan.config import SchedulerConfig
from shiftplan.domain.models import OrderProcessStep, ProductionAlert, ShiftAssignment
from shiftplan.domain.repositories import AlertRepository, ShiftAssignmentRepository
from shiftplan.engine.orchestrator import (
    NO_ORDERS_MESSAGE,
    RunState,
    SchedulingEngine,
    build_day_schedule,
)
from shiftplan.io.sample_data import seed_sample_data


def at(hour, minute=0):
    return datetime(2025, 3, 3, hour, minute)


@pytest.fixture
def single_step_plant(plant, db_session):
    """One 100kg order with one preparation step at 2 min/kg."""
    plant.area("prep", "preparation", start_time="06:00")
    plant.step("peel", "prep", ["peeling"], 2)
    plant.worker("w1", ["peeling"], "06:00", "14:00")
    plant.order("o1", 100, ["peel"])
    plant.save(db_session)
    return plant


def test_single_preparation_order(single_step_plant, db_session, day):
    engine = SchedulingEngine(db_session)
    result = engine.generate_schedule(day)

    assert result.feasible is True
    assert result.issues == []
    assert len(result.tasks) == 1
    assert (result.tasks[0].start_time, result.tasks[0].end_time) == (at(6), at(9, 20))
    assert result.state == RunState.DONE
    assert result.as_dict() == {
        "tasks": result.tasks,
        "feasible": True,
        "issues": [],
        "recommendations": result.recommendations,
    }
    assert engine.history == [
        RunState.IDLE,
        RunState.SEQUENCING,
        RunState.SCHEDULING_PREPARATION,
        RunState.SCHEDULING_FILLING,
        RunState.VALIDATING,
        RunState.RECOMMENDING,
        RunState.PERSISTING,
        RunState.DONE,
    ]


def test_assignments_are_persisted(single_step_plant, db_session, day):
    build_day_schedule(db_session, day)

    stored = ShiftAssignmentRepository.get_by_date(db_session, day)
    assert len(stored) == 1
    assert stored[0].worker_id == "w1"
    assert stored[0].order_process_step_id == "o1:peel"
    assert stored[0].status == "scheduled"
    assert (stored[0].start_time, stored[0].end_time) == (at(6), at(9, 20))


def test_rerun_replaces_existing_assignments(single_step_plant, db_session, day):
    build_day_schedule(db_session, day)
    build_day_schedule(db_session, day)

    assert len(ShiftAssignmentRepository.get_by_date(db_session, day)) == 1


def test_persist_can_be_disabled(single_step_plant, db_session, day):
    engine = SchedulingEngine(db_session, SchedulerConfig(persist=False, generate_recommendations=False))
    result = engine.generate_schedule(day)

    assert len(result.tasks) == 1
    assert result.recommendations == []
    assert db_session.query(ShiftAssignment).count() == 0
    assert RunState.PERSISTING not in engine.history
    assert RunState.RECOMMENDING not in engine.history


def test_build_day_schedule_persist_override(single_step_plant, db_session, day):
    cfg = SchedulerConfig(persist=True)
    build_day_schedule(db_session, day, cfg, persist=False)

    assert db_session.query(ShiftAssignment).count() == 0
    assert cfg.persist is True


def test_understaffed_filling_makes_run_infeasible(plant, db_session, day):
    plant.area("prep", "preparation", start_time="06:00")
    plant.area("fill", "filling", end_time="17:00")
    plant.step("wash", "prep", ["washing"], 1)
    plant.step("pack", "fill", ["packaging"], 3, required_employees=2)
    plant.worker("p", ["washing"], "06:00", "14:00")
    plant.worker("f", ["packaging"], "09:00", "17:00")
    plant.order("o1", 100, ["wash", "pack"])
    plant.save(db_session)

    result = build_day_schedule(db_session, day)

    assert result.feasible is False
    assert len(result.issues) == 1
    assert "need 2, found 1" in result.issues[0]
    assert all(t.process_step_id == "wash" for t in result.tasks)
    # placements made before the skipped step are kept
    assert len(ShiftAssignmentRepository.get_by_date(db_session, day)) == 1


def test_no_orders(plant, db_session, day):
    plant.area("prep", "preparation", start_time="06:00")
    plant.worker("w1", ["peeling"])
    plant.save(db_session)

    result = build_day_schedule(db_session, day)

    assert result.feasible is True
    assert result.tasks == []
    assert result.recommendations == [NO_ORDERS_MESSAGE]


def test_missing_template_errors_the_run(single_step_plant, db_session, day):
    db_session.add(
        OrderProcessStep(id="o1:ghost", order_id="o1", process_step_id="ghost", sequence=2, estimated_duration=0)
    )
    db_session.commit()

    engine = SchedulingEngine(db_session)
    result = engine.generate_schedule(day)

    assert result.state == RunState.ERRORED
    assert engine.history[-1] == RunState.ERRORED
    assert result.feasible is False
    assert result.tasks == []
    assert len(result.issues) == 1
    assert result.issues[0].startswith("Scheduling failed:")
    assert "ghost" in result.issues[0]
    assert db_session.query(ShiftAssignment).count() == 0


def test_zero_rate_template_errors_the_run(plant, db_session, day):
    plant.area("prep", "preparation", start_time="06:00")
    plant.step("rinse", "prep", ["washing"], 0)
    plant.worker("w1", ["washing"])
    plant.order("o1", 100, ["rinse"])
    plant.save(db_session)

    result = SchedulingEngine(db_session).generate_schedule(day)

    assert result.state == RunState.ERRORED
    assert result.tasks == []
    assert "rinse" in result.issues[0]
    assert "time_per_kg" in result.issues[0]
    assert db_session.query(ShiftAssignment).count() == 0


def test_alerts_raised_for_issues_and_recommendations(plant, db_session, day):
    plant.area("prep", "preparation", start_time="06:00")
    plant.step("peel", "prep", ["peeling"], 1, required_employees=2, name="Peeling")
    plant.worker("w1", ["peeling"])
    plant.order("o1", 10, ["peel"], product_name="Salad")
    plant.save(db_session)

    result = build_day_schedule(db_session, day, SchedulerConfig(raise_alerts=True))

    alerts = AlertRepository.get_active(db_session)
    warnings = [a for a in alerts if a.type == "warning"]
    infos = [a for a in alerts if a.type == "info"]
    assert sorted(a.message for a in warnings) == sorted(result.issues)
    assert sorted(a.message for a in infos) == sorted(result.recommendations)
    assert infos
    assert all(a.title == "Scheduling Issue" for a in warnings)
    assert all(a.title == "Optimization Suggestion" for a in infos)

    assert AlertRepository.dismiss(db_session, warnings[0].id)
    assert db_session.query(ProductionAlert).filter(ProductionAlert.is_active.is_(False)).count() == 1


@pytest.mark.integration
def test_sample_dataset_invariants(db_session, day):
    seed_sample_data(db_session, day)

    result = build_day_schedule(db_session, day)

    assert result.state == RunState.DONE
    assert result.feasible == (len(result.issues) == 0)
    assert result.tasks

    quantities = {"order-1": 150, "order-2": 300, "order-3": 500}
    per_kg = {"step-1": 2, "step-2": 3, "step-3": 1, "step-4": 4, "step-5": 3}
    for task in result.tasks:
        assert task.end_time > task.start_time
        assert task.duration_minutes == per_kg[task.process_step_id] * quantities[task.order_id]
        assert (task.end_time - task.start_time).total_seconds() == task.duration_minutes * 60
        assert task.worker_id != "emp-7"  # not available

    preparation = [t for t in result.tasks if t.area_kind == "preparation"]
    filling = [t for t in result.tasks if t.area_kind == "filling"]
    assert min(t.start_time for t in preparation) == at(6)
    if filling:
        assert max(t.end_time for t in filling) == at(17)

    names = {"emp-%d" % i: n for i, n in enumerate(
        ["Maria Schmidt", "John Weber", "Anna Müller", "Peter Fischer", "Lisa Brown",
         "Michael Johnson", "Sarah Davis", "Tom Wilson", "Emma Garcia"], start=1)}
    for worker_id, name in names.items():
        mine = sorted((t for t in result.tasks if t.worker_id == worker_id), key=lambda t: t.start_time)
        overlapping = any(b.start_time < a.end_time for a, b in zip(mine, mine[1:]))
        reported = any(i.startswith(f"{name} has overlapping") for i in result.issues)
        assert overlapping == reported


def test_alert_timestamps_are_naive_local_time(db_session):
    before = datetime.now()
    alert = AlertRepository.create(db_session, "info", "Note", "Check the filling room")

    assert alert.created_at.tzinfo is None
    assert before <= alert.created_at <= datetime.now()
