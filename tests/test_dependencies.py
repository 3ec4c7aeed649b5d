"""Tests for the preparation-before-filling dependency rule."""

from datetime import datetime

import pytest

from shiftplan.engine.base import ScheduledTask
from shiftplan.services.dependencies import check_dependencies


@pytest.fixture
def order_view(plant):
    plant.area("prep", "preparation", start_time="06:00")
    plant.area("fill", "filling", end_time="17:00")
    plant.step("peel", "prep", ["peeling"], 1)
    plant.step("cut", "prep", ["cutting"], 1)
    plant.step("pack", "fill", ["packaging"], 1)
    plant.order("o1", 100, ["peel", "cut", "pack"])
    return plant.inputs().orders[0]


def _task_for(view, step_id, order_id=None):
    step = next(s for s in view.steps if s.process_step.id == step_id)
    return ScheduledTask(
        order_id=order_id or view.order_id,
        order_process_step_id=step.order_step.id,
        process_step_id=step_id,
        worker_id="w",
        start_time=datetime(2025, 3, 3, 6),
        end_time=datetime(2025, 3, 3, 7),
        duration_minutes=60,
        production_area_id=step.area_id,
        area_kind=step.area_kind,
    )


def _step(view, step_id):
    return next(s for s in view.steps if s.process_step.id == step_id)


def test_non_filling_steps_are_always_met(order_view):
    assert check_dependencies(order_view, _step(order_view, "peel"), []).met
    assert check_dependencies(order_view, _step(order_view, "cut"), [], strictness="strict").met


def test_loose_unmet_without_preparation_tasks(order_view):
    check = check_dependencies(order_view, _step(order_view, "pack"), [])
    assert not check.met
    assert "Preparation" in check.reason


def test_loose_ignores_other_orders(order_view):
    other = _task_for(order_view, "peel", order_id="someone-else")
    assert not check_dependencies(order_view, _step(order_view, "pack"), [other]).met


def test_loose_met_by_any_preparation_task(order_view):
    # the earliest step is enough, whichever preparation step it was
    tasks = [_task_for(order_view, "peel")]
    assert check_dependencies(order_view, _step(order_view, "pack"), tasks).met


def test_strict_requires_closest_preceding_preparation_step(order_view):
    pack = _step(order_view, "pack")
    only_peel = [_task_for(order_view, "peel")]
    check = check_dependencies(order_view, pack, only_peel, strictness="strict")
    assert not check.met
    assert "cut" in check.reason

    with_cut = [_task_for(order_view, "cut")]
    assert check_dependencies(order_view, pack, with_cut, strictness="strict").met


def test_strict_without_preceding_preparation_step(plant):
    plant.area("prep", "preparation")
    plant.area("fill", "filling")
    plant.step("pack", "fill", ["packaging"], 1)
    plant.step("wash", "prep", ["washing"], 1)
    plant.order("o1", 10, ["pack", "wash"])
    view = plant.inputs().orders[0]
    wash_task = _task_for(view, "wash")
    check = check_dependencies(view, _step(view, "pack"), [wash_task], strictness="strict")
    assert not check.met
    assert check_dependencies(view, _step(view, "pack"), [wash_task], strictness="loose").met


def test_unknown_strictness(order_view):
    with pytest.raises(ValueError):
        check_dependencies(order_view, _step(order_view, "pack"), [], strictness="medium")
