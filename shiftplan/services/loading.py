"""Loads a day's scheduling inputs and builds the typed order views."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Mapping, Sequence

from sqlalchemy.orm import Session

from shiftplan.domain.models import OrderProcessStep, ProcessStep, ProductionArea, ProductionOrder
from shiftplan.domain.repositories import (
    OrderProcessStepRepository,
    ProcessStepRepository,
    ProductionAreaRepository,
    ProductionOrderRepository,
    WorkerRepository,
)
from shiftplan.domain.views import OrderStepView, OrderWithSteps, SchedulingInputs
from shiftplan.errors import InvalidTemplateError, MissingTemplateError

logger = logging.getLogger(__name__)


def build_order_views(
    orders: Sequence[ProductionOrder],
    steps_by_order: Mapping[str, Sequence[OrderProcessStep]],
    process_steps: Sequence[ProcessStep],
    areas: Sequence[ProductionArea],
) -> List[OrderWithSteps]:
    """
    Join orders with their steps, templates and areas.
    
    Raises:
        MissingTemplateError: If an order step references an unknown template
        InvalidTemplateError: If a referenced template has time_per_kg <= 0
    """
    templates: Dict[str, ProcessStep] = {s.id: s for s in process_steps}
    area_lookup: Dict[str, ProductionArea] = {a.id: a for a in areas}

    views: List[OrderWithSteps] = []
    for order in orders:
        step_views = []
        for order_step in sorted(steps_by_order.get(order.id, []), key=lambda s: s.sequence):
            template = templates.get(order_step.process_step_id)
            if template is None:
                raise MissingTemplateError(order_step.id, order_step.process_step_id)
            if not template.time_per_kg or template.time_per_kg <= 0:
                raise InvalidTemplateError(template.id, template.time_per_kg)
            step_views.append(
                OrderStepView(
                    order_step=order_step,
                    process_step=template,
                    area=area_lookup.get(template.production_area_id),
                    sequence=order_step.sequence,
                )
            )
        views.append(OrderWithSteps(order=order, steps=tuple(step_views)))
    return views


def load_inputs(session: Session, day: date) -> SchedulingInputs:
    """Read workers, areas, templates and the day's orders from the store."""
    workers = WorkerRepository.get_all(session)
    areas = ProductionAreaRepository.get_all(session)
    process_steps = ProcessStepRepository.get_all(session)
    orders = ProductionOrderRepository.get_by_date(session, day)
    steps_by_order = OrderProcessStepRepository.get_by_orders(session, [o.id for o in orders])

    logger.info(
        "Loaded %d workers, %d areas, %d process steps, %d orders for %s",
        len(workers), len(areas), len(process_steps), len(orders), day,
    )
    return SchedulingInputs(
        day=day,
        workers=workers,
        areas=areas,
        process_steps=process_steps,
        orders=build_order_views(orders, steps_by_order, process_steps, areas),
    )
