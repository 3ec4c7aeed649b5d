"""Repository classes for data access."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Sequence, Tuple

from sqlalchemy.orm import Session

from .models import (
    OrderProcessStep,
    ProcessStep,
    ProductionAlert,
    ProductionArea,
    ProductionOrder,
    ShiftAssignment,
    Worker,
)


def _day_bounds(day: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(day, time(0, 0))
    return start, start + timedelta(days=1)


class WorkerRepository:
    """Repository for worker data access."""
    
    @staticmethod
    def get_all(session: Session) -> List[Worker]:
        """Get all workers in a stable order."""
        return session.query(Worker).order_by(Worker.id).all()
    
    @staticmethod
    def bulk_create(session: Session, workers: List[Worker]) -> None:
        """Create multiple workers."""
        session.add_all(workers)
        session.commit()


class ProductionAreaRepository:
    """Repository for production area data access."""
    
    @staticmethod
    def get_all(session: Session) -> List[ProductionArea]:
        """Get all production areas."""
        return session.query(ProductionArea).order_by(ProductionArea.id).all()
    
    @staticmethod
    def bulk_create(session: Session, areas: List[ProductionArea]) -> None:
        """Create multiple production areas."""
        session.add_all(areas)
        session.commit()


class ProcessStepRepository:
    """Repository for process-step template data access."""
    
    @staticmethod
    def get_all(session: Session) -> List[ProcessStep]:
        """Get all process-step templates."""
        return session.query(ProcessStep).order_by(ProcessStep.id).all()
    
    @staticmethod
    def bulk_create(session: Session, steps: List[ProcessStep]) -> None:
        """Create multiple process-step templates."""
        session.add_all(steps)
        session.commit()


class ProductionOrderRepository:
    """Repository for production order data access."""
    
    @staticmethod
    def get_by_date(session: Session, day: date) -> List[ProductionOrder]:
        """Get all orders scheduled for a date, in creation order."""
        return (
            session.query(ProductionOrder)
            .filter(ProductionOrder.scheduled_date == day)
            .order_by(ProductionOrder.created_at, ProductionOrder.id)
            .all()
        )
    
    @staticmethod
    def create(
        session: Session,
        order: ProductionOrder,
        steps: Iterable[Tuple[str, int]],
    ) -> ProductionOrder:
        """
        Create an order together with its order steps.
        
        Args:
            session: Database session
            order: Order to create
            steps: (process_step_id, sequence) pairs
        
        Returns:
            The created order
        
        Steps whose template is unknown are not created. Each created step
        carries estimated_duration = time_per_kg * total_quantity.
        """
        if order.total_quantity is None or order.total_quantity <= 0:
            raise ValueError(f"Order quantity must be positive, got {order.total_quantity}")
        
        session.add(order)
        session.flush()
        
        for process_step_id, sequence in steps:
            template = session.get(ProcessStep, process_step_id)
            if template is None:
                continue
            session.add(
                OrderProcessStep(
                    order_id=order.id,
                    process_step_id=process_step_id,
                    sequence=int(sequence),
                    status="pending",
                    estimated_duration=template.time_per_kg * order.total_quantity,
                )
            )
        
        session.commit()
        session.refresh(order)
        return order


class OrderProcessStepRepository:
    """Repository for order step data access."""
    
    @staticmethod
    def get_by_order(session: Session, order_id: str) -> List[OrderProcessStep]:
        """Get steps of one order by sequence."""
        return (
            session.query(OrderProcessStep)
            .filter(OrderProcessStep.order_id == order_id)
            .order_by(OrderProcessStep.sequence)
            .all()
        )
    
    @staticmethod
    def get_by_orders(session: Session, order_ids: Sequence[str]) -> Dict[str, List[OrderProcessStep]]:
        """Get steps for several orders, grouped by order id and sorted by sequence."""
        grouped: Dict[str, List[OrderProcessStep]] = {order_id: [] for order_id in order_ids}
        if not order_ids:
            return grouped
        rows = (
            session.query(OrderProcessStep)
            .filter(OrderProcessStep.order_id.in_(list(order_ids)))
            .order_by(OrderProcessStep.order_id, OrderProcessStep.sequence)
            .all()
        )
        for row in rows:
            grouped[row.order_id].append(row)
        return grouped


class ShiftAssignmentRepository:
    """Repository for shift assignment data access."""
    
    @staticmethod
    def get_by_date(session: Session, day: date) -> List[ShiftAssignment]:
        """Get all assignments starting on a date."""
        start, end = _day_bounds(day)
        return (
            session.query(ShiftAssignment)
            .filter(ShiftAssignment.start_time >= start, ShiftAssignment.start_time < end)
            .order_by(ShiftAssignment.start_time)
            .all()
        )
    
    @staticmethod
    def delete_by_date(session: Session, day: date, commit: bool = True) -> int:
        """Delete all assignments starting on a date. Returns number of deleted rows."""
        start, end = _day_bounds(day)
        count = (
            session.query(ShiftAssignment)
            .filter(ShiftAssignment.start_time >= start, ShiftAssignment.start_time < end)
            .delete(synchronize_session=False)
        )
        if commit:
            session.commit()
        return count


class AlertRepository:
    """Repository for production alerts."""
    
    @staticmethod
    def get_active(session: Session) -> List[ProductionAlert]:
        """Get alerts that have not been dismissed."""
        return (
            session.query(ProductionAlert)
            .filter(ProductionAlert.is_active.is_(True))
            .order_by(ProductionAlert.created_at)
            .all()
        )
    
    @staticmethod
    def create(session: Session, alert_type: str, title: str, message: str, commit: bool = True) -> ProductionAlert:
        """Create a new active alert."""
        alert = ProductionAlert(type=alert_type, title=title, message=message, is_active=True)
        session.add(alert)
        if commit:
            session.commit()
        return alert
    
    @staticmethod
    def dismiss(session: Session, alert_id: str) -> bool:
        """Mark an alert inactive. Returns False if it does not exist."""
        alert = session.get(ProductionAlert, alert_id)
        if alert is None:
            return False
        alert.is_active = False
        session.commit()
        return True
