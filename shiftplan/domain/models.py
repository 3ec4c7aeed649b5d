"""SQLAlchemy models for production shift planning."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, relationship

PREPARATION = "preparation"
FILLING = "filling"
AREA_KINDS = (PREPARATION, FILLING)

PRIORITIES = ("high", "medium", "low")


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Worker(Base):
    """Production worker with skill tags and a working-time model."""
    
    __tablename__ = "workers"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    
    # Working-time model
    start_time = Column(String(5), nullable=False)  # "HH:MM"
    end_time = Column(String(5), nullable=False)  # "HH:MM"
    max_hours = Column(Float, nullable=False, default=8.0)
    break_minutes = Column(Integer, nullable=False, default=30)
    availability_windows = Column(JSON, nullable=True)  # [{"start": "HH:MM", "end": "HH:MM"}], not used for matching
    
    is_available = Column(Boolean, nullable=False, default=True)
    
    assignments = relationship("ShiftAssignment", back_populates="worker")
    
    def __repr__(self) -> str:
        return f"<Worker(id={self.id}, name='{self.name}', {self.start_time}-{self.end_time})>"


class ProductionArea(Base):
    """Preparation room or filling room with its fixed time anchor."""
    
    __tablename__ = "production_areas"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), nullable=False)
    kind = Column(String(20), nullable=False)  # preparation, filling
    start_time = Column(String(5), nullable=True)  # fixed start for preparation rooms
    end_time = Column(String(5), nullable=True)  # fixed end for the filling room
    
    process_steps = relationship("ProcessStep", back_populates="production_area")
    
    def __repr__(self) -> str:
        return f"<ProductionArea(id={self.id}, name='{self.name}', kind='{self.kind}')>"


class ProcessStep(Base):
    """Reusable work template with per-kilogram time cost."""
    
    __tablename__ = "process_steps"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), nullable=False)
    required_skills = Column(JSON, nullable=False, default=list)
    time_per_kg = Column(Float, nullable=False)  # minutes per kg
    required_employees = Column(Integer, nullable=False, default=1)
    production_area_id = Column(String(36), ForeignKey("production_areas.id"), nullable=True)
    
    production_area = relationship("ProductionArea", back_populates="process_steps")
    
    def __repr__(self) -> str:
        return f"<ProcessStep(id={self.id}, name='{self.name}', area={self.production_area_id})>"


class ProductionOrder(Base):
    """A product batch scheduled for one production day."""
    
    __tablename__ = "production_orders"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    product_name = Column(String(200), nullable=False)
    total_quantity = Column(Float, nullable=False)  # kg
    priority = Column(String(10), nullable=False, default="medium")  # high, medium, low
    status = Column(String(20), nullable=False, default="pending")  # pending, in_progress, completed
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    scheduled_date = Column(Date, nullable=False)
    
    steps = relationship("OrderProcessStep", back_populates="order", order_by="OrderProcessStep.sequence")
    
    def __repr__(self) -> str:
        return f"<ProductionOrder(id={self.id}, product='{self.product_name}', qty={self.total_quantity})>"


class OrderProcessStep(Base):
    """One order's instantiation of a process step."""
    
    __tablename__ = "order_process_steps"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    order_id = Column(String(36), ForeignKey("production_orders.id"), nullable=False)
    process_step_id = Column(String(36), ForeignKey("process_steps.id"), nullable=False)
    sequence = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    estimated_duration = Column(Float, nullable=False)  # minutes
    
    order = relationship("ProductionOrder", back_populates="steps")
    assignments = relationship("ShiftAssignment", back_populates="order_process_step")
    
    def __repr__(self) -> str:
        return f"<OrderProcessStep(id={self.id}, order={self.order_id}, step={self.process_step_id}, seq={self.sequence})>"


class ShiftAssignment(Base):
    """Persisted placement of one worker on one order step."""
    
    __tablename__ = "shift_assignments"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    worker_id = Column(String(36), ForeignKey("workers.id"), nullable=False)
    order_process_step_id = Column(String(36), ForeignKey("order_process_steps.id"), nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    actual_start_time = Column(DateTime, nullable=True)
    actual_end_time = Column(DateTime, nullable=True)
    status = Column(String(20), nullable=False, default="scheduled")  # scheduled, in_progress, completed
    
    worker = relationship("Worker", back_populates="assignments")
    order_process_step = relationship("OrderProcessStep", back_populates="assignments")
    
    def __repr__(self) -> str:
        return f"<ShiftAssignment(id={self.id}, worker={self.worker_id}, {self.start_time} - {self.end_time})>"


class ProductionAlert(Base):
    """Warning or informational message shown to planners."""
    
    __tablename__ = "production_alerts"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    type = Column(String(10), nullable=False)  # warning, info, success, error
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    
    def __repr__(self) -> str:
        return f"<ProductionAlert(id={self.id}, type='{self.type}', title='{self.title}')>"
