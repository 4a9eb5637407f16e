# gym_classes/models/class_schedule.py
import uuid
from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Time, func, text,
)
from sqlalchemy.orm import relationship
from gym_classes.db.base_class import Base


class ClassSchedule(Base):
    """Recurring weekly slot that sessions are generated from."""
    __tablename__ = "class_schedules"

    id = Column(String, primary_key=True, default=lambda: f"csc_{uuid.uuid4().hex[:12]}")
    class_type_id = Column(String, ForeignKey("class_types.id"), nullable=False, index=True)
    professor_id = Column(String, nullable=True)  # No FK - staff profiles live in another service

    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday ... 6 = Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    location = Column(String(100), nullable=True)
    max_capacity = Column(Integer, nullable=True)  # Overrides the class type default
    is_active = Column(Boolean, nullable=False, server_default=text("true"))

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    class_type = relationship("ClassType")

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="check_schedule_day_of_week"),
        CheckConstraint("end_time > start_time", name="check_schedule_time_order"),
        CheckConstraint("max_capacity IS NULL OR max_capacity > 0", name="check_schedule_capacity_positive"),
    )
