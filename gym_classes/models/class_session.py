# gym_classes/models/class_session.py
import uuid
from sqlalchemy import (
    CheckConstraint, Column, Date, DateTime, Enum, ForeignKey, Integer, String, Text, Time,
    UniqueConstraint, func,
)
from sqlalchemy.orm import relationship
from gym_classes.constants.class_status import SessionStatus
from gym_classes.db.base_class import Base


class ClassSession(Base):
    """
    One dated occurrence of a class.

    Features:
    - Capacity copied at generation time (never follows later type/schedule edits)
    - current_enrollment_count: cached count of enrolled/confirmed rows, only
      mutated in the same transaction as those rows
    - held_seats: seats reserved for notified waitlist entries
    - Database-level validation (count + held <= capacity)
    """
    __tablename__ = "class_sessions"

    id = Column(String, primary_key=True, default=lambda: f"cls_{uuid.uuid4().hex[:12]}")
    class_type_id = Column(String, ForeignKey("class_types.id"), nullable=False, index=True)
    class_schedule_id = Column(String, ForeignKey("class_schedules.id"), nullable=True, index=True)
    professor_id = Column(String, nullable=True)

    session_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    location = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    max_capacity = Column(Integer, nullable=False)
    current_enrollment_count = Column(Integer, nullable=False, server_default="0", default=0)
    held_seats = Column(Integer, nullable=False, server_default="0", default=0)

    status = Column(
        Enum(
            SessionStatus,
            name="class_session_status",
            native_enum=False,
            length=20,
            validate_strings=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=SessionStatus.scheduled,
        server_default=SessionStatus.scheduled.value,
    )
    cancelled_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    class_type = relationship("ClassType")
    schedule = relationship("ClassSchedule")

    __table_args__ = (
        UniqueConstraint("class_schedule_id", "session_date", name="unique_schedule_session_date"),
        CheckConstraint("max_capacity > 0", name="check_session_capacity_positive"),
        CheckConstraint("current_enrollment_count >= 0", name="check_session_count_positive"),
        CheckConstraint("held_seats >= 0", name="check_session_held_positive"),
        CheckConstraint(
            "current_enrollment_count + held_seats <= max_capacity",
            name="check_session_count_lte_capacity",
        ),
    )

    @property
    def available_spots(self) -> int:
        return max(0, self.max_capacity - self.current_enrollment_count - self.held_seats)
