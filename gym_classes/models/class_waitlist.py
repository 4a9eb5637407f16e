# gym_classes/models/class_waitlist.py
import uuid
from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import relationship
from gym_classes.constants.class_status import WaitlistStatus
from gym_classes.db.base_class import Base
from gym_classes.utils.clock import utcnow


class ClassWaitlistEntry(Base):
    """
    A place in line for a full session.

    Active entries (waiting, notified) of one session always hold positions
    1..N in added_at order. Entries leaving the line keep their last position
    for history.
    """
    __tablename__ = "class_waitlist"

    id = Column(String, primary_key=True, default=lambda: f"cwl_{uuid.uuid4().hex[:12]}")
    class_session_id = Column(
        String, ForeignKey("class_sessions.id"), nullable=False, index=True
    )
    student_id = Column(String, nullable=False, index=True)

    position = Column(Integer, nullable=False)
    status = Column(
        Enum(
            WaitlistStatus,
            name="class_waitlist_status",
            native_enum=False,
            length=20,
            validate_strings=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=WaitlistStatus.waiting,
        server_default=WaitlistStatus.waiting.value,
    )

    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    notified_at = Column(DateTime(timezone=True), nullable=True)
    offer_expires_at = Column(DateTime(timezone=True), nullable=True)
    expired_at = Column(DateTime(timezone=True), nullable=True)
    enrolled_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    session = relationship("ClassSession")

    __table_args__ = (
        CheckConstraint("position >= 1", name="check_waitlist_position_positive"),
        Index(
            "uq_active_waitlist_session_student",
            "class_session_id",
            "student_id",
            unique=True,
            postgresql_where=text("status IN ('waiting', 'notified')"),
            sqlite_where=text("status IN ('waiting', 'notified')"),
        ),
        Index("idx_class_waitlist_session_status_position", "class_session_id", "status", "position"),
    )
