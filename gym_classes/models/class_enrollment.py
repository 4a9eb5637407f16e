# gym_classes/models/class_enrollment.py
import uuid
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import relationship
from gym_classes.constants.class_status import EnrollmentStatus
from gym_classes.db.base_class import Base
from gym_classes.utils.clock import utcnow


class ClassEnrollment(Base):
    """
    A student's claim on a seat. Never deleted; cancellations are soft so the
    roster keeps its history.
    """
    __tablename__ = "class_enrollments"

    id = Column(String, primary_key=True, default=lambda: f"cen_{uuid.uuid4().hex[:12]}")
    class_session_id = Column(
        String, ForeignKey("class_sessions.id"), nullable=False, index=True
    )
    student_id = Column(String, nullable=False, index=True)  # Lead id, owned by the CRM
    waitlist_entry_id = Column(String, ForeignKey("class_waitlist.id"), nullable=True)

    status = Column(
        Enum(
            EnrollmentStatus,
            name="class_enrollment_status",
            native_enum=False,
            length=20,
            validate_strings=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=EnrollmentStatus.enrolled,
        server_default=EnrollmentStatus.enrolled.value,
    )

    # Set in Python so same-second enrollments still order correctly
    enrolled_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    no_show_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(Text, nullable=True)

    session = relationship("ClassSession")

    __table_args__ = (
        Index(
            "uq_active_enrollment_session_student",
            "class_session_id",
            "student_id",
            unique=True,
            postgresql_where=text("status IN ('enrolled', 'confirmed')"),
            sqlite_where=text("status IN ('enrolled', 'confirmed')"),
        ),
    )
