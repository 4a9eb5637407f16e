# gym_classes/crud/crud_class_enrollment.py
from typing import List, Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from gym_classes.constants.class_status import ACTIVE_ENROLLMENT_STATUSES, EnrollmentStatus
from gym_classes.models.class_enrollment import ClassEnrollment


class CRUDClassEnrollment:
    """CRUD operations for ClassEnrollment. Writes stage into the caller's transaction."""

    model = ClassEnrollment

    def get(self, db: Session, id: str) -> Optional[ClassEnrollment]:
        return db.query(ClassEnrollment).filter(ClassEnrollment.id == id).first()

    def get_active(
        self, db: Session, *, session_id: str, student_id: str
    ) -> Optional[ClassEnrollment]:
        """Get the student's enrolled/confirmed row for a session."""
        return db.query(ClassEnrollment).filter(
            and_(
                ClassEnrollment.class_session_id == session_id,
                ClassEnrollment.student_id == student_id,
                ClassEnrollment.status.in_(ACTIVE_ENROLLMENT_STATUSES),
            )
        ).first()

    def get_by_session(
        self, db: Session, *, session_id: str, status: Optional[EnrollmentStatus] = None
    ) -> List[ClassEnrollment]:
        query = db.query(ClassEnrollment).filter(ClassEnrollment.class_session_id == session_id)
        if status:
            query = query.filter(ClassEnrollment.status == status)
        return query.order_by(ClassEnrollment.enrolled_at.asc(), ClassEnrollment.id.asc()).all()

    def get_active_by_session(self, db: Session, *, session_id: str) -> List[ClassEnrollment]:
        return db.query(ClassEnrollment).filter(
            ClassEnrollment.class_session_id == session_id,
            ClassEnrollment.status.in_(ACTIVE_ENROLLMENT_STATUSES),
        ).all()

    def get_active_by_student(self, db: Session, *, student_id: str) -> List[ClassEnrollment]:
        return db.query(ClassEnrollment).filter(
            ClassEnrollment.student_id == student_id,
            ClassEnrollment.status.in_(ACTIVE_ENROLLMENT_STATUSES),
        ).order_by(ClassEnrollment.enrolled_at.desc()).all()

    def count_active(self, db: Session, *, session_id: str) -> int:
        """Full count of enrolled/confirmed rows. Reconciliation only, never the hot path."""
        return db.query(func.count(ClassEnrollment.id)).filter(
            ClassEnrollment.class_session_id == session_id,
            ClassEnrollment.status.in_(ACTIVE_ENROLLMENT_STATUSES),
        ).scalar() or 0

    def create(
        self,
        db: Session,
        *,
        session_id: str,
        student_id: str,
        waitlist_entry_id: Optional[str] = None,
    ) -> ClassEnrollment:
        enrollment = ClassEnrollment(
            class_session_id=session_id,
            student_id=student_id,
            waitlist_entry_id=waitlist_entry_id,
            status=EnrollmentStatus.enrolled,
        )
        db.add(enrollment)
        db.flush()
        return enrollment


# Singleton instance
class_enrollment = CRUDClassEnrollment()
