# gym_classes/services/attendance_tracker.py
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from gym_classes.constants.class_status import EnrollmentStatus
from gym_classes.models.class_enrollment import ClassEnrollment
from gym_classes.services.enrollment_engine import EnrollmentEngine, enrollment_engine

logger = logging.getLogger(__name__)


class AttendanceTracker:
    """Roll-call for staff: who came, who did not."""

    def __init__(self, engine: Optional[EnrollmentEngine] = None):
        self.engine = engine or enrollment_engine

    def check_in(
        self, db: Session, *, enrollment_id: str, now: Optional[datetime] = None
    ) -> ClassEnrollment:
        return self.engine.check_in(db, enrollment_id=enrollment_id, now=now)

    def mark_no_show(
        self, db: Session, *, enrollment_id: str, now: Optional[datetime] = None
    ) -> ClassEnrollment:
        return self.engine.mark_no_show(db, enrollment_id=enrollment_id, now=now)

    def roster(self, db: Session, *, session_id: str) -> List[ClassEnrollment]:
        """Every enrollment of the session except cancelled ones, oldest first."""
        return [
            enrollment
            for enrollment in self.engine.list_enrollments(db, session_id=session_id)
            if enrollment.status != EnrollmentStatus.cancelled
        ]


attendance_tracker = AttendanceTracker()
