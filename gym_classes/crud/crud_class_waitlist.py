# gym_classes/crud/crud_class_waitlist.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, func, update
from sqlalchemy.orm import Session

from gym_classes.constants.class_status import ACTIVE_WAITLIST_STATUSES, WaitlistStatus
from gym_classes.models.class_waitlist import ClassWaitlistEntry


class CRUDClassWaitlist:
    """
    CRUD operations for the per-session FIFO waitlist.

    Callers hold the session row lock; position arithmetic here assumes no
    other writer is touching the same session.
    """

    model = ClassWaitlistEntry

    def get(self, db: Session, id: str) -> Optional[ClassWaitlistEntry]:
        return db.query(ClassWaitlistEntry).filter(ClassWaitlistEntry.id == id).first()

    def get_active(
        self, db: Session, *, session_id: str, student_id: str
    ) -> Optional[ClassWaitlistEntry]:
        """Get active waitlist entry (waiting or notified)"""
        return db.query(ClassWaitlistEntry).filter(
            and_(
                ClassWaitlistEntry.class_session_id == session_id,
                ClassWaitlistEntry.student_id == student_id,
                ClassWaitlistEntry.status.in_(ACTIVE_WAITLIST_STATUSES),
            )
        ).first()

    def get_session_waitlist(self, db: Session, *, session_id: str) -> List[ClassWaitlistEntry]:
        """Active entries for a session, in line order."""
        return db.query(ClassWaitlistEntry).filter(
            ClassWaitlistEntry.class_session_id == session_id,
            ClassWaitlistEntry.status.in_(ACTIVE_WAITLIST_STATUSES),
        ).order_by(ClassWaitlistEntry.position.asc()).all()

    def get_active_by_student(self, db: Session, *, student_id: str) -> List[ClassWaitlistEntry]:
        return db.query(ClassWaitlistEntry).filter(
            ClassWaitlistEntry.student_id == student_id,
            ClassWaitlistEntry.status.in_(ACTIVE_WAITLIST_STATUSES),
        ).order_by(ClassWaitlistEntry.added_at.desc()).all()

    def get_first_waiting(self, db: Session, *, session_id: str) -> Optional[ClassWaitlistEntry]:
        # populate_existing would discard unflushed status changes on a previous pick
        db.flush()
        return db.query(ClassWaitlistEntry).filter(
            ClassWaitlistEntry.class_session_id == session_id,
            ClassWaitlistEntry.status == WaitlistStatus.waiting,
        ).order_by(ClassWaitlistEntry.position.asc()).populate_existing().first()

    def count_notified(self, db: Session, *, session_id: str) -> int:
        return db.query(func.count(ClassWaitlistEntry.id)).filter(
            ClassWaitlistEntry.class_session_id == session_id,
            ClassWaitlistEntry.status == WaitlistStatus.notified,
        ).scalar() or 0

    def get_expired_offers(self, db: Session, *, now: datetime) -> List[ClassWaitlistEntry]:
        """Notified entries whose claim window has closed."""
        return db.query(ClassWaitlistEntry).filter(
            and_(
                ClassWaitlistEntry.status == WaitlistStatus.notified,
                ClassWaitlistEntry.offer_expires_at.isnot(None),
                ClassWaitlistEntry.offer_expires_at < now,
            )
        ).order_by(ClassWaitlistEntry.offer_expires_at.asc()).all()

    def next_position(self, db: Session, *, session_id: str) -> int:
        """(max active position) + 1, or 1 for an empty line."""
        current = db.query(func.max(ClassWaitlistEntry.position)).filter(
            ClassWaitlistEntry.class_session_id == session_id,
            ClassWaitlistEntry.status.in_(ACTIVE_WAITLIST_STATUSES),
        ).scalar()
        return (current or 0) + 1

    def append(self, db: Session, *, session_id: str, student_id: str) -> ClassWaitlistEntry:
        entry = ClassWaitlistEntry(
            class_session_id=session_id,
            student_id=student_id,
            position=self.next_position(db, session_id=session_id),
            status=WaitlistStatus.waiting,
        )
        db.add(entry)
        db.flush()
        return entry

    def close_gap(self, db: Session, *, session_id: str, vacated_position: int) -> int:
        """
        Shift every active entry behind a vacated position forward by one,
        keeping positions dense and in their original order.

        Returns number of entries moved.
        """
        db.flush()
        result = db.execute(
            update(ClassWaitlistEntry)
            .where(
                ClassWaitlistEntry.class_session_id == session_id,
                ClassWaitlistEntry.status.in_(ACTIVE_WAITLIST_STATUSES),
                ClassWaitlistEntry.position > vacated_position,
            )
            .values(position=ClassWaitlistEntry.position - 1)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount


# Singleton instance
class_waitlist = CRUDClassWaitlist()
