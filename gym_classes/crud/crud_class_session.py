# gym_classes/crud/crud_class_session.py
"""
Data access for class sessions, including the seat counters.

The counter mutations here never commit. They run inside the caller's
transaction so the seat count always changes together with the enrollment
or waitlist rows it summarizes. Each one is a single conditional UPDATE:
the database checks the capacity and applies the change in one statement.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import and_, update
from sqlalchemy.orm import Session

from gym_classes.constants.class_status import SessionStatus
from gym_classes.core.exceptions import CapacityRaceLost
from gym_classes.models.class_session import ClassSession


class CRUDClassSession:
    """CRUD and counter operations for ClassSession."""

    model = ClassSession

    def get(self, db: Session, id: str) -> Optional[ClassSession]:
        return db.query(ClassSession).filter(ClassSession.id == id).first()

    def get_for_update(self, db: Session, id: str) -> Optional[ClassSession]:
        """
        Read the session row and lock it until the transaction ends.

        Every write that touches the seat count or waitlist positions of a
        session takes this lock first, so writers on one session run one at
        a time while other sessions stay independent.
        """
        return (
            db.query(ClassSession)
            .filter(ClassSession.id == id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_multi_in_range(
        self,
        db: Session,
        *,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        status: Optional[SessionStatus] = None,
        class_type_id: Optional[str] = None,
    ) -> List[ClassSession]:
        query = db.query(ClassSession)
        if from_date:
            query = query.filter(ClassSession.session_date >= from_date)
        if to_date:
            query = query.filter(ClassSession.session_date <= to_date)
        if status:
            query = query.filter(ClassSession.status == status)
        if class_type_id:
            query = query.filter(ClassSession.class_type_id == class_type_id)
        return query.order_by(
            ClassSession.session_date.asc(), ClassSession.start_time.asc()
        ).all()

    def get_dates_for_schedule(
        self, db: Session, *, schedule_id: str, from_date: date, to_date: date
    ) -> set:
        rows = db.query(ClassSession.session_date).filter(
            and_(
                ClassSession.class_schedule_id == schedule_id,
                ClassSession.session_date >= from_date,
                ClassSession.session_date <= to_date,
            )
        ).all()
        return {row[0] for row in rows}

    def get_by_status_until(
        self, db: Session, *, status: SessionStatus, until: date
    ) -> List[ClassSession]:
        return db.query(ClassSession).filter(
            ClassSession.status == status,
            ClassSession.session_date <= until,
        ).all()

    def create(self, db: Session, **fields) -> ClassSession:
        """Stage a new session in the current transaction."""
        session = ClassSession(**fields)
        db.add(session)
        db.flush()
        return session

    # ------------------------------------------------------------------ #
    # Seat counters
    # ------------------------------------------------------------------ #

    def _apply(self, db: Session, statement) -> int:
        db.flush()
        result = db.execute(statement.execution_options(synchronize_session="fetch"))
        return result.rowcount

    def reserve_seat(self, db: Session, *, session_id: str) -> None:
        """
        Take one free seat: count + 1, only while count + held < capacity and
        the session still accepts enrollments.

        Raises CapacityRaceLost when no row was changed.
        """
        changed = self._apply(
            db,
            update(ClassSession)
            .where(
                ClassSession.id == session_id,
                ClassSession.status == SessionStatus.scheduled,
                ClassSession.current_enrollment_count + ClassSession.held_seats
                < ClassSession.max_capacity,
            )
            .values(current_enrollment_count=ClassSession.current_enrollment_count + 1),
        )
        if changed == 0:
            raise CapacityRaceLost(session_id)

    def release_seat(self, db: Session, *, session_id: str) -> None:
        """count - 1 for an enrollment leaving the enrolled/confirmed set."""
        self._apply(
            db,
            update(ClassSession)
            .where(
                ClassSession.id == session_id,
                ClassSession.current_enrollment_count > 0,
            )
            .values(current_enrollment_count=ClassSession.current_enrollment_count - 1),
        )

    def hold_seat(self, db: Session, *, session_id: str) -> None:
        """Reserve a free seat for a notified waitlist entry (held + 1)."""
        changed = self._apply(
            db,
            update(ClassSession)
            .where(
                ClassSession.id == session_id,
                ClassSession.status == SessionStatus.scheduled,
                ClassSession.current_enrollment_count + ClassSession.held_seats
                < ClassSession.max_capacity,
            )
            .values(held_seats=ClassSession.held_seats + 1),
        )
        if changed == 0:
            raise CapacityRaceLost(session_id)

    def release_held_seat(self, db: Session, *, session_id: str) -> None:
        self._apply(
            db,
            update(ClassSession)
            .where(ClassSession.id == session_id, ClassSession.held_seats > 0)
            .values(held_seats=ClassSession.held_seats - 1),
        )

    def claim_held_seat(self, db: Session, *, session_id: str) -> None:
        """Turn a held seat into an enrolled one (held - 1, count + 1)."""
        changed = self._apply(
            db,
            update(ClassSession)
            .where(ClassSession.id == session_id, ClassSession.held_seats > 0)
            .values(
                held_seats=ClassSession.held_seats - 1,
                current_enrollment_count=ClassSession.current_enrollment_count + 1,
            ),
        )
        if changed == 0:
            raise CapacityRaceLost(session_id)

    def set_counters(
        self, db: Session, *, session_id: str, enrolled: int, held: int
    ) -> None:
        self._apply(
            db,
            update(ClassSession)
            .where(ClassSession.id == session_id)
            .values(current_enrollment_count=enrolled, held_seats=held),
        )


# Singleton instance
class_session = CRUDClassSession()
