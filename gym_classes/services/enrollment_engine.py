# gym_classes/services/enrollment_engine.py
"""
Enrollment Engine

Owns seat accounting for class sessions:
- Enrolling into a free seat, or joining the FIFO waitlist when full
- Cancelling enrollments and promoting the next student in line
- Waitlist withdrawal, offer claims and offer expiry
- Enrollment status changes (confirm, check-in, no-show)
- Staff session lifecycle (start, complete, cancel, resize)

Every write is one transaction that starts by locking the session row.
Seat counters move only through conditional UPDATEs in that same
transaction, so the counter can never disagree with the rows it counts or
exceed the session's capacity, however many requests race on one session.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from gym_classes.constants.class_status import (
    ENROLLMENT_TRANSITIONS,
    SESSION_TRANSITIONS,
    WAITLIST_TRANSITIONS,
    EnrollmentStatus,
    SessionStatus,
    WaitlistStatus,
)
from gym_classes.core.config import settings
from gym_classes.core.exceptions import (
    AlreadyClaimed,
    CapacityConflict,
    CapacityRaceLost,
    ClassSchedulingError,
    InvalidTransition,
    NotFound,
    SessionNotOpen,
    Unavailable,
)
from gym_classes.crud.crud_class_enrollment import class_enrollment as enrollment_crud
from gym_classes.crud.crud_class_session import class_session as session_crud
from gym_classes.crud.crud_class_waitlist import class_waitlist as waitlist_crud
from gym_classes.models.class_enrollment import ClassEnrollment
from gym_classes.models.class_session import ClassSession
from gym_classes.models.class_waitlist import ClassWaitlistEntry
from gym_classes.schemas.enrollment import EnrollmentOutcome
from gym_classes.utils import kafka_helpers
from gym_classes.utils.clock import at, gym_now, utcnow
from gym_classes.utils.kafka_helpers import ClassEvent, publish_class_events

logger = logging.getLogger(__name__)


@dataclass
class EnrollResult:
    kind: EnrollmentOutcome
    enrollment: Optional[ClassEnrollment] = None
    waitlist_entry: Optional[ClassWaitlistEntry] = None

    @property
    def position(self) -> Optional[int]:
        return self.waitlist_entry.position if self.waitlist_entry is not None else None


@dataclass
class CounterDrift:
    session_id: str
    recorded_enrolled: int
    actual_enrolled: int
    recorded_held: int
    actual_held: int


def _check_transition(entity: str, table: Dict, current, target) -> None:
    allowed: FrozenSet = table[current]
    if target not in allowed:
        raise InvalidTransition(entity, current.value, target.value)


class EnrollmentEngine:
    """Capacity, waitlist and enrollment state machine for class sessions."""

    def __init__(
        self,
        *,
        promotion_mode: Optional[str] = None,
        offer_expiry_minutes: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        # None means "read from settings at call time"
        self._promotion_mode = promotion_mode
        self._offer_expiry_minutes = offer_expiry_minutes
        self._clock = clock or gym_now

    @property
    def promotion_mode(self) -> str:
        return self._promotion_mode or settings.WAITLIST_PROMOTION_MODE

    @property
    def offer_expiry_minutes(self) -> Optional[int]:
        if self._offer_expiry_minutes is not None:
            return self._offer_expiry_minutes
        return settings.WAITLIST_OFFER_EXPIRY_MINUTES

    # ========================================
    # Transaction plumbing
    # ========================================

    @contextmanager
    def _transaction(
        self,
        db: Session,
        operation: str,
        on_integrity_error: Optional[Callable[[], ClassSchedulingError]] = None,
    ):
        """
        Commit the whole operation or nothing.

        Domain errors roll back and propagate unchanged. Any data-layer
        failure rolls back and becomes Unavailable, which is safe to retry.
        """
        try:
            yield
            db.commit()
        except ClassSchedulingError:
            db.rollback()
            raise
        except IntegrityError as e:
            db.rollback()
            if on_integrity_error is not None:
                raise on_integrity_error() from e
            logger.error(f"{operation} violated a database constraint: {e}", exc_info=True)
            raise Unavailable(f"{operation} failed; nothing was applied") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"{operation} failed, transaction rolled back: {e}", exc_info=True)
            raise Unavailable(f"{operation} failed; nothing was applied") from e

    def _lock_session(self, db: Session, session_id: str) -> ClassSession:
        session = session_crud.get_for_update(db, session_id)
        if session is None:
            raise NotFound("class_session", session_id)
        return session

    def _session_started(self, session: ClassSession, now: Optional[datetime] = None) -> bool:
        if session.status in (SessionStatus.in_progress, SessionStatus.completed):
            return True
        now = now or self._clock()
        return now >= at(session.session_date, session.start_time)

    def _accepting_seats(self, session: ClassSession) -> bool:
        return session.status == SessionStatus.scheduled and not self._session_started(session)

    def _ensure_open(self, session: ClassSession) -> None:
        """Seats are only handed out before the session starts, whatever the job has recorded."""
        if session.status != SessionStatus.scheduled:
            raise SessionNotOpen(session.id, session.status.value)
        if self._session_started(session):
            raise SessionNotOpen(session.id, SessionStatus.in_progress.value)

    # ========================================
    # Enroll
    # ========================================

    def enroll(self, db: Session, *, session_id: str, student_id: str) -> EnrollResult:
        """
        Claim a seat, or a place in line when the session is full.

        Both outcomes come from one decision under the session lock: the
        conditional seat increment either changes the row (enrolled) or it
        does not (waitlisted), so a free seat is never skipped and a full
        session is never oversold.
        """
        events: List[ClassEvent] = []

        with self._transaction(
            db,
            "enroll",
            on_integrity_error=lambda: AlreadyClaimed(session_id, student_id),
        ):
            session = self._lock_session(db, session_id)
            self._ensure_open(session)

            self._ensure_no_active_claim(db, session_id=session_id, student_id=student_id)

            try:
                session_crud.reserve_seat(db, session_id=session_id)
            except CapacityRaceLost:
                entry = waitlist_crud.append(db, session_id=session_id, student_id=student_id)
                result = EnrollResult(kind=EnrollmentOutcome.waitlisted, waitlist_entry=entry)
                events.append(
                    ClassEvent(
                        kafka_helpers.WAITLIST_JOINED,
                        session_id,
                        student_id,
                        {"waitlistEntryId": entry.id, "position": entry.position},
                    )
                )
            else:
                enrollment = enrollment_crud.create(
                    db, session_id=session_id, student_id=student_id
                )
                result = EnrollResult(kind=EnrollmentOutcome.enrolled, enrollment=enrollment)

        self._refresh(db, result.enrollment, result.waitlist_entry)
        publish_class_events(events)

        if result.kind == EnrollmentOutcome.enrolled:
            logger.info(f"Student {student_id} enrolled in session {session_id}")
        else:
            logger.info(
                f"Session {session_id} full, student {student_id} waitlisted at position {result.position}"
            )
        return result

    def _ensure_no_active_claim(self, db: Session, *, session_id: str, student_id: str) -> None:
        if enrollment_crud.get_active(db, session_id=session_id, student_id=student_id):
            raise AlreadyClaimed(session_id, student_id)
        if waitlist_crud.get_active(db, session_id=session_id, student_id=student_id):
            raise AlreadyClaimed(session_id, student_id)

    # ========================================
    # Cancel enrollment + promotion
    # ========================================

    def cancel_enrollment(
        self, db: Session, *, enrollment_id: str, reason: Optional[str] = None
    ) -> ClassEnrollment:
        """
        Cancel an enrolled/confirmed seat and hand it to the waitlist.

        The decrement and the promotion share one transaction, so the freed
        seat is never visible to a concurrent enroll. Once the session has
        started the seat simply stays empty.
        """
        enrollment = self._get_enrollment(db, enrollment_id)
        events: List[ClassEvent] = []

        with self._transaction(db, "cancel_enrollment"):
            session = self._lock_session(db, enrollment.class_session_id)
            db.refresh(enrollment)

            _check_transition(
                "enrollment", ENROLLMENT_TRANSITIONS, enrollment.status, EnrollmentStatus.cancelled
            )
            enrollment.status = EnrollmentStatus.cancelled
            enrollment.cancelled_at = utcnow()
            enrollment.cancellation_reason = reason
            session_crud.release_seat(db, session_id=session.id)

            events.append(
                ClassEvent(
                    kafka_helpers.ENROLLMENT_CANCELLED,
                    session.id,
                    enrollment.student_id,
                    {"enrollmentId": enrollment.id, "reason": reason},
                )
            )
            if self._accepting_seats(session):
                self._promote(db, session_id=session.id, events=events)

        self._refresh(db, enrollment)
        publish_class_events(events)
        logger.info(f"Enrollment {enrollment_id} cancelled for session {enrollment.class_session_id}")
        return enrollment

    def _promote(self, db: Session, *, session_id: str, events: List[ClassEvent]) -> int:
        """
        Fill free seats from the front of the line.

        Caller holds the session lock. Stops when the line has no waiting
        entries or the session has no free seat. Returns number promoted.
        """
        promoted = 0
        while True:
            entry = waitlist_crud.get_first_waiting(db, session_id=session_id)
            if entry is None:
                break

            if self.promotion_mode == "notify":
                try:
                    session_crud.hold_seat(db, session_id=session_id)
                except CapacityRaceLost:
                    break
                self._notify_entry(entry)
                events.append(
                    ClassEvent(
                        kafka_helpers.WAITLIST_NOTIFIED,
                        session_id,
                        entry.student_id,
                        {
                            "waitlistEntryId": entry.id,
                            "position": entry.position,
                            "offerExpiresAt": entry.offer_expires_at,
                        },
                    )
                )
                logger.info(
                    f"Seat held for waitlist entry {entry.id} (student {entry.student_id}) on session {session_id}"
                )
            else:
                try:
                    session_crud.reserve_seat(db, session_id=session_id)
                except CapacityRaceLost:
                    break
                enrollment = self._convert_entry(db, entry)
                events.append(
                    ClassEvent(
                        kafka_helpers.WAITLIST_PROMOTED,
                        session_id,
                        entry.student_id,
                        {"waitlistEntryId": entry.id, "enrollmentId": enrollment.id},
                    )
                )
                logger.info(
                    f"Promoted student {entry.student_id} from waitlist into session {session_id}"
                )
            promoted += 1
        return promoted

    def _notify_entry(self, entry: ClassWaitlistEntry) -> None:
        _check_transition("waitlist_entry", WAITLIST_TRANSITIONS, entry.status, WaitlistStatus.notified)
        now = utcnow()
        entry.status = WaitlistStatus.notified
        entry.notified_at = now
        if self.offer_expiry_minutes is not None:
            entry.offer_expires_at = now + timedelta(minutes=self.offer_expiry_minutes)

    def _convert_entry(self, db: Session, entry: ClassWaitlistEntry) -> ClassEnrollment:
        """Waitlist entry leaves the line as an enrollment. Seat already accounted for."""
        _check_transition("waitlist_entry", WAITLIST_TRANSITIONS, entry.status, WaitlistStatus.enrolled)
        entry.status = WaitlistStatus.enrolled
        entry.enrolled_at = utcnow()
        enrollment = enrollment_crud.create(
            db,
            session_id=entry.class_session_id,
            student_id=entry.student_id,
            waitlist_entry_id=entry.id,
        )
        waitlist_crud.close_gap(
            db, session_id=entry.class_session_id, vacated_position=entry.position
        )
        return enrollment

    # ========================================
    # Waitlist operations
    # ========================================

    def cancel_waitlist_entry(self, db: Session, *, entry_id: str) -> ClassWaitlistEntry:
        """Withdraw from the line; everyone behind moves up one place."""
        entry = self._get_entry(db, entry_id)
        events: List[ClassEvent] = []

        with self._transaction(db, "cancel_waitlist_entry"):
            session = self._lock_session(db, entry.class_session_id)
            db.refresh(entry)

            _check_transition("waitlist_entry", WAITLIST_TRANSITIONS, entry.status, WaitlistStatus.cancelled)
            was_notified = entry.status == WaitlistStatus.notified
            entry.status = WaitlistStatus.cancelled
            entry.cancelled_at = utcnow()
            moved = waitlist_crud.close_gap(
                db, session_id=session.id, vacated_position=entry.position
            )

            if was_notified:
                session_crud.release_held_seat(db, session_id=session.id)
                if self._accepting_seats(session):
                    self._promote(db, session_id=session.id, events=events)

        self._refresh(db, entry)
        publish_class_events(events)
        logger.info(
            f"Waitlist entry {entry_id} cancelled for session {entry.class_session_id}, {moved} moved up"
        )
        return entry

    def claim_waitlist_offer(self, db: Session, *, entry_id: str) -> ClassEnrollment:
        """A notified student takes the seat held for them."""
        entry = self._get_entry(db, entry_id)

        with self._transaction(db, "claim_waitlist_offer"):
            session = self._lock_session(db, entry.class_session_id)
            db.refresh(entry)

            if entry.status != WaitlistStatus.notified:
                raise InvalidTransition("waitlist_entry", entry.status.value, WaitlistStatus.enrolled.value)
            self._ensure_open(session)

            try:
                session_crud.claim_held_seat(db, session_id=session.id)
            except CapacityRaceLost:
                # No held seat: counters drifted, reconciliation repairs them
                raise Unavailable(f"No held seat on session {session.id} for entry {entry_id}")
            enrollment = self._convert_entry(db, entry)

        self._refresh(db, enrollment)
        logger.info(f"Student {entry.student_id} claimed held seat on session {entry.class_session_id}")
        return enrollment

    def expire_waitlist_offers(self, db: Session, *, now: Optional[datetime] = None) -> int:
        """
        Expire notified entries past their claim window and pass each seat on.

        One transaction per entry, so one failing session does not block the
        others. Returns number of entries expired.
        """
        now = now or utcnow()
        expired = 0

        for candidate in waitlist_crud.get_expired_offers(db, now=now):
            events: List[ClassEvent] = []
            try:
                with self._transaction(db, "expire_waitlist_offer"):
                    session = self._lock_session(db, candidate.class_session_id)
                    db.refresh(candidate)
                    if candidate.status != WaitlistStatus.notified:
                        continue

                    _check_transition(
                        "waitlist_entry", WAITLIST_TRANSITIONS, candidate.status, WaitlistStatus.expired
                    )
                    candidate.status = WaitlistStatus.expired
                    candidate.expired_at = now
                    session_crud.release_held_seat(db, session_id=session.id)
                    waitlist_crud.close_gap(
                        db, session_id=session.id, vacated_position=candidate.position
                    )
                    events.append(
                        ClassEvent(
                            kafka_helpers.WAITLIST_EXPIRED,
                            session.id,
                            candidate.student_id,
                            {"waitlistEntryId": candidate.id},
                        )
                    )
                    if self._accepting_seats(session):
                        self._promote(db, session_id=session.id, events=events)
            except ClassSchedulingError as e:
                logger.warning(f"Could not expire waitlist entry {candidate.id}: {e.message}")
                continue

            expired += 1
            publish_class_events(events)
            logger.info(f"Waitlist offer {candidate.id} expired for student {candidate.student_id}")

        return expired

    # ========================================
    # Enrollment status changes
    # ========================================

    def confirm_enrollment(self, db: Session, *, enrollment_id: str) -> ClassEnrollment:
        """enrolled -> confirmed. Confirming twice is a no-op."""
        enrollment = self._get_enrollment(db, enrollment_id)

        with self._transaction(db, "confirm_enrollment"):
            self._lock_session(db, enrollment.class_session_id)
            db.refresh(enrollment)
            if enrollment.status != EnrollmentStatus.confirmed:
                _check_transition(
                    "enrollment", ENROLLMENT_TRANSITIONS, enrollment.status, EnrollmentStatus.confirmed
                )
                enrollment.status = EnrollmentStatus.confirmed
                enrollment.confirmed_at = utcnow()

        self._refresh(db, enrollment)
        return enrollment

    def check_in(
        self, db: Session, *, enrollment_id: str, now: Optional[datetime] = None
    ) -> ClassEnrollment:
        return self._record_attendance(
            db, enrollment_id=enrollment_id, target=EnrollmentStatus.attended, now=now
        )

    def mark_no_show(
        self, db: Session, *, enrollment_id: str, now: Optional[datetime] = None
    ) -> ClassEnrollment:
        return self._record_attendance(
            db, enrollment_id=enrollment_id, target=EnrollmentStatus.no_show, now=now
        )

    def _record_attendance(
        self,
        db: Session,
        *,
        enrollment_id: str,
        target: EnrollmentStatus,
        now: Optional[datetime],
    ) -> ClassEnrollment:
        """
        Move an enrollment to attended/no_show once the session has started.

        Re-applying the same outcome is a no-op. The enrollment leaves the
        counted set, and a session still marked scheduled is moved to
        in_progress so its seats cannot be resold.
        """
        enrollment = self._get_enrollment(db, enrollment_id)

        with self._transaction(db, f"record_{target.value}"):
            session = self._lock_session(db, enrollment.class_session_id)
            db.refresh(enrollment)

            if enrollment.status == target:
                logger.debug(f"Enrollment {enrollment_id} already {target.value}")
            else:
                if session.status == SessionStatus.cancelled:
                    raise InvalidTransition("class_session", session.status.value, target.value)
                if not self._session_started(session, now):
                    raise InvalidTransition("enrollment", enrollment.status.value, target.value)
                _check_transition("enrollment", ENROLLMENT_TRANSITIONS, enrollment.status, target)

                enrollment.status = target
                if target == EnrollmentStatus.attended:
                    enrollment.checked_in_at = utcnow()
                else:
                    enrollment.no_show_at = utcnow()
                session_crud.release_seat(db, session_id=session.id)

                if session.status == SessionStatus.scheduled:
                    session.status = SessionStatus.in_progress

        self._refresh(db, enrollment)
        logger.info(f"Enrollment {enrollment_id} marked {target.value}")
        return enrollment

    # ========================================
    # Staff session lifecycle
    # ========================================

    def start_session(self, db: Session, *, session_id: str) -> ClassSession:
        return self._transition_session(db, session_id=session_id, target=SessionStatus.in_progress)

    def complete_session(self, db: Session, *, session_id: str) -> ClassSession:
        return self._transition_session(db, session_id=session_id, target=SessionStatus.completed)

    def _transition_session(
        self, db: Session, *, session_id: str, target: SessionStatus
    ) -> ClassSession:
        with self._transaction(db, f"session_{target.value}"):
            session = self._lock_session(db, session_id)
            _check_transition("class_session", SESSION_TRANSITIONS, session.status, target)
            session.status = target

        db.refresh(session)
        logger.info(f"Session {session_id} is now {target.value}")
        return session

    def cancel_session(
        self, db: Session, *, session_id: str, reason: Optional[str] = None
    ) -> ClassSession:
        """
        Cancel a scheduled session. Every active enrollment and waitlist
        entry is cancelled with the same reason and the counters go to zero.
        """
        events: List[ClassEvent] = []

        with self._transaction(db, "cancel_session"):
            session = self._lock_session(db, session_id)
            _check_transition("class_session", SESSION_TRANSITIONS, session.status, SessionStatus.cancelled)

            now = utcnow()
            session.status = SessionStatus.cancelled
            session.cancelled_reason = reason

            for enrollment in enrollment_crud.get_active_by_session(db, session_id=session_id):
                enrollment.status = EnrollmentStatus.cancelled
                enrollment.cancelled_at = now
                enrollment.cancellation_reason = reason
            for entry in waitlist_crud.get_session_waitlist(db, session_id=session_id):
                entry.status = WaitlistStatus.cancelled
                entry.cancelled_at = now
            session_crud.set_counters(db, session_id=session_id, enrolled=0, held=0)

            events.append(
                ClassEvent(kafka_helpers.SESSION_CANCELLED, session_id, data={"reason": reason})
            )

        db.refresh(session)
        publish_class_events(events)
        logger.info(f"Session {session_id} cancelled: {reason}")
        return session

    def update_session_capacity(
        self, db: Session, *, session_id: str, max_capacity: int
    ) -> ClassSession:
        """
        Resize a scheduled session. Shrinking below the occupied seats is
        refused; growing hands the new seats to the waitlist first.
        """
        events: List[ClassEvent] = []

        with self._transaction(db, "update_session_capacity"):
            session = self._lock_session(db, session_id)
            self._ensure_open(session)

            occupied = session.current_enrollment_count + session.held_seats
            if max_capacity < occupied:
                raise CapacityConflict(
                    f"Session {session_id} has {occupied} occupied seats; "
                    f"capacity cannot drop to {max_capacity}"
                )
            session.max_capacity = max_capacity
            self._promote(db, session_id=session_id, events=events)

        db.refresh(session)
        publish_class_events(events)
        logger.info(f"Session {session_id} capacity set to {max_capacity}")
        return session

    def advance_session_statuses(
        self, db: Session, *, now: Optional[datetime] = None
    ) -> Tuple[int, int]:
        """
        Time-driven lifecycle: scheduled -> in_progress once started,
        in_progress -> completed once ended.

        Returns (started, completed).
        """
        now = now or self._clock()
        started = completed = 0

        for candidate in session_crud.get_by_status_until(
            db, status=SessionStatus.scheduled, until=now.date()
        ):
            if now < at(candidate.session_date, candidate.start_time):
                continue
            with self._transaction(db, "advance_session"):
                session = self._lock_session(db, candidate.id)
                if session.status == SessionStatus.scheduled:
                    session.status = SessionStatus.in_progress
                    started += 1

        for candidate in session_crud.get_by_status_until(
            db, status=SessionStatus.in_progress, until=now.date()
        ):
            if now < at(candidate.session_date, candidate.end_time):
                continue
            with self._transaction(db, "advance_session"):
                session = self._lock_session(db, candidate.id)
                if session.status == SessionStatus.in_progress:
                    session.status = SessionStatus.completed
                    completed += 1

        if started or completed:
            logger.info(f"Advanced sessions: {started} started, {completed} completed")
        return started, completed

    def reconcile_enrollment_counts(
        self, db: Session, *, since: Optional[date] = None
    ) -> List[CounterDrift]:
        """
        Recompute seat counters from the rows they summarize and repair any
        drift. Out-of-band backstop; enroll and cancel never rely on it.
        """
        since = since or (self._clock().date() - timedelta(days=7))
        drifts: List[CounterDrift] = []

        for candidate in session_crud.get_multi_in_range(db, from_date=since):
            if candidate.status == SessionStatus.cancelled:
                continue
            with self._transaction(db, "reconcile_enrollment_counts"):
                session = self._lock_session(db, candidate.id)
                actual_enrolled = enrollment_crud.count_active(db, session_id=session.id)
                actual_held = waitlist_crud.count_notified(db, session_id=session.id)
                if (
                    actual_enrolled != session.current_enrollment_count
                    or actual_held != session.held_seats
                ):
                    drift = CounterDrift(
                        session_id=session.id,
                        recorded_enrolled=session.current_enrollment_count,
                        actual_enrolled=actual_enrolled,
                        recorded_held=session.held_seats,
                        actual_held=actual_held,
                    )
                    drifts.append(drift)
                    logger.warning(f"Seat counter drift repaired: {drift}")
                    session_crud.set_counters(
                        db, session_id=session.id, enrolled=actual_enrolled, held=actual_held
                    )
        return drifts

    # ========================================
    # Queries
    # ========================================

    def get_session(self, db: Session, session_id: str) -> ClassSession:
        session = session_crud.get(db, session_id)
        if session is None:
            raise NotFound("class_session", session_id)
        return session

    def list_sessions(
        self,
        db: Session,
        *,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        status: Optional[SessionStatus] = None,
        class_type_id: Optional[str] = None,
    ) -> List[ClassSession]:
        return session_crud.get_multi_in_range(
            db, from_date=from_date, to_date=to_date, status=status, class_type_id=class_type_id
        )

    def list_enrollments(self, db: Session, *, session_id: str) -> List[ClassEnrollment]:
        self.get_session(db, session_id)
        return enrollment_crud.get_by_session(db, session_id=session_id)

    def list_waitlist(self, db: Session, *, session_id: str) -> List[ClassWaitlistEntry]:
        self.get_session(db, session_id)
        return waitlist_crud.get_session_waitlist(db, session_id=session_id)

    def list_my_active_claims(
        self, db: Session, *, student_id: str
    ) -> Tuple[List[ClassEnrollment], List[ClassWaitlistEntry]]:
        return (
            enrollment_crud.get_active_by_student(db, student_id=student_id),
            waitlist_crud.get_active_by_student(db, student_id=student_id),
        )

    def get_enrollment(self, db: Session, enrollment_id: str) -> ClassEnrollment:
        return self._get_enrollment(db, enrollment_id)

    def get_waitlist_entry(self, db: Session, entry_id: str) -> ClassWaitlistEntry:
        return self._get_entry(db, entry_id)

    def _get_enrollment(self, db: Session, enrollment_id: str) -> ClassEnrollment:
        enrollment = enrollment_crud.get(db, enrollment_id)
        if enrollment is None:
            raise NotFound("enrollment", enrollment_id)
        return enrollment

    def _get_entry(self, db: Session, entry_id: str) -> ClassWaitlistEntry:
        entry = waitlist_crud.get(db, entry_id)
        if entry is None:
            raise NotFound("waitlist_entry", entry_id)
        return entry

    @staticmethod
    def _refresh(db: Session, *objects) -> None:
        for obj in objects:
            if obj is not None:
                db.refresh(obj)


# Singleton instance
enrollment_engine = EnrollmentEngine()
