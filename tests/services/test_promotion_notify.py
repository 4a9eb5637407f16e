from datetime import timedelta

import pytest
from sqlalchemy.orm import Session

from gym_classes.constants.class_status import EnrollmentStatus, WaitlistStatus
from gym_classes.core.config import settings
from gym_classes.core.exceptions import InvalidTransition
from gym_classes.schemas.enrollment import EnrollmentOutcome
from gym_classes.services.enrollment_engine import EnrollmentEngine
from gym_classes.utils.clock import utcnow
from tests.utils.classes import create_session


@pytest.fixture
def engine():
    return EnrollmentEngine(promotion_mode="notify", offer_expiry_minutes=30)


def _full_session_with_line(db: Session, engine: EnrollmentEngine, *waiting: str):
    session = create_session(db, capacity=1)
    seat = engine.enroll(db, session_id=session.id, student_id="lead_seat")
    line = [engine.enroll(db, session_id=session.id, student_id=s) for s in waiting]
    return session, seat, line


class TestNotifyPromotion:
    def test_cancel_holds_seat_for_first_in_line(self, db_session: Session, engine):
        session, seat, (b, c) = _full_session_with_line(db_session, engine, "lead_b", "lead_c")

        engine.cancel_enrollment(db_session, enrollment_id=seat.enrollment.id)

        db_session.refresh(session)
        assert session.current_enrollment_count == 0
        assert session.held_seats == 1
        assert session.available_spots == 0

        entry = b.waitlist_entry
        db_session.refresh(entry)
        assert entry.status == WaitlistStatus.notified
        assert entry.notified_at is not None
        assert entry.offer_expires_at is not None

        # The held seat is not up for grabs
        walk_in = engine.enroll(db_session, session_id=session.id, student_id="lead_walk_in")
        assert walk_in.kind == EnrollmentOutcome.waitlisted
        assert walk_in.position == 3

    def test_claim_turns_held_seat_into_enrollment(self, db_session: Session, engine):
        session, seat, (b, c) = _full_session_with_line(db_session, engine, "lead_b", "lead_c")
        engine.cancel_enrollment(db_session, enrollment_id=seat.enrollment.id)

        enrollment = engine.claim_waitlist_offer(db_session, entry_id=b.waitlist_entry.id)

        assert enrollment.status == EnrollmentStatus.enrolled
        assert enrollment.student_id == "lead_b"
        assert enrollment.waitlist_entry_id == b.waitlist_entry.id
        db_session.refresh(session)
        assert (session.current_enrollment_count, session.held_seats) == (1, 0)

        line = engine.list_waitlist(db_session, session_id=session.id)
        assert [(e.student_id, e.position) for e in line] == [("lead_c", 1)]

        with pytest.raises(InvalidTransition):
            engine.claim_waitlist_offer(db_session, entry_id=b.waitlist_entry.id)

    def test_declining_an_offer_passes_the_seat_on(self, db_session: Session, engine):
        session, seat, (b, c) = _full_session_with_line(db_session, engine, "lead_b", "lead_c")
        engine.cancel_enrollment(db_session, enrollment_id=seat.enrollment.id)

        engine.cancel_waitlist_entry(db_session, entry_id=b.waitlist_entry.id)

        db_session.refresh(c.waitlist_entry)
        assert c.waitlist_entry.status == WaitlistStatus.notified
        assert c.waitlist_entry.position == 1
        db_session.refresh(session)
        assert session.held_seats == 1

    def test_expired_offer_moves_to_next(self, db_session: Session, engine):
        session, seat, (b, c) = _full_session_with_line(db_session, engine, "lead_b", "lead_c")
        engine.cancel_enrollment(db_session, enrollment_id=seat.enrollment.id)

        assert engine.expire_waitlist_offers(db_session, now=utcnow()) == 0

        expired = engine.expire_waitlist_offers(db_session, now=utcnow() + timedelta(minutes=31))

        assert expired == 1
        db_session.refresh(b.waitlist_entry)
        db_session.refresh(c.waitlist_entry)
        assert b.waitlist_entry.status == WaitlistStatus.expired
        assert b.waitlist_entry.expired_at is not None
        assert c.waitlist_entry.status == WaitlistStatus.notified
        assert c.waitlist_entry.position == 1
        db_session.refresh(session)
        assert (session.current_enrollment_count, session.held_seats) == (0, 1)

    def test_expired_offer_with_empty_line_frees_the_seat(self, db_session: Session, engine):
        session, seat, (b,) = _full_session_with_line(db_session, engine, "lead_b")
        engine.cancel_enrollment(db_session, enrollment_id=seat.enrollment.id)

        engine.expire_waitlist_offers(db_session, now=utcnow() + timedelta(hours=1))

        db_session.refresh(session)
        assert (session.current_enrollment_count, session.held_seats) == (0, 0)
        assert engine.list_waitlist(db_session, session_id=session.id) == []

    def test_offers_without_expiry_never_expire(self, db_session: Session, monkeypatch):
        monkeypatch.setattr(settings, "WAITLIST_OFFER_EXPIRY_MINUTES", None)
        engine = EnrollmentEngine(promotion_mode="notify")
        session, seat, (b,) = _full_session_with_line(db_session, engine, "lead_b")

        engine.cancel_enrollment(db_session, enrollment_id=seat.enrollment.id)
        expired = engine.expire_waitlist_offers(db_session, now=utcnow() + timedelta(days=30))

        assert expired == 0
        db_session.refresh(b.waitlist_entry)
        assert b.waitlist_entry.status == WaitlistStatus.notified
        assert b.waitlist_entry.offer_expires_at is None

    def test_cancelled_session_releases_held_seats(self, db_session: Session, engine):
        session, seat, (b,) = _full_session_with_line(db_session, engine, "lead_b")
        engine.cancel_enrollment(db_session, enrollment_id=seat.enrollment.id)

        cancelled = engine.cancel_session(db_session, session_id=session.id, reason="closed")

        assert (cancelled.current_enrollment_count, cancelled.held_seats) == (0, 0)
        db_session.refresh(b.waitlist_entry)
        assert b.waitlist_entry.status == WaitlistStatus.cancelled
