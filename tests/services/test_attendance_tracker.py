from datetime import datetime

from sqlalchemy.orm import Session

from gym_classes.constants.class_status import EnrollmentStatus
from gym_classes.services.attendance_tracker import AttendanceTracker
from gym_classes.services.enrollment_engine import EnrollmentEngine
from tests.utils.classes import PAST_MONDAY, create_session

BEFORE_CLASS = datetime(2026, 1, 5, 9, 0)
DURING_CLASS = datetime(2026, 1, 5, 18, 10)
engine = EnrollmentEngine(promotion_mode="auto_enroll", clock=lambda: BEFORE_CLASS)
tracker = AttendanceTracker(engine)


def test_roll_call(db_session: Session):
    session = create_session(db_session, capacity=3, session_date=PAST_MONDAY)
    came, missed, dropped = [
        engine.enroll(db_session, session_id=session.id, student_id=s).enrollment
        for s in ("lead_a", "lead_b", "lead_c")
    ]
    engine.cancel_enrollment(db_session, enrollment_id=dropped.id)

    tracker.check_in(db_session, enrollment_id=came.id, now=DURING_CLASS)
    tracker.mark_no_show(db_session, enrollment_id=missed.id, now=DURING_CLASS)

    roster = tracker.roster(db_session, session_id=session.id)
    assert [(e.student_id, e.status) for e in roster] == [
        ("lead_a", EnrollmentStatus.attended),
        ("lead_b", EnrollmentStatus.no_show),
    ]
    assert roster[1].no_show_at is not None
    db_session.refresh(session)
    assert session.current_enrollment_count == 0


def test_mark_no_show_is_idempotent(db_session: Session):
    session = create_session(db_session, capacity=1, session_date=PAST_MONDAY)
    enrollment = engine.enroll(db_session, session_id=session.id, student_id="lead_a").enrollment

    tracker.mark_no_show(db_session, enrollment_id=enrollment.id, now=DURING_CLASS)
    again = tracker.mark_no_show(db_session, enrollment_id=enrollment.id, now=DURING_CLASS)

    assert again.status == EnrollmentStatus.no_show
    db_session.refresh(session)
    assert session.current_enrollment_count == 0
