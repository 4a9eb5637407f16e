"""
Races on one session, with real threads and one database session per thread.

SQLite serializes the writers (BEGIN IMMEDIATE); the assertions are the same
ones PostgreSQL's row lock has to satisfy.
"""
import threading

from sqlalchemy.orm import Session

from gym_classes.constants.class_status import EnrollmentStatus
from gym_classes.core.exceptions import AlreadyClaimed
from gym_classes.crud import class_enrollment, class_session, class_waitlist
from gym_classes.schemas.enrollment import EnrollmentOutcome
from gym_classes.services.enrollment_engine import EnrollmentEngine
from tests.utils.classes import create_session

engine = EnrollmentEngine(promotion_mode="auto_enroll")


def _run_concurrently(session_factory, calls):
    """Start every call at once; collect (result, error) per call in order."""
    barrier = threading.Barrier(len(calls))
    outcomes = [None] * len(calls)

    def worker(index, call):
        db = session_factory()
        try:
            barrier.wait()
            outcomes[index] = (call(db), None)
        except Exception as e:
            outcomes[index] = (None, e)
        finally:
            db.close()

    threads = [threading.Thread(target=worker, args=(i, call)) for i, call in enumerate(calls)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return outcomes


def _enroll_call(session_id, student_id):
    def call(db):
        result = engine.enroll(db, session_id=session_id, student_id=student_id)
        return result.kind, result.position
    return call


def test_last_seat_goes_to_exactly_one_student(db_session: Session, session_factory):
    session_id = create_session(db_session, capacity=1).id
    db_session.close()

    outcomes = _run_concurrently(
        session_factory,
        [_enroll_call(session_id, "lead_a"), _enroll_call(session_id, "lead_b")],
    )

    assert all(error is None for _, error in outcomes)
    kinds = sorted((result for result, _ in outcomes), key=lambda r: r[0].value)
    assert kinds == [(EnrollmentOutcome.enrolled, None), (EnrollmentOutcome.waitlisted, 1)]
    assert class_session.get(db_session, session_id).current_enrollment_count == 1


def test_many_students_never_oversell(db_session: Session, session_factory):
    session_id = create_session(db_session, capacity=2).id
    db_session.close()
    students = [f"lead_{i}" for i in range(10)]

    outcomes = _run_concurrently(session_factory, [_enroll_call(session_id, s) for s in students])

    assert all(error is None for _, error in outcomes)
    results = [result for result, _ in outcomes]
    assert sum(1 for kind, _ in results if kind == EnrollmentOutcome.enrolled) == 2
    positions = sorted(position for kind, position in results if kind == EnrollmentOutcome.waitlisted)
    assert positions == list(range(1, 9))

    assert class_session.get(db_session, session_id).current_enrollment_count == 2
    assert class_enrollment.count_active(db_session, session_id=session_id) == 2
    line = class_waitlist.get_session_waitlist(db_session, session_id=session_id)
    assert [e.position for e in line] == list(range(1, 9))


def test_same_student_twice_gets_one_claim(db_session: Session, session_factory):
    session_id = create_session(db_session, capacity=5).id
    db_session.close()

    outcomes = _run_concurrently(
        session_factory,
        [_enroll_call(session_id, "lead_a"), _enroll_call(session_id, "lead_a")],
    )

    errors = [error for _, error in outcomes if error is not None]
    assert len(errors) == 1
    assert isinstance(errors[0], AlreadyClaimed)
    assert class_enrollment.count_active(db_session, session_id=session_id) == 1
    assert class_session.get(db_session, session_id).current_enrollment_count == 1


def test_freed_seat_goes_to_the_line_not_a_racing_newcomer(db_session: Session, session_factory):
    session = create_session(db_session, capacity=1)
    seat = engine.enroll(db_session, session_id=session.id, student_id="lead_a")
    engine.enroll(db_session, session_id=session.id, student_id="lead_b")
    session_id, enrollment_id = session.id, seat.enrollment.id
    db_session.close()

    def cancel(db):
        return engine.cancel_enrollment(db, enrollment_id=enrollment_id).status

    outcomes = _run_concurrently(session_factory, [cancel, _enroll_call(session_id, "lead_c")])

    assert all(error is None for _, error in outcomes)
    assert outcomes[0][0] == EnrollmentStatus.cancelled
    assert outcomes[1][0][0] == EnrollmentOutcome.waitlisted

    active = class_enrollment.get_active_by_session(db_session, session_id=session_id)
    assert [e.student_id for e in active] == ["lead_b"]
    assert class_session.get(db_session, session_id).current_enrollment_count == 1
    line = class_waitlist.get_session_waitlist(db_session, session_id=session_id)
    assert [(e.student_id, e.position) for e in line] == [("lead_c", 1)]
