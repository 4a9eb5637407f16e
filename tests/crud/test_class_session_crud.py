import pytest
from sqlalchemy.orm import Session

from gym_classes.constants.class_status import SessionStatus
from gym_classes.core.exceptions import CapacityRaceLost
from gym_classes.crud import class_session
from tests.utils.classes import FUTURE_MONDAY, PAST_MONDAY, create_session


def test_reserve_seat_until_full(db_session: Session):
    session = create_session(db_session, capacity=2)

    class_session.reserve_seat(db_session, session_id=session.id)
    class_session.reserve_seat(db_session, session_id=session.id)
    with pytest.raises(CapacityRaceLost):
        class_session.reserve_seat(db_session, session_id=session.id)
    db_session.commit()

    db_session.refresh(session)
    assert session.current_enrollment_count == 2
    assert session.available_spots == 0


def test_held_seats_count_against_capacity(db_session: Session):
    session = create_session(db_session, capacity=2)

    class_session.hold_seat(db_session, session_id=session.id)
    class_session.reserve_seat(db_session, session_id=session.id)
    with pytest.raises(CapacityRaceLost):
        class_session.reserve_seat(db_session, session_id=session.id)

    class_session.claim_held_seat(db_session, session_id=session.id)
    db_session.commit()

    db_session.refresh(session)
    assert session.current_enrollment_count == 2
    assert session.held_seats == 0


def test_reserve_seat_refuses_non_scheduled_session(db_session: Session):
    session = create_session(db_session, capacity=5)
    session.status = SessionStatus.cancelled
    db_session.commit()

    with pytest.raises(CapacityRaceLost):
        class_session.reserve_seat(db_session, session_id=session.id)


def test_release_seat_never_goes_negative(db_session: Session):
    session = create_session(db_session, capacity=1)

    class_session.release_seat(db_session, session_id=session.id)
    class_session.release_held_seat(db_session, session_id=session.id)
    db_session.commit()

    db_session.refresh(session)
    assert session.current_enrollment_count == 0
    assert session.held_seats == 0


def test_get_multi_in_range_orders_by_date_and_time(db_session: Session):
    later = create_session(db_session, session_date=FUTURE_MONDAY)
    earlier = create_session(db_session, session_date=PAST_MONDAY)

    sessions = class_session.get_multi_in_range(db_session, from_date=PAST_MONDAY)

    assert [s.id for s in sessions] == [earlier.id, later.id]
    assert class_session.get_multi_in_range(db_session, to_date=PAST_MONDAY)[0].id == earlier.id
