from datetime import date, time
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from gym_classes.core.exceptions import (
    ClassTypeInUse,
    InvalidSchedule,
    NotFound,
    ScheduleInUse,
    Unavailable,
)
from gym_classes.schemas.class_schedule import ClassScheduleCreate, ClassScheduleUpdate
from gym_classes.schemas.class_session import ClassSessionCreate
from gym_classes.schemas.class_type import ClassTypeUpdate
from gym_classes.services.class_catalog import class_catalog
from gym_classes.services.session_generator import session_generator
from tests.utils.classes import FUTURE_MONDAY, create_class_type, create_schedule, create_session


class TestClassTypes:
    def test_update_and_list(self, db_session: Session):
        yoga = create_class_type(db_session, name="Yoga")
        create_class_type(db_session, name="Boxing", is_active=False)

        class_catalog.update_class_type(
            db_session, class_type_id=yoga.id, type_in=ClassTypeUpdate(max_capacity=15)
        )

        assert class_catalog.get_class_type(db_session, yoga.id).max_capacity == 15
        assert [t.name for t in class_catalog.list_class_types(db_session)] == ["Boxing", "Yoga"]
        assert [t.name for t in class_catalog.list_class_types(db_session, include_inactive=False)] == ["Yoga"]

    def test_unused_class_type_can_be_deleted(self, db_session: Session):
        class_type = create_class_type(db_session)

        class_catalog.delete_class_type(db_session, class_type_id=class_type.id)

        with pytest.raises(NotFound):
            class_catalog.get_class_type(db_session, class_type.id)

    def test_class_type_in_use_cannot_be_deleted(self, db_session: Session):
        class_type = create_class_type(db_session)
        create_schedule(db_session, class_type=class_type)

        with pytest.raises(ClassTypeInUse):
            class_catalog.delete_class_type(db_session, class_type_id=class_type.id)

    def test_failed_commit_rolls_back_as_unavailable(self, db_session: Session):
        yoga = create_class_type(db_session, name="Yoga", max_capacity=20)
        lost_connection = OperationalError("UPDATE class_types", {}, Exception("server closed the connection"))

        with patch.object(db_session, "commit", side_effect=lost_connection):
            with pytest.raises(Unavailable):
                class_catalog.update_class_type(
                    db_session, class_type_id=yoga.id, type_in=ClassTypeUpdate(max_capacity=5)
                )

        assert class_catalog.get_class_type(db_session, yoga.id).max_capacity == 20


class TestSchedules:
    def test_schedule_needs_existing_class_type(self, db_session: Session):
        with pytest.raises(NotFound):
            class_catalog.create_schedule(
                db_session,
                schedule_in=ClassScheduleCreate(
                    class_type_id="cty_missing", day_of_week=2, start_time=time(7), end_time=time(8)
                ),
            )

    def test_update_rejects_inverted_times(self, db_session: Session):
        schedule = create_schedule(db_session)

        with pytest.raises(InvalidSchedule):
            class_catalog.update_schedule(
                db_session, schedule_id=schedule.id, schedule_in=ClassScheduleUpdate(end_time=time(17, 0))
            )

    def test_list_filters_by_day(self, db_session: Session):
        monday = create_schedule(db_session, day_of_week=1)
        create_schedule(db_session, day_of_week=2)

        assert [s.id for s in class_catalog.list_schedules(db_session, day_of_week=1)] == [monday.id]

    def test_schedule_with_sessions_cannot_be_deleted(self, db_session: Session):
        schedule = create_schedule(db_session, day_of_week=1)
        session_generator.generate(
            db_session, schedule_id=schedule.id, from_date=date(2026, 1, 5), to_date=date(2026, 1, 5)
        )

        with pytest.raises(ScheduleInUse):
            class_catalog.delete_schedule(db_session, schedule_id=schedule.id)

        deactivated = class_catalog.deactivate_schedule(db_session, schedule_id=schedule.id)
        assert deactivated.is_active is False

    def test_unused_schedule_can_be_deleted(self, db_session: Session):
        schedule = create_schedule(db_session)

        class_catalog.delete_schedule(db_session, schedule_id=schedule.id)

        assert class_catalog.list_schedules(db_session, active_only=False) == []


def test_one_off_session_uses_class_type_capacity(db_session: Session):
    class_type = create_class_type(db_session, max_capacity=9)
    session = session_generator.create_session(
        db_session,
        session_in=ClassSessionCreate(
            class_type_id=class_type.id,
            session_date=FUTURE_MONDAY,
            start_time=time(10),
            end_time=time(11),
        ),
    )

    assert session.max_capacity == 9
    assert session.class_schedule_id is None
    assert create_session(db_session, capacity=4).max_capacity == 4
