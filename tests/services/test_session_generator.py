from datetime import date, time

import pytest
from sqlalchemy.orm import Session

from gym_classes.core.exceptions import NotFound
from gym_classes.crud import class_session
from gym_classes.schemas.class_schedule import ClassScheduleUpdate
from gym_classes.schemas.class_type import ClassTypeUpdate
from gym_classes.services.class_catalog import class_catalog
from gym_classes.services.session_generator import matching_dates, session_generator
from tests.utils.classes import create_class_type, create_schedule

# Sunday 4 Jan 2026 .. Saturday 17 Jan 2026: two of every weekday
WINDOW = (date(2026, 1, 4), date(2026, 1, 17))


def _generate(db: Session, schedule_id: str, window=WINDOW):
    return session_generator.generate(
        db, schedule_id=schedule_id, from_date=window[0], to_date=window[1]
    )


class TestMatchingDates:
    def test_sunday_is_zero(self):
        assert list(matching_dates(0, *WINDOW)) == [date(2026, 1, 4), date(2026, 1, 11)]

    def test_window_edges_are_inclusive(self):
        assert list(matching_dates(6, *WINDOW)) == [date(2026, 1, 10), date(2026, 1, 17)]

    def test_window_without_the_weekday(self):
        assert list(matching_dates(3, date(2026, 1, 5), date(2026, 1, 6))) == []


class TestGenerate:
    def test_creates_one_session_per_matching_date(self, db_session: Session):
        class_type = create_class_type(db_session, max_capacity=12)
        schedule = create_schedule(db_session, class_type=class_type, day_of_week=1)

        report = _generate(db_session, schedule.id)

        assert len(report.created_session_ids) == 2
        assert report.existing_dates == []
        assert not report.skipped
        sessions = class_session.get_multi_in_range(db_session, from_date=WINDOW[0], to_date=WINDOW[1])
        assert [s.session_date for s in sessions] == [date(2026, 1, 5), date(2026, 1, 12)]
        for session in sessions:
            assert session.max_capacity == 12
            assert session.professor_id == "prof_1"
            assert session.start_time == time(18, 0)
            assert session.current_enrollment_count == 0

    def test_schedule_capacity_overrides_class_type(self, db_session: Session):
        class_type = create_class_type(db_session, max_capacity=12)
        schedule = create_schedule(db_session, class_type=class_type, max_capacity=8)

        report = _generate(db_session, schedule.id)

        session = class_session.get(db_session, report.created_session_ids[0])
        assert session.max_capacity == 8

    def test_rerun_over_overlapping_window_is_a_no_op(self, db_session: Session):
        schedule = create_schedule(db_session, day_of_week=1)
        _generate(db_session, schedule.id)

        report = _generate(db_session, schedule.id, window=(date(2026, 1, 4), date(2026, 1, 24)))

        assert report.existing_dates == [date(2026, 1, 5), date(2026, 1, 12)]
        assert len(report.created_session_ids) == 1
        assert len(class_session.get_multi_in_range(db_session)) == 3

    def test_capacity_is_copied_at_generation_time(self, db_session: Session):
        class_type = create_class_type(db_session, max_capacity=12)
        schedule = create_schedule(db_session, class_type=class_type)
        report = _generate(db_session, schedule.id)

        class_catalog.update_class_type(
            db_session, class_type_id=class_type.id, type_in=ClassTypeUpdate(max_capacity=30)
        )
        class_catalog.update_schedule(
            db_session, schedule_id=schedule.id, schedule_in=ClassScheduleUpdate(professor_id="prof_2")
        )

        session = class_session.get(db_session, report.created_session_ids[0])
        db_session.refresh(session)
        assert session.max_capacity == 12
        assert session.professor_id == "prof_1"

    def test_inactive_schedule_is_skipped(self, db_session: Session):
        schedule = create_schedule(db_session, is_active=False)

        report = _generate(db_session, schedule.id)

        assert report.skipped
        assert report.skipped_reason == "schedule inactive"
        assert report.created_session_ids == []

    def test_inactive_class_type_is_skipped(self, db_session: Session):
        class_type = create_class_type(db_session, is_active=False)
        schedule = create_schedule(db_session, class_type=class_type)

        report = _generate(db_session, schedule.id)

        assert report.skipped_reason == "class type inactive"
        assert class_session.get_multi_in_range(db_session) == []

    def test_deactivation_keeps_generated_sessions(self, db_session: Session):
        schedule = create_schedule(db_session)
        report = _generate(db_session, schedule.id)

        class_catalog.deactivate_schedule(db_session, schedule_id=schedule.id)
        again = _generate(db_session, schedule.id, window=(date(2026, 1, 18), date(2026, 1, 31)))

        assert again.skipped
        assert len(class_session.get_multi_in_range(db_session)) == len(report.created_session_ids)

    def test_unknown_schedule(self, db_session: Session):
        with pytest.raises(NotFound):
            _generate(db_session, "csc_missing")


class TestGenerateAll:
    def test_generates_every_active_schedule(self, db_session: Session):
        monday = create_schedule(db_session, day_of_week=1)
        friday = create_schedule(db_session, day_of_week=5)
        create_schedule(db_session, day_of_week=3, is_active=False)

        reports = session_generator.generate_all(db_session, from_date=WINDOW[0], to_date=WINDOW[1])

        assert {r.schedule_id for r in reports} == {monday.id, friday.id}
        assert sum(len(r.created_session_ids) for r in reports) == 4
