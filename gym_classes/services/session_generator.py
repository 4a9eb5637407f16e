# gym_classes/services/session_generator.py
"""
Session Generator

Turns recurring weekly schedules into dated class sessions.

Generation is idempotent per (schedule, date): dates that already have a
session are reported and left alone, and two generators racing over the same
window are settled by the unique (class_schedule_id, session_date) constraint.
"""

import logging
from datetime import date, timedelta
from typing import Iterator, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from gym_classes.core.exceptions import NotFound, Unavailable
from gym_classes.crud.crud_class_schedule import class_schedule as schedule_crud
from gym_classes.crud.crud_class_session import class_session as session_crud
from gym_classes.crud.crud_class_type import class_type as type_crud
from gym_classes.models.class_schedule import ClassSchedule
from gym_classes.models.class_session import ClassSession
from gym_classes.schemas.class_schedule import GenerationReport
from gym_classes.schemas.class_session import ClassSessionCreate
from gym_classes.utils.clock import js_day_of_week

logger = logging.getLogger(__name__)


def matching_dates(day_of_week: int, from_date: date, to_date: date) -> Iterator[date]:
    """Every date in [from_date, to_date] falling on day_of_week (0 = Sunday)."""
    offset = (day_of_week - js_day_of_week(from_date)) % 7
    current = from_date + timedelta(days=offset)
    while current <= to_date:
        yield current
        current += timedelta(days=7)


class SessionGenerator:
    def generate(
        self, db: Session, *, schedule_id: str, from_date: date, to_date: date
    ) -> GenerationReport:
        """
        Materialize one schedule over an inclusive date window.

        Capacity and professor are copied from the schedule (capacity falls
        back to the class type default) at generation time; later edits to
        the schedule never reach sessions already generated.
        """
        schedule = schedule_crud.get(db, schedule_id)
        if schedule is None:
            raise NotFound("class_schedule", schedule_id)

        report = GenerationReport(schedule_id=schedule_id)

        if not schedule.is_active:
            report.skipped_reason = "schedule inactive"
            logger.info(f"Schedule {schedule_id} is inactive, skipping generation")
            return report
        if not schedule.class_type.is_active:
            report.skipped_reason = "class type inactive"
            logger.info(
                f"Class type {schedule.class_type_id} of schedule {schedule_id} is inactive, skipping generation"
            )
            return report

        try:
            existing = session_crud.get_dates_for_schedule(
                db, schedule_id=schedule_id, from_date=from_date, to_date=to_date
            )
            for session_date in matching_dates(schedule.day_of_week, from_date, to_date):
                if session_date in existing:
                    report.existing_dates.append(session_date)
                    continue

                session = self._insert_once(db, schedule, session_date)
                if session is None:
                    # Another generator got there first
                    report.existing_dates.append(session_date)
                else:
                    report.created_session_ids.append(session.id)

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Generation for schedule {schedule_id} failed: {e}", exc_info=True)
            raise Unavailable(f"Session generation for schedule {schedule_id} failed") from e

        logger.info(
            f"Schedule {schedule_id}: {len(report.created_session_ids)} sessions created, "
            f"{len(report.existing_dates)} already existed ({from_date} .. {to_date})"
        )
        return report

    def _insert_once(
        self, db: Session, schedule: ClassSchedule, session_date: date
    ) -> Optional[ClassSession]:
        savepoint = db.begin_nested()
        try:
            session = session_crud.create(
                db,
                class_type_id=schedule.class_type_id,
                class_schedule_id=schedule.id,
                professor_id=schedule.professor_id,
                session_date=session_date,
                start_time=schedule.start_time,
                end_time=schedule.end_time,
                location=schedule.location,
                max_capacity=schedule.max_capacity or schedule.class_type.max_capacity,
            )
            savepoint.commit()
            return session
        except IntegrityError:
            savepoint.rollback()
            return None

    def generate_all(self, db: Session, *, from_date: date, to_date: date) -> List[GenerationReport]:
        """Run generate for every active schedule. One bad schedule never stops the batch."""
        reports = []
        for schedule in schedule_crud.get_active(db):
            try:
                reports.append(
                    self.generate(db, schedule_id=schedule.id, from_date=from_date, to_date=to_date)
                )
            except (NotFound, Unavailable) as e:
                logger.error(f"Skipping schedule {schedule.id}: {e.message}")
                reports.append(
                    GenerationReport(schedule_id=schedule.id, skipped_reason=e.message)
                )
        return reports

    def create_session(self, db: Session, *, session_in: ClassSessionCreate) -> ClassSession:
        """One-off session outside any schedule (e.g. a workshop)."""
        class_type = type_crud.get(db, session_in.class_type_id)
        if class_type is None:
            raise NotFound("class_type", session_in.class_type_id)

        fields = session_in.model_dump()
        fields["max_capacity"] = session_in.max_capacity or class_type.max_capacity
        try:
            session = session_crud.create(db, **fields)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Could not create session: {e}", exc_info=True)
            raise Unavailable("Session could not be created") from e

        db.refresh(session)
        logger.info(f"Session {session.id} created for {session.session_date} ({class_type.name})")
        return session


session_generator = SessionGenerator()
