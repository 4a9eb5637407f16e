from datetime import date, time
from typing import Optional

from sqlalchemy.orm import Session

from gym_classes.models.class_schedule import ClassSchedule
from gym_classes.models.class_session import ClassSession
from gym_classes.models.class_type import ClassType
from gym_classes.schemas.class_schedule import ClassScheduleCreate
from gym_classes.schemas.class_session import ClassSessionCreate
from gym_classes.schemas.class_type import ClassTypeCreate
from gym_classes.services.class_catalog import class_catalog
from gym_classes.services.session_generator import session_generator

# A Monday well in the past: sessions on it have already started
PAST_MONDAY = date(2026, 1, 5)
# A Monday far enough ahead that nothing has started
FUTURE_MONDAY = date(2099, 1, 5)


def create_class_type(
    db: Session, *, name: str = "Spinning", max_capacity: int = 20, is_active: bool = True
) -> ClassType:
    return class_catalog.create_class_type(
        db,
        type_in=ClassTypeCreate(name=name, max_capacity=max_capacity, is_active=is_active),
    )


def create_schedule(
    db: Session,
    *,
    class_type: Optional[ClassType] = None,
    day_of_week: int = 1,
    max_capacity: Optional[int] = None,
    is_active: bool = True,
) -> ClassSchedule:
    class_type = class_type or create_class_type(db)
    return class_catalog.create_schedule(
        db,
        schedule_in=ClassScheduleCreate(
            class_type_id=class_type.id,
            professor_id="prof_1",
            day_of_week=day_of_week,
            start_time=time(18, 0),
            end_time=time(19, 0),
            location="Studio A",
            max_capacity=max_capacity,
            is_active=is_active,
        ),
    )


def create_session(
    db: Session,
    *,
    capacity: int = 2,
    session_date: date = FUTURE_MONDAY,
    start_time: time = time(18, 0),
    end_time: time = time(19, 0),
) -> ClassSession:
    class_type = create_class_type(db)
    return session_generator.create_session(
        db,
        session_in=ClassSessionCreate(
            class_type_id=class_type.id,
            session_date=session_date,
            start_time=start_time,
            end_time=end_time,
            max_capacity=capacity,
        ),
    )
