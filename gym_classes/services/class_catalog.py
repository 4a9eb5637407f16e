# gym_classes/services/class_catalog.py
"""
Class Catalog

Reference data: class types and the weekly schedules built on them. Edits
here never touch sessions that were already generated.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from gym_classes.core.exceptions import ClassTypeInUse, InvalidSchedule, NotFound, ScheduleInUse
from gym_classes.crud.crud_class_schedule import class_schedule as schedule_crud
from gym_classes.crud.crud_class_type import class_type as type_crud
from gym_classes.models.class_schedule import ClassSchedule
from gym_classes.models.class_type import ClassType
from gym_classes.schemas.class_schedule import ClassScheduleCreate, ClassScheduleUpdate
from gym_classes.schemas.class_type import ClassTypeCreate, ClassTypeUpdate

logger = logging.getLogger(__name__)


class ClassCatalog:
    # ---- Class types ----

    def create_class_type(self, db: Session, *, type_in: ClassTypeCreate) -> ClassType:
        class_type = type_crud.create(db, obj_in=type_in)
        logger.info(f"Class type {class_type.id} ({class_type.name}) created")
        return class_type

    def get_class_type(self, db: Session, class_type_id: str) -> ClassType:
        class_type = type_crud.get(db, class_type_id)
        if class_type is None:
            raise NotFound("class_type", class_type_id)
        return class_type

    def list_class_types(self, db: Session, *, include_inactive: bool = True) -> List[ClassType]:
        return type_crud.get_multi_ordered(db, include_inactive=include_inactive)

    def update_class_type(
        self, db: Session, *, class_type_id: str, type_in: ClassTypeUpdate
    ) -> ClassType:
        class_type = self.get_class_type(db, class_type_id)
        return type_crud.update(db, db_obj=class_type, obj_in=type_in)

    def delete_class_type(self, db: Session, *, class_type_id: str) -> None:
        class_type = self.get_class_type(db, class_type_id)
        if type_crud.is_referenced(db, class_type_id=class_type_id):
            raise ClassTypeInUse(
                f"Class type {class_type_id} is used by schedules or sessions; deactivate it instead"
            )
        type_crud.remove(db, db_obj=class_type)
        logger.info(f"Class type {class_type_id} deleted")

    # ---- Schedules ----

    def create_schedule(self, db: Session, *, schedule_in: ClassScheduleCreate) -> ClassSchedule:
        self.get_class_type(db, schedule_in.class_type_id)
        schedule = schedule_crud.create(db, obj_in=schedule_in)
        logger.info(
            f"Schedule {schedule.id} created: day {schedule.day_of_week} at {schedule.start_time}"
        )
        return schedule

    def get_schedule(self, db: Session, schedule_id: str) -> ClassSchedule:
        schedule = schedule_crud.get(db, schedule_id)
        if schedule is None:
            raise NotFound("class_schedule", schedule_id)
        return schedule

    def list_schedules(
        self, db: Session, *, active_only: bool = True, day_of_week: Optional[int] = None
    ) -> List[ClassSchedule]:
        return schedule_crud.get_multi_ordered(db, active_only=active_only, day_of_week=day_of_week)

    def update_schedule(
        self, db: Session, *, schedule_id: str, schedule_in: ClassScheduleUpdate
    ) -> ClassSchedule:
        schedule = self.get_schedule(db, schedule_id)
        update_data = schedule_in.model_dump(exclude_unset=True)
        start = update_data.get("start_time", schedule.start_time)
        end = update_data.get("end_time", schedule.end_time)
        if end <= start:
            raise InvalidSchedule("end_time must be after start_time")
        return schedule_crud.update(db, db_obj=schedule, obj_in=update_data)

    def deactivate_schedule(self, db: Session, *, schedule_id: str) -> ClassSchedule:
        """Stops future generation; sessions already generated are kept as they are."""
        schedule = self.get_schedule(db, schedule_id)
        schedule = schedule_crud.update(db, db_obj=schedule, obj_in={"is_active": False})
        logger.info(f"Schedule {schedule_id} deactivated")
        return schedule

    def delete_schedule(self, db: Session, *, schedule_id: str) -> None:
        schedule = self.get_schedule(db, schedule_id)
        if schedule_crud.has_sessions(db, schedule_id=schedule_id):
            raise ScheduleInUse(
                f"Schedule {schedule_id} has generated sessions; deactivate it instead"
            )
        schedule_crud.remove(db, db_obj=schedule)
        logger.info(f"Schedule {schedule_id} deleted")


class_catalog = ClassCatalog()
