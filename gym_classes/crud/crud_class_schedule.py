# gym_classes/crud/crud_class_schedule.py
from typing import List, Optional
from sqlalchemy.orm import Session

from .base import CRUDBase
from gym_classes.models.class_schedule import ClassSchedule
from gym_classes.models.class_session import ClassSession
from gym_classes.schemas.class_schedule import ClassScheduleCreate, ClassScheduleUpdate


class CRUDClassSchedule(CRUDBase[ClassSchedule, ClassScheduleCreate, ClassScheduleUpdate]):
    def get_multi_ordered(
        self, db: Session, *, active_only: bool = True, day_of_week: Optional[int] = None
    ) -> List[ClassSchedule]:
        query = db.query(self.model)
        if active_only:
            query = query.filter(self.model.is_active.is_(True))
        if day_of_week is not None:
            query = query.filter(self.model.day_of_week == day_of_week)
        return query.order_by(self.model.day_of_week.asc(), self.model.start_time.asc()).all()

    def get_active(self, db: Session) -> List[ClassSchedule]:
        return self.get_multi_ordered(db, active_only=True)

    def has_sessions(self, db: Session, *, schedule_id: str) -> bool:
        return db.query(ClassSession.id).filter(
            ClassSession.class_schedule_id == schedule_id
        ).first() is not None


class_schedule = CRUDClassSchedule(ClassSchedule)
