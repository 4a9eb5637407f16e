# gym_classes/crud/crud_class_type.py
from typing import List
from sqlalchemy.orm import Session

from .base import CRUDBase
from gym_classes.models.class_type import ClassType
from gym_classes.models.class_schedule import ClassSchedule
from gym_classes.models.class_session import ClassSession
from gym_classes.schemas.class_type import ClassTypeCreate, ClassTypeUpdate


class CRUDClassType(CRUDBase[ClassType, ClassTypeCreate, ClassTypeUpdate]):
    def get_multi_ordered(self, db: Session, *, include_inactive: bool = True) -> List[ClassType]:
        query = db.query(self.model)
        if not include_inactive:
            query = query.filter(self.model.is_active.is_(True))
        return query.order_by(self.model.name.asc()).all()

    def is_referenced(self, db: Session, *, class_type_id: str) -> bool:
        """True while any schedule or session still points at the class type."""
        has_schedule = db.query(ClassSchedule.id).filter(
            ClassSchedule.class_type_id == class_type_id
        ).first() is not None
        if has_schedule:
            return True
        return db.query(ClassSession.id).filter(
            ClassSession.class_type_id == class_type_id
        ).first() is not None


class_type = CRUDClassType(ClassType)
