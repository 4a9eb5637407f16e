# gym_classes/models/__init__.py
# Import all models so SQLAlchemy can resolve relationships and
# Base.metadata knows every table.

from gym_classes.db.base_class import Base
from gym_classes.models.class_type import ClassType
from gym_classes.models.class_schedule import ClassSchedule
from gym_classes.models.class_session import ClassSession
from gym_classes.models.class_waitlist import ClassWaitlistEntry
from gym_classes.models.class_enrollment import ClassEnrollment
