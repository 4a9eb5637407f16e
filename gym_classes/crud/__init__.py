# gym_classes/crud/__init__.py

from .crud_class_type import class_type
from .crud_class_schedule import class_schedule
from .crud_class_session import class_session
from .crud_class_enrollment import class_enrollment
from .crud_class_waitlist import class_waitlist
