# gym_classes/core/exceptions.py
"""
Errors raised by the scheduling services.

The API layer turns every ClassSchedulingError into an HTTP response through
a single exception handler; nothing here knows about HTTP.
"""


class ClassSchedulingError(Exception):
    """Base class for all expected, caller-facing failures."""

    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ClassSchedulingError):
    code = "not_found"

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransition(ClassSchedulingError):
    code = "invalid_transition"

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(f"Invalid {entity} status transition: {current} -> {target}")
        self.entity = entity
        self.current = current
        self.target = target


class AlreadyClaimed(ClassSchedulingError):
    code = "already_claimed"

    def __init__(self, session_id: str, student_id: str):
        super().__init__(
            f"Student {student_id} already holds an active claim on session {session_id}"
        )
        self.session_id = session_id
        self.student_id = student_id


class SessionNotOpen(ClassSchedulingError):
    code = "session_not_open"

    def __init__(self, session_id: str, status: str):
        super().__init__(f"Session {session_id} is {status} and not accepting enrollments")
        self.session_id = session_id
        self.status = status


class ClassTypeInUse(ClassSchedulingError):
    code = "class_type_in_use"


class ScheduleInUse(ClassSchedulingError):
    code = "schedule_in_use"


class CapacityConflict(ClassSchedulingError):
    code = "capacity_conflict"


class Unavailable(ClassSchedulingError):
    """The data layer failed mid-operation; nothing was applied, retry is safe."""

    code = "unavailable"


class CapacityRaceLost(Exception):
    """
    The conditional seat increment changed no row.

    Internal only: the enrollment engine catches it and places the student
    on the waitlist instead.
    """


class InvalidSchedule(ClassSchedulingError):
    code = "invalid_schedule"
