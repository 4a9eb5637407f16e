# gym_classes/constants/class_status.py
"""
Status values and allowed transitions for sessions, enrollments and
waitlist entries.

Every member of each enum has an entry in its transition table, including
terminal states (empty set). A status read from the database that is not a
member fails enum coercion and is rejected at runtime.
"""

from enum import Enum
from typing import Dict, FrozenSet


class SessionStatus(str, Enum):
    scheduled = "scheduled"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class EnrollmentStatus(str, Enum):
    enrolled = "enrolled"
    confirmed = "confirmed"
    attended = "attended"
    no_show = "no_show"
    cancelled = "cancelled"


class WaitlistStatus(str, Enum):
    waiting = "waiting"
    notified = "notified"
    enrolled = "enrolled"
    expired = "expired"
    cancelled = "cancelled"


SESSION_TRANSITIONS: Dict[SessionStatus, FrozenSet[SessionStatus]] = {
    SessionStatus.scheduled: frozenset(
        {SessionStatus.in_progress, SessionStatus.cancelled}
    ),
    SessionStatus.in_progress: frozenset({SessionStatus.completed}),
    SessionStatus.completed: frozenset(),
    SessionStatus.cancelled: frozenset(),
}

ENROLLMENT_TRANSITIONS: Dict[EnrollmentStatus, FrozenSet[EnrollmentStatus]] = {
    EnrollmentStatus.enrolled: frozenset(
        {
            EnrollmentStatus.confirmed,
            EnrollmentStatus.attended,
            EnrollmentStatus.cancelled,
            EnrollmentStatus.no_show,
        }
    ),
    EnrollmentStatus.confirmed: frozenset(
        {
            EnrollmentStatus.attended,
            EnrollmentStatus.cancelled,
            EnrollmentStatus.no_show,
        }
    ),
    EnrollmentStatus.attended: frozenset(),
    EnrollmentStatus.no_show: frozenset(),
    EnrollmentStatus.cancelled: frozenset(),
}

WAITLIST_TRANSITIONS: Dict[WaitlistStatus, FrozenSet[WaitlistStatus]] = {
    WaitlistStatus.waiting: frozenset(
        {WaitlistStatus.notified, WaitlistStatus.enrolled, WaitlistStatus.cancelled}
    ),
    WaitlistStatus.notified: frozenset(
        {WaitlistStatus.enrolled, WaitlistStatus.expired, WaitlistStatus.cancelled}
    ),
    WaitlistStatus.enrolled: frozenset(),
    WaitlistStatus.expired: frozenset(),
    WaitlistStatus.cancelled: frozenset(),
}

# Statuses that hold a seat and count toward current_enrollment_count
ACTIVE_ENROLLMENT_STATUSES = (EnrollmentStatus.enrolled, EnrollmentStatus.confirmed)

# Statuses that hold a place in line
ACTIVE_WAITLIST_STATUSES = (WaitlistStatus.waiting, WaitlistStatus.notified)
