# gym_classes/schemas/enrollment.py
from enum import Enum
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from gym_classes.constants.class_status import EnrollmentStatus
from .waitlist import WaitlistEntry


class EnrollmentOutcome(str, Enum):
    enrolled = "enrolled"
    waitlisted = "waitlisted"


class Enrollment(BaseModel):
    id: str
    class_session_id: str
    student_id: str
    status: EnrollmentStatus
    waitlist_entry_id: Optional[str] = None
    enrolled_at: datetime
    confirmed_at: Optional[datetime] = None
    checked_in_at: Optional[datetime] = None
    no_show_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    model_config = {"from_attributes": True}


class EnrollRequest(BaseModel):
    # Staff may enroll someone else; students enroll themselves
    student_id: Optional[str] = None


class EnrollmentResult(BaseModel):
    kind: EnrollmentOutcome
    enrollment: Optional[Enrollment] = None
    waitlist_entry: Optional[WaitlistEntry] = None
    position: Optional[int] = None
    message: str


class EnrollmentCancelRequest(BaseModel):
    reason: Optional[str] = None


class ActiveClaims(BaseModel):
    student_id: str
    enrollments: List[Enrollment] = []
    waitlist_entries: List[WaitlistEntry] = []
