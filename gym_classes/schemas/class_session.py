# gym_classes/schemas/class_session.py
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime, time

from gym_classes.constants.class_status import SessionStatus
from .class_type import ClassType


class ClassSession(BaseModel):
    id: str
    class_type_id: str
    class_schedule_id: Optional[str] = None
    professor_id: Optional[str] = None
    session_date: date
    start_time: time
    end_time: time
    location: Optional[str] = None
    notes: Optional[str] = None
    max_capacity: int
    current_enrollment_count: int
    held_seats: int
    available_spots: int
    status: SessionStatus
    cancelled_reason: Optional[str] = None
    class_type: Optional[ClassType] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ClassSessionCreate(BaseModel):
    class_type_id: str
    professor_id: Optional[str] = None
    session_date: date
    start_time: time
    end_time: time
    location: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    # Falls back to the class type's default capacity
    max_capacity: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def check_time_order(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class SessionCancelRequest(BaseModel):
    reason: Optional[str] = None


class SessionCapacityUpdate(BaseModel):
    max_capacity: int = Field(..., gt=0)
