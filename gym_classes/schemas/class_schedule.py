# gym_classes/schemas/class_schedule.py
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, time

from .class_type import ClassType


class ClassScheduleCreate(BaseModel):
    class_type_id: str
    professor_id: Optional[str] = None
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    start_time: time
    end_time: time
    location: Optional[str] = Field(None, max_length=100)
    max_capacity: Optional[int] = Field(None, gt=0)
    is_active: bool = True

    @model_validator(mode="after")
    def check_time_order(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ClassScheduleUpdate(BaseModel):
    professor_id: Optional[str] = None
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: Optional[str] = Field(None, max_length=100)
    max_capacity: Optional[int] = Field(None, gt=0)
    is_active: Optional[bool] = None


class ClassSchedule(BaseModel):
    id: str
    class_type_id: str
    professor_id: Optional[str] = None
    day_of_week: int
    start_time: time
    end_time: time
    location: Optional[str] = None
    max_capacity: Optional[int] = None
    is_active: bool
    class_type: Optional[ClassType] = None

    model_config = {"from_attributes": True}


class GenerateSessionsRequest(BaseModel):
    from_date: date
    to_date: date

    @model_validator(mode="after")
    def check_window(self):
        if self.to_date < self.from_date:
            raise ValueError("to_date must not be before from_date")
        return self


class GenerationReport(BaseModel):
    schedule_id: str
    created_session_ids: List[str] = []
    existing_dates: List[date] = []
    skipped_reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None
