# gym_classes/schemas/class_type.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ClassTypeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, json_schema_extra={"example": "Spinning"})
    description: Optional[str] = None
    duration_minutes: int = Field(60, gt=0)
    max_capacity: int = Field(20, gt=0)
    color: str = Field("#3b82f6", max_length=20)
    is_active: bool = True


class ClassTypeCreate(ClassTypeBase):
    pass


class ClassTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, gt=0)
    max_capacity: Optional[int] = Field(None, gt=0)
    color: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = None


class ClassType(ClassTypeBase):
    id: str
    created_at: datetime

    model_config = {"from_attributes": True}
