# gym_classes/api/v1/endpoints/class_schedules.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from gym_classes.api import deps
from gym_classes.schemas.class_schedule import (
    ClassSchedule,
    ClassScheduleCreate,
    ClassScheduleUpdate,
    GenerateSessionsRequest,
    GenerationReport,
)
from gym_classes.schemas.token import TokenPayload
from gym_classes.services.class_catalog import class_catalog
from gym_classes.services.session_generator import session_generator

router = APIRouter(prefix="/class-schedules", tags=["Class Schedules"])


@router.get("", response_model=List[ClassSchedule])
def list_schedules(
    active_only: bool = True,
    day_of_week: Optional[int] = Query(None, ge=0, le=6),
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return class_catalog.list_schedules(db, active_only=active_only, day_of_week=day_of_week)


@router.post("", response_model=ClassSchedule, status_code=status.HTTP_201_CREATED)
def create_schedule(
    schedule_in: ClassScheduleCreate,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return class_catalog.create_schedule(db, schedule_in=schedule_in)


@router.get("/{schedule_id}", response_model=ClassSchedule)
def get_schedule(
    schedule_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return class_catalog.get_schedule(db, schedule_id)


@router.patch("/{schedule_id}", response_model=ClassSchedule)
def update_schedule(
    schedule_id: str,
    schedule_in: ClassScheduleUpdate,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """Edits apply to future generation only; existing sessions keep their values."""
    return class_catalog.update_schedule(db, schedule_id=schedule_id, schedule_in=schedule_in)


@router.post("/{schedule_id}/deactivate", response_model=ClassSchedule)
def deactivate_schedule(
    schedule_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return class_catalog.deactivate_schedule(db, schedule_id=schedule_id)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule(
    schedule_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    class_catalog.delete_schedule(db, schedule_id=schedule_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{schedule_id}/generate", response_model=GenerationReport)
def generate_sessions(
    schedule_id: str,
    window: GenerateSessionsRequest,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """
    Materialize the schedule into dated sessions for an inclusive window.

    Safe to repeat: dates that already have a session are listed in
    `existing_dates` and left untouched.
    """
    return session_generator.generate(
        db, schedule_id=schedule_id, from_date=window.from_date, to_date=window.to_date
    )
