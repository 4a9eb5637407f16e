# gym_classes/api/v1/endpoints/attendance.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gym_classes.api import deps
from gym_classes.schemas.enrollment import Enrollment
from gym_classes.schemas.token import TokenPayload
from gym_classes.services.attendance_tracker import attendance_tracker

router = APIRouter(tags=["Attendance"])


@router.get("/class-sessions/{session_id}/roster", response_model=List[Enrollment])
def roster(
    session_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return attendance_tracker.roster(db, session_id=session_id)


@router.post("/enrollments/{enrollment_id}/check-in", response_model=Enrollment)
def check_in(
    enrollment_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """Only once the session has started. Checking in twice is a no-op."""
    return attendance_tracker.check_in(db, enrollment_id=enrollment_id)


@router.post("/enrollments/{enrollment_id}/no-show", response_model=Enrollment)
def mark_no_show(
    enrollment_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return attendance_tracker.mark_no_show(db, enrollment_id=enrollment_id)
