# gym_classes/api/v1/endpoints/class_sessions.py
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from gym_classes.api import deps
from gym_classes.constants.class_status import SessionStatus
from gym_classes.schemas.class_session import (
    ClassSession,
    ClassSessionCreate,
    SessionCancelRequest,
    SessionCapacityUpdate,
)
from gym_classes.schemas.token import TokenPayload
from gym_classes.schemas.waitlist import WaitlistEntry
from gym_classes.services.enrollment_engine import enrollment_engine
from gym_classes.services.session_generator import session_generator

router = APIRouter(prefix="/class-sessions", tags=["Class Sessions"])


@router.get("", response_model=List[ClassSession])
def list_sessions(
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    status: Optional[SessionStatus] = None,
    class_type_id: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Sessions ordered by date then start time."""
    return enrollment_engine.list_sessions(
        db, from_date=from_date, to_date=to_date, status=status, class_type_id=class_type_id
    )


@router.post("", response_model=ClassSession, status_code=status.HTTP_201_CREATED)
def create_session(
    session_in: ClassSessionCreate,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """One-off session outside any weekly schedule."""
    return session_generator.create_session(db, session_in=session_in)


@router.get("/{session_id}", response_model=ClassSession)
def get_session(
    session_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return enrollment_engine.get_session(db, session_id)


@router.post("/{session_id}/start", response_model=ClassSession)
def start_session(
    session_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return enrollment_engine.start_session(db, session_id=session_id)


@router.post("/{session_id}/complete", response_model=ClassSession)
def complete_session(
    session_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    return enrollment_engine.complete_session(db, session_id=session_id)


@router.post("/{session_id}/cancel", response_model=ClassSession)
def cancel_session(
    session_id: str,
    cancel_in: SessionCancelRequest,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """
    Cancel a scheduled session.

    Every active enrollment and waitlist entry is cancelled with the same
    reason.

    **Errors**:
    - 404: Session not found
    - 409: Session already started, completed or cancelled
    """
    return enrollment_engine.cancel_session(db, session_id=session_id, reason=cancel_in.reason)


@router.patch("/{session_id}/capacity", response_model=ClassSession)
def update_session_capacity(
    session_id: str,
    capacity_in: SessionCapacityUpdate,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """
    Resize a scheduled session. New seats go to the waitlist first.

    **Errors**:
    - 409: Capacity below the seats already taken, or session not scheduled
    """
    return enrollment_engine.update_session_capacity(
        db, session_id=session_id, max_capacity=capacity_in.max_capacity
    )


@router.get("/{session_id}/waitlist", response_model=List[WaitlistEntry])
def list_waitlist(
    session_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Active waitlist entries in line order (position 1 first)."""
    return enrollment_engine.list_waitlist(db, session_id=session_id)
