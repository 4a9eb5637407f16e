# gym_classes/api/v1/endpoints/enrollments.py
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from gym_classes.api import deps
from gym_classes.core.config import settings
from gym_classes.core.limiter import limiter
from gym_classes.schemas.enrollment import (
    ActiveClaims,
    Enrollment,
    EnrollmentCancelRequest,
    EnrollmentOutcome,
    EnrollmentResult,
    EnrollRequest,
)
from gym_classes.schemas.token import TokenPayload
from gym_classes.schemas.waitlist import WaitlistEntry
from gym_classes.services.enrollment_engine import EnrollResult, enrollment_engine

router = APIRouter(tags=["Enrollments"])
logger = logging.getLogger(__name__)


def _to_response(result: EnrollResult) -> EnrollmentResult:
    if result.kind == EnrollmentOutcome.enrolled:
        message = "Enrolled"
    else:
        message = f"Class is full; you are number {result.position} on the waitlist"
    return EnrollmentResult(
        kind=result.kind,
        enrollment=Enrollment.model_validate(result.enrollment) if result.enrollment else None,
        waitlist_entry=(
            WaitlistEntry.model_validate(result.waitlist_entry) if result.waitlist_entry else None
        ),
        position=result.position,
        message=message,
    )


@router.post(
    "/class-sessions/{session_id}/enrollments",
    response_model=EnrollmentResult,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.ENROLL_RATE_LIMIT)
def enroll(
    session_id: str,
    request: Request,  # Required for rate limiting
    enroll_in: Optional[EnrollRequest] = None,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Enroll in a class session, or join its waitlist when it is full.

    Students enroll themselves; staff may pass `student_id` to enroll
    someone else.

    **Errors**:
    - 404: Session not found
    - 409: Session not open, or the student already has a seat or a place in line
    """
    student_id = current_user.sub
    if enroll_in is not None and enroll_in.student_id:
        student_id = enroll_in.student_id
    deps.ensure_self_or_staff(current_user, student_id)

    result = enrollment_engine.enroll(db, session_id=session_id, student_id=student_id)
    return _to_response(result)


@router.get("/class-sessions/{session_id}/enrollments", response_model=List[Enrollment])
def list_enrollments(
    session_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.require_staff),
):
    """Every enrollment of the session, oldest first, cancelled ones included."""
    return enrollment_engine.list_enrollments(db, session_id=session_id)


@router.get("/enrollments/{enrollment_id}", response_model=Enrollment)
def get_enrollment(
    enrollment_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    enrollment = enrollment_engine.get_enrollment(db, enrollment_id)
    deps.ensure_self_or_staff(current_user, enrollment.student_id)
    return enrollment


@router.post("/enrollments/{enrollment_id}/cancel", response_model=Enrollment)
def cancel_enrollment(
    enrollment_id: str,
    cancel_in: Optional[EnrollmentCancelRequest] = None,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Give up a seat. The first student on the waitlist is promoted in the
    same transaction.
    """
    enrollment = enrollment_engine.get_enrollment(db, enrollment_id)
    deps.ensure_self_or_staff(current_user, enrollment.student_id)
    reason = cancel_in.reason if cancel_in else None
    return enrollment_engine.cancel_enrollment(db, enrollment_id=enrollment_id, reason=reason)


@router.post("/enrollments/{enrollment_id}/confirm", response_model=Enrollment)
def confirm_enrollment(
    enrollment_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    enrollment = enrollment_engine.get_enrollment(db, enrollment_id)
    deps.ensure_self_or_staff(current_user, enrollment.student_id)
    return enrollment_engine.confirm_enrollment(db, enrollment_id=enrollment_id)


@router.get("/me/claims", response_model=ActiveClaims)
def my_active_claims(
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Seats and waitlist places the caller currently holds."""
    return _claims(db, current_user.sub)


@router.get("/students/{student_id}/claims", response_model=ActiveClaims)
def student_active_claims(
    student_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.ensure_self_or_staff(current_user, student_id)
    return _claims(db, student_id)


def _claims(db: Session, student_id: str) -> ActiveClaims:
    enrollments, entries = enrollment_engine.list_my_active_claims(db, student_id=student_id)
    return ActiveClaims(
        student_id=student_id,
        enrollments=[Enrollment.model_validate(e) for e in enrollments],
        waitlist_entries=[WaitlistEntry.model_validate(w) for w in entries],
    )
