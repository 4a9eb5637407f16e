# gym_classes/api/v1/endpoints/waitlist.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gym_classes.api import deps
from gym_classes.schemas.enrollment import Enrollment
from gym_classes.schemas.token import TokenPayload
from gym_classes.schemas.waitlist import WaitlistEntry
from gym_classes.services.enrollment_engine import enrollment_engine

router = APIRouter(prefix="/waitlist", tags=["Waitlist"])


@router.get("/{entry_id}", response_model=WaitlistEntry)
def get_waitlist_entry(
    entry_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    entry = enrollment_engine.get_waitlist_entry(db, entry_id)
    deps.ensure_self_or_staff(current_user, entry.student_id)
    return entry


@router.post("/{entry_id}/cancel", response_model=WaitlistEntry)
def leave_waitlist(
    entry_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Leave the waitlist. Everyone behind moves up one place.

    Leaving while holding an offer releases the held seat to the next in line.
    """
    entry = enrollment_engine.get_waitlist_entry(db, entry_id)
    deps.ensure_self_or_staff(current_user, entry.student_id)
    return enrollment_engine.cancel_waitlist_entry(db, entry_id=entry_id)


@router.post("/{entry_id}/claim", response_model=Enrollment)
def claim_offer(
    entry_id: str,
    db: Session = Depends(deps.get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Take the seat held for a notified waitlist entry.

    **Errors**:
    - 404: Entry not found
    - 409: Entry is not holding an offer (never notified, expired or withdrawn)
    """
    entry = enrollment_engine.get_waitlist_entry(db, entry_id)
    deps.ensure_self_or_staff(current_user, entry.student_id)
    return enrollment_engine.claim_waitlist_offer(db, entry_id=entry_id)
