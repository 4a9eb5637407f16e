# gym_classes/schemas/waitlist.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from gym_classes.constants.class_status import WaitlistStatus


class WaitlistEntry(BaseModel):
    id: str
    class_session_id: str
    student_id: str
    position: int
    status: WaitlistStatus
    added_at: datetime
    notified_at: Optional[datetime] = None
    offer_expires_at: Optional[datetime] = None
    expired_at: Optional[datetime] = None
    enrolled_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
