# gym_classes/schemas/token.py
from pydantic import BaseModel, Field
from typing import List, Optional


class TokenPayload(BaseModel):
    sub: str  # "sub" is the standard claim for subject; here the student (lead) id
    unit_id: Optional[str] = Field(default=None, alias="unitId")
    roles: List[str] = []
    exp: int  # Standard claim for expiration time

    model_config = {
        "populate_by_name": True,  # Allow populating by alias
        "from_attributes": True,
    }

    @property
    def is_staff(self) -> bool:
        return bool({"staff", "manager", "professor"} & set(self.roles))
