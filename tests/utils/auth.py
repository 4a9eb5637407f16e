from jose import jwt

from gym_classes.core.config import settings


def get_auth_headers(student_id: str = "lead_test", roles=None) -> dict[str, str]:
    """
    Generates a valid JWT token and authentication headers for a test user.
    """
    payload = {"sub": student_id, "roles": roles or [], "exp": 9999999999}  # High expiration for tests
    token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


def get_staff_headers(staff_id: str = "staff_test") -> dict[str, str]:
    return get_auth_headers(staff_id, roles=["staff"])
