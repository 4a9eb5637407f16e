# gym_classes/api/v1/api.py

from fastapi import APIRouter
from gym_classes.api.v1.endpoints import (
    attendance,
    class_schedules,
    class_sessions,
    class_types,
    enrollments,
    waitlist,
)

# This is the main router for the v1 API.
api_router = APIRouter()

api_router.include_router(class_types.router)
api_router.include_router(class_schedules.router)
api_router.include_router(class_sessions.router)
api_router.include_router(enrollments.router)
api_router.include_router(waitlist.router)
api_router.include_router(attendance.router)
