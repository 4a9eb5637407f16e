# gym_classes/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from gym_classes.api.v1.api import api_router
from gym_classes.core.config import settings
from gym_classes.core.exceptions import (
    AlreadyClaimed,
    CapacityConflict,
    ClassSchedulingError,
    ClassTypeInUse,
    InvalidSchedule,
    InvalidTransition,
    NotFound,
    ScheduleInUse,
    SessionNotOpen,
    Unavailable,
)
from gym_classes.core.kafka_producer import close_kafka_producer
from gym_classes.core.limiter import limiter
from gym_classes.core.logging_config import setup_logging
from gym_classes.scheduler import init_scheduler, shutdown_scheduler

setup_logging()
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NotFound: 404,
    InvalidTransition: 409,
    AlreadyClaimed: 409,
    SessionNotOpen: 409,
    ClassTypeInUse: 409,
    ScheduleInUse: 409,
    CapacityConflict: 409,
    InvalidSchedule: 422,
    Unavailable: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    if settings.SCHEDULER_ENABLED:
        init_scheduler()
    yield
    logger.info("Application shutting down...")
    shutdown_scheduler()
    close_kafka_producer()


app = FastAPI(
    title="Gym Class Scheduling Service",
    version="1.0.0",
    description="""
        **Gym Class Scheduling Service**

        Seats, waitlists and attendance for the gym's group classes.

        ## Features

        * **Catalog**: Class types and weekly schedules
        * **Session Generation**: Dated sessions materialized from schedules
        * **Enrollment**: Capacity-safe enrollment with a FIFO waitlist
        * **Attendance**: Check-in and no-show tracking once a class starts

        ## Authentication

        All endpoints require JWT authentication via the `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(ClassSchedulingError)
async def class_scheduling_error_handler(request: Request, exc: ClassSchedulingError):
    status_code = ERROR_STATUS.get(type(exc), 400)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


origins = [
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "Gym Class Scheduling Service is running"}
