# gym_classes/scheduler.py
"""
Background task scheduler for class sessions.

Uses APScheduler to run periodic jobs for:
- Expiring waitlist offers
- Moving sessions through their time-driven statuses
- Generating upcoming sessions from weekly schedules
- Reconciling seat counters
"""

import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.triggers.cron import CronTrigger
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MISSED

from gym_classes.background_tasks.class_tasks import (
    advance_session_statuses,
    expire_waitlist_offers,
    generate_upcoming_sessions,
    reconcile_enrollment_counts,
)
from gym_classes.core.config import settings

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = None


def _on_job_error(event):
    exc = event.exception
    logger.error(
        "Scheduled job FAILED: job_id=%s error=%s",
        event.job_id, exc,
        exc_info=(type(exc), exc, None) if exc else None,
    )
    if event.traceback:
        logger.error("Traceback for job %s:\n%s", event.job_id, event.traceback)


def _on_job_missed(event):
    logger.warning(
        "Scheduled job MISSED: job_id=%s scheduled_run_time=%s",
        event.job_id,
        event.scheduled_run_time,
    )


def build_scheduler() -> BackgroundScheduler:
    """Scheduler with every class job registered, not yet started."""
    new_scheduler = BackgroundScheduler(
        timezone=settings.GYM_TIMEZONE,
        job_defaults={
            'coalesce': True,  # Combine missed executions
            'max_instances': 1,  # Only one instance of each job at a time
            'misfire_grace_time': 60
        }
    )

    new_scheduler.add_job(
        func=expire_waitlist_offers,
        trigger=IntervalTrigger(minutes=1),
        id='expire_waitlist_offers',
        name='Expire Waitlist Offers',
        replace_existing=True
    )
    logger.info("Scheduled job: expire_waitlist_offers (every 1 minute)")

    new_scheduler.add_job(
        func=advance_session_statuses,
        trigger=IntervalTrigger(minutes=1),
        id='advance_session_statuses',
        name='Advance Session Statuses',
        replace_existing=True
    )
    logger.info("Scheduled job: advance_session_statuses (every 1 minute)")

    # Runs daily at 3 AM gym time, before the first classes
    new_scheduler.add_job(
        func=generate_upcoming_sessions,
        trigger=CronTrigger(hour=3, minute=0),
        id='generate_upcoming_sessions',
        name='Generate Upcoming Class Sessions',
        replace_existing=True
    )
    logger.info("Scheduled job: generate_upcoming_sessions (daily at 3 AM)")

    new_scheduler.add_job(
        func=reconcile_enrollment_counts,
        trigger=IntervalTrigger(hours=1),
        id='reconcile_enrollment_counts',
        name='Reconcile Enrollment Counts',
        replace_existing=True
    )
    logger.info("Scheduled job: reconcile_enrollment_counts (every 1 hour)")

    new_scheduler.add_listener(_on_job_error, EVENT_JOB_ERROR)
    new_scheduler.add_listener(_on_job_missed, EVENT_JOB_MISSED)
    return new_scheduler


def init_scheduler():
    """
    Initialize and start the background scheduler.

    This is called once when the application starts up.
    """
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already initialized")
        return scheduler

    scheduler = build_scheduler()
    scheduler.start()
    logger.info("Background scheduler started successfully")
    return scheduler


def shutdown_scheduler():
    """
    Gracefully shutdown the scheduler.

    This is called when the application shuts down.
    """
    global scheduler

    if scheduler is not None:
        scheduler.shutdown(wait=True)
        logger.info("Background scheduler shutdown complete")
        scheduler = None


def get_scheduler_status():
    """
    Get the current status of all scheduled jobs.

    Returns:
        Dict with scheduler state and job details (next run time, trigger)
    """
    if scheduler is None:
        return {"status": "not_initialized", "jobs": []}

    jobs = []
    for job in scheduler.get_jobs():
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
            "trigger": str(job.trigger)
        })

    return {
        "status": "running" if scheduler.running else "stopped",
        "jobs": jobs
    }
