# gym_classes/background_tasks/class_tasks.py
"""
Periodic jobs for class sessions.

Run by the scheduler:
- expire_waitlist_offers(): every minute
- advance_session_statuses(): every minute
- generate_upcoming_sessions(): daily
- reconcile_enrollment_counts(): hourly

Each job opens its own database session, never raises into the scheduler and
returns True on success so a failing run is visible in the logs only.
"""

import logging
from datetime import timedelta

from gym_classes.core.config import settings
from gym_classes.db.session import SessionLocal
from gym_classes.services.enrollment_engine import enrollment_engine
from gym_classes.services.session_generator import session_generator
from gym_classes.utils.clock import gym_now

logger = logging.getLogger(__name__)


def expire_waitlist_offers():
    """Expire notified waitlist entries whose claim window has closed."""
    db = SessionLocal()
    try:
        expired = enrollment_engine.expire_waitlist_offers(db)
        if expired:
            logger.info(f"Expired {expired} waitlist offers")
        return True
    except Exception as e:
        logger.error(f"Error expiring waitlist offers: {e}", exc_info=True)
        db.rollback()
        return False
    finally:
        db.close()


def advance_session_statuses():
    """Start sessions whose start time passed and complete those that ended."""
    db = SessionLocal()
    try:
        enrollment_engine.advance_session_statuses(db)
        return True
    except Exception as e:
        logger.error(f"Error advancing session statuses: {e}", exc_info=True)
        db.rollback()
        return False
    finally:
        db.close()


def generate_upcoming_sessions():
    """
    Materialize every active schedule from today through
    SESSION_GENERATION_DAYS_AHEAD days out.
    """
    db = SessionLocal()
    try:
        today = gym_now().date()
        to_date = today + timedelta(days=settings.SESSION_GENERATION_DAYS_AHEAD)
        reports = session_generator.generate_all(db, from_date=today, to_date=to_date)

        created = sum(len(report.created_session_ids) for report in reports)
        skipped = [report.schedule_id for report in reports if report.skipped]
        logger.info(
            f"Generated {created} sessions from {len(reports)} schedules ({today} .. {to_date})"
        )
        if skipped:
            logger.info(f"Schedules skipped during generation: {skipped}")
        return True
    except Exception as e:
        logger.error(f"Error generating upcoming sessions: {e}", exc_info=True)
        db.rollback()
        return False
    finally:
        db.close()


def reconcile_enrollment_counts():
    """Repair seat counters that drifted from the enrollment rows."""
    db = SessionLocal()
    try:
        drifts = enrollment_engine.reconcile_enrollment_counts(db)
        if drifts:
            logger.warning(f"Reconciled seat counters on {len(drifts)} sessions")
        return True
    except Exception as e:
        logger.error(f"Error reconciling enrollment counts: {e}", exc_info=True)
        db.rollback()
        return False
    finally:
        db.close()
