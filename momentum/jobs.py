import logging

import pytz
from apscheduler.schedulers.background import BackgroundScheduler

from .config import settings
from .store import GoalStore

log = logging.getLogger(__name__)

def _tz():
    return pytz.timezone(settings.timezone) if settings.timezone else None  # None: host local zone

def refresh_best_streaks(store: GoalStore) -> int:
    # don't let one bad run kill the scheduler
    try:
        raised = store.refresh_all()
    except Exception:
        log.exception("[jobs] best-streak refresh failed")
        return 0
    log.info("[jobs] best-streak refresh: %d goals raised", raised)
    return raised

def build_scheduler(store: GoalStore) -> BackgroundScheduler:
    scheduler = BackgroundScheduler(timezone=_tz())
    scheduler.add_job(
        refresh_best_streaks, "cron",
        args=[store],
        hour=settings.refresh_hour, minute=settings.refresh_minute,
        id="refresh_best_streaks", replace_existing=True,
    )
    return scheduler

def start_scheduler(store: GoalStore) -> BackgroundScheduler:
    scheduler = build_scheduler(store)
    scheduler.start()
    log.info("[jobs] scheduler started, refresh at %02d:%02d", settings.refresh_hour, settings.refresh_minute)
    return scheduler
