from apscheduler.schedulers.asyncio import AsyncIOScheduler
from tracker.core.jobs import refresh_session_job
import logging

logger = logging.getLogger(__name__)


def create_scheduler(auth, refresh_minutes: int) -> AsyncIOScheduler:
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        refresh_session_job, 'interval', minutes=refresh_minutes,
        args=[auth], id='refresh_session', coalesce=True, max_instances=1
    )
    return scheduler
