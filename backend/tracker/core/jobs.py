import asyncio
import logging

import requests

from tracker.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


async def refresh_session_job(auth):
    logger.info("Starting scheduled task: session refresh.")
    try:
        session = await asyncio.to_thread(auth.refresh_session)
    except (AuthenticationError, requests.RequestException) as e:
        logger.error(f"Error during session refresh: {e}")
        return
    if session is not None:
        logger.info("Session refresh completed successfully.")
