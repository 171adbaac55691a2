"""
Email Delivery Worker
Periodic asyncio task that drains the email queue
"""

import asyncio
import logging
from typing import Dict, Optional

from golfcapture.config import settings
from golfcapture.database import get_session_local
from golfcapture.services.email_service import process_due_emails

logger = logging.getLogger(__name__)


async def run_email_job() -> Dict[str, int]:
    """One pass over due emails with a fresh session"""
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        return await process_due_emails(db)
    finally:
        db.close()


async def start_email_scheduler(interval_seconds: Optional[int] = None) -> None:
    """
    Run the email job every interval until cancelled

    Started from the application startup hook when EMAIL_WORKER_ENABLED is set.
    """
    interval = interval_seconds or settings.EMAIL_WORKER_INTERVAL_SECONDS
    logger.info(f"Starting email delivery worker (interval={interval}s)")

    while True:
        try:
            await run_email_job()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Error in email delivery worker: {type(e).__name__}: {str(e)}")

        await asyncio.sleep(interval)
