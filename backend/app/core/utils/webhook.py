import asyncio
import logging
import traceback
from datetime import datetime, timezone

import httpx
from fastapi import Request

from app.config import settings

logger = logging.getLogger(__name__)


async def notify_error(request: Request, exc: Exception, track_id: str):
    """Report an unhandled exception to the error webhook, if one is set."""
    if not settings.ERROR_WEBHOOK_URL:
        return
    error_details = {
        "track_id": track_id,
        "path": request.url.path,
        "method": request.method,
        "traceback": "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        ),
    }

    await send_error_notification(error_details)


def format_error_report(error_details: dict) -> str:
    timestamp = datetime.now(timezone.utc).isoformat()
    return f"""
============================ ERROR DETAILS ============================

Timestamp: {timestamp}
Track ID: {error_details.get("track_id", "N/A")}
Path: {error_details.get("path", "N/A")}
Method: {error_details.get("method", "N/A")}

============================== TRACEBACK ==============================

{error_details.get("traceback", "")}

=======================================================================
"""


async def send_error_notification(
    error_details: dict, max_retries: int = 2, retry_delay: float = 1.0
) -> bool:
    if not settings.ERROR_WEBHOOK_URL:
        return False
    files = {
        "file": (
            "traceback.txt",
            format_error_report(error_details).encode("utf-8"),
            "text/plain",
        ),
    }
    async with httpx.AsyncClient() as client:
        for attempt in range(max_retries):
            try:
                response = await client.post(
                    settings.ERROR_WEBHOOK_URL,
                    data={
                        "content": "Internal server error "
                        f"{error_details.get('track_id', 'N/A')}"
                    },
                    files=files,
                )
                response.raise_for_status()
                return True
            except httpx.HTTPError as e:
                logger.warning(
                    "Error notification attempt %s failed: %s", attempt + 1, e
                )
                if attempt < max_retries - 1:
                    await asyncio.sleep(retry_delay * (2**attempt))

    logger.error("Failed to send error notification after all retries")
    return False
