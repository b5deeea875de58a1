# barbershop/notifications.py

import logging

import httpx

from . import config

logger = logging.getLogger(__name__)


def notify_owner(title: str, content: str) -> bool:
    # Best effort: posts to OWNER_WEBHOOK_URL when set, never raises
    logger.info("Owner notification: %s", title)
    if not config.OWNER_WEBHOOK_URL:
        return True

    try:
        response = httpx.post(
            config.OWNER_WEBHOOK_URL,
            json={"title": title, "content": content},
            timeout=config.NOTIFY_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Owner notification failed: %s", e)
        return False
    return True
