import logging
from typing import Any, Dict, Optional
import requests
from requests import RequestException

from calcugrade.config.settings import settings


logger = logging.getLogger(__name__)


class NotificationServiceError(Exception):
    pass


class NotificationService:
    def __init__(self, webhook_url: str, timeout: float = 10) -> None:
        if not webhook_url:
            raise NotificationServiceError("Missing CALCUGRADE_WEBHOOK_URL in environment")
        self.webhook_url = webhook_url
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "NotificationService":
        return cls(settings.webhook_url, settings.webhook_timeout)

    def send_text(self, text: Optional[str]) -> None:
        payload: Dict[str, Any] = {}
        if text:
            payload["content"] = text
        self._post(payload)

    def _post(self, payload: Dict[str, Any]) -> None:
        try:
            res = requests.post(self.webhook_url, json=payload, timeout=self.timeout)
        except RequestException as exc:
            raise NotificationServiceError("NOTIFICATION_SERVICE_UNAVAILABLE") from exc

        if res.status_code >= 400:
            raise NotificationServiceError(f"NOTIFICATION_REJECTED ({res.status_code})")


def notify_quietly(text: Optional[str], webhook_url: Optional[str] = None) -> bool:
    """
    Fire-and-forget post of ``text``.

    Failures are logged and never reach the caller. Returns whether the post went through.
    """
    url = settings.webhook_url if webhook_url is None else webhook_url
    if not url:
        logger.debug("No webhook configured, skipping notification")
        return False

    try:
        NotificationService(url, settings.webhook_timeout).send_text(text)
    except NotificationServiceError as exc:
        logger.warning("Notification failed: %s", exc)
        return False
    return True
