"""Telegram Bot API notification adapter.

Uses the Bot API for delivery so notifications can be routed via a bot chat.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request

from adapters.notification_formatting import format_notification
from core.errors import NotifyError
from core.models import Notification

LOGGER = logging.getLogger(__name__)


class TelegramBotNotifier:
    """Notifier adapter that sends messages via the Telegram Bot API."""

    def __init__(self, bot_token: str, chat_id: str, timeout: float = 10) -> None:
        self._bot_token = bot_token
        self._chat_id = chat_id
        self._timeout = timeout

    def _endpoint(self) -> str:
        # The Bot API endpoint is deterministic and derived from the token.
        return f"https://api.telegram.org/bot{self._bot_token}/sendMessage"

    def build_payload(self, text: str) -> dict:
        return {
            "chat_id": self._chat_id,
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }

    async def send(self, notification: Notification) -> None:
        """Send the formatted notification via the Bot API."""

        message = format_notification(notification, mode="html")
        if not message:
            return
        data = json.dumps(self.build_payload(message)).encode("utf-8")
        request = urllib.request.Request(self._endpoint(), data=data, method="POST")
        request.add_header("Content-Type", "application/json")
        # Blocking call: the watcher loop is strictly serial, so nothing else
        # is waiting on the event loop while a message is in flight.
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                body = json.loads(response.read().decode("utf-8") or "{}")
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace")
            raise NotifyError(f"Bot API error {e.code}: {body}") from e
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise NotifyError(f"Bot API request failed: {e}") from e

        if not isinstance(body, dict):
            raise NotifyError(f"Unexpected Bot API response: {body!r}")
        if not body.get("ok", True):
            raise NotifyError(f"Bot API rejected message: {body.get('description', body)}")
        LOGGER.info("Sent %s notification", notification.kind)
