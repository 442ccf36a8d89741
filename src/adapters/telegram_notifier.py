"""Telegram notification adapter for Saved Messages.

Formats a Markdown message and sends it to the user's Saved Messages through
a Telethon client.
"""

from __future__ import annotations

import logging

from telethon import errors

from adapters.notification_formatting import format_notification
from core.errors import NotifyError
from core.models import Notification

LOGGER = logging.getLogger(__name__)


class TelegramSavedMessagesNotifier:
    """Notifier adapter that sends messages to the user's Saved Messages."""

    def __init__(self, client) -> None:
        self._client = client

    async def send(self, notification: Notification) -> None:
        """Send the formatted notification to Saved Messages."""

        message = format_notification(notification, mode="markdown")
        if not message:
            return
        try:
            await self._client.send_message("me", message, parse_mode="Markdown")
        except (errors.RPCError, ConnectionError) as e:
            raise NotifyError(f"Saved Messages delivery failed: {e}") from e
        LOGGER.info("Sent %s notification to Saved Messages", notification.kind)
