"""Telethon client factory for Saved Messages delivery.

Only used when notification_method is "saved_messages"; the bot method posts
to the Bot API and never opens a user session.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from telethon import TelegramClient

DEFAULT_SESSION_NAME = "unitwatch"

LOGGER = logging.getLogger(__name__)


def _api_credentials() -> tuple[int, str]:
    api_id = os.getenv("API_ID")
    api_hash = os.getenv("API_HASH")
    if not api_id or not api_hash:
        raise RuntimeError("API_ID and API_HASH are required when notification_method=saved_messages")
    try:
        return int(api_id), api_hash
    except ValueError as e:
        raise RuntimeError(f"API_ID must be numeric, got {api_id!r}") from e


def build_client() -> TelegramClient:
    """Create the user client that posts alerts to Saved Messages.

    The session file (SESSION_NAME, default "unitwatch") keeps the login, so
    the interactive prompt from client.start() only appears on first run.
    """

    load_dotenv()
    api_id, api_hash = _api_credentials()
    session_name = os.getenv("SESSION_NAME", DEFAULT_SESSION_NAME)

    LOGGER.info("Opening Telegram session %s for Saved Messages", session_name)
    return TelegramClient(session_name, api_id, api_hash)
