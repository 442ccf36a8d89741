"""Static configuration for unitwatch.

All user-editable settings (source, schedule, notifications, logging) live
in a single JSON file for quick edits without touching Python. Secrets come
from the environment.
"""

import json
import os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Path can be overridden so several deployments can share one checkout.
CONFIG_PATH = os.getenv("UNITWATCH_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))

DEFAULT_URL = (
    "https://morgan-properties.securecafe.com/onlineleasing/"
    "riverside-towers-apartment-homes/availableunits.aspx"
)


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Listing source.
_source = _CONFIG.get("source", {})
SOURCE_URL = _source.get("url", DEFAULT_URL)
SOURCE_TIMEOUT = float(_source.get("timeout_seconds", 30))

# Loop cadence. The report interval differs between deployments, so it is
# never hardcoded; 0 disables periodic reports.
_schedule = _CONFIG.get("schedule", {})
POLL_INTERVAL = float(_schedule.get("poll_interval_seconds", 20))
REPORT_INTERVAL = float(_schedule.get("report_interval_seconds", 720))

# Notification method switches adapters without changing core logic.
_notifications = _CONFIG.get("notifications", {})
NOTIFICATION_METHOD = _notifications.get("notification_method", "bot")
# TELEGRAM_CHAT_ID in the environment wins over the config value.
BOT_CHAT_ID = _notifications.get("bot_chat_id")

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
