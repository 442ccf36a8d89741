"""Application entry point for the unitwatch listing watcher."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv

import settings
from adapters.clock import SystemClock
from adapters.notification_formatting import render_table
from adapters.securecafe_scraper import SecureCafeScraper
from adapters.telegram_bot_notifier import TelegramBotNotifier
from adapters.telegram_notifier import TelegramSavedMessagesNotifier
from core.config import NotificationConfig, WatchConfig
from core.errors import WatchError
from core.models import Listing
from core.watcher import ListingWatcher

NAME = "UNITWATCH"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


# Always masked when present: the bot token is part of every Bot API URL and
# can surface in urllib error messages.
ALWAYS_MASKED = ("TELEGRAM_BOT_TOKEN",)
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _SecretMaskingFormatter(logging.Formatter):
    """Replace credential values with *** in every rendered log line."""

    def __init__(self, secrets: list[str]) -> None:
        super().__init__(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _secrets_to_mask(config: dict) -> list[str]:
    """Resolve the environment variable names in redact.patterns to values."""

    redact_cfg = config.get("redact", {})
    names = set(ALWAYS_MASKED)
    if redact_cfg.get("enabled", False):
        names.update(redact_cfg.get("patterns", []))
    values = {os.getenv(name) for name in names}
    # Longest first so a token containing another secret is masked whole.
    return sorted((value for value in values if value), key=len, reverse=True)


def _log_file_handler(file_cfg: dict) -> RotatingFileHandler:
    path = file_cfg.get("path", "logs/unitwatch.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging() -> None:
    """Set up console and rotating-file logging from the logging config block."""

    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_log_file_handler(file_cfg))
    if not handlers:
        return

    formatter = _SecretMaskingFormatter(_secrets_to_mask(config))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


def _notification_config() -> NotificationConfig:
    chat_id = os.getenv("TELEGRAM_CHAT_ID") or settings.BOT_CHAT_ID
    return NotificationConfig(method=settings.NOTIFICATION_METHOD, chat_id=str(chat_id or ""))


def _build_scraper() -> SecureCafeScraper:
    return SecureCafeScraper(settings.SOURCE_URL, timeout=settings.SOURCE_TIMEOUT)


def _run() -> None:
    _print_banner()
    load_dotenv()
    _configure_logging()
    logger = logging.getLogger(__name__)

    logger.info("Starting unitwatch for %s", settings.SOURCE_URL)

    watch_config = WatchConfig(
        poll_interval=settings.POLL_INTERVAL,
        report_interval=settings.REPORT_INTERVAL,
    )
    notification_config = _notification_config()

    # Select the notification adapter based on configuration to keep the core
    # watcher independent from delivery details.
    if notification_config.method == "bot":
        bot_token = os.getenv("TELEGRAM_BOT_TOKEN")
        if not bot_token:
            raise RuntimeError("TELEGRAM_BOT_TOKEN is required when notification_method=bot")
        if not notification_config.chat_id:
            raise RuntimeError("TELEGRAM_CHAT_ID or notifications.bot_chat_id is required for bot notifications")
        notifier = TelegramBotNotifier(bot_token=bot_token, chat_id=notification_config.chat_id)
        watcher = ListingWatcher(_build_scraper(), notifier, SystemClock(), watch_config)
        logger.info("Selected notification method - %s", notification_config.method)
        asyncio.run(watcher.run())
        return

    if notification_config.method == "saved_messages":
        from client import build_client

        client = build_client()
        # start() performs the interactive login on first run.
        client.start()
        notifier = TelegramSavedMessagesNotifier(client)
        watcher = ListingWatcher(_build_scraper(), notifier, SystemClock(), watch_config)
        logger.info("Selected notification method - %s", notification_config.method)
        client.loop.run_until_complete(watcher.run())
        return

    raise RuntimeError("notification_method must be 'bot' or 'saved_messages'")


def _check() -> None:
    """Fetch once and print what the watcher would see."""

    load_dotenv()
    _configure_logging()
    scraper = _build_scraper()
    try:
        records = asyncio.run(scraper.fetch())
        listings = [Listing.from_raw(record) for record in records]
    except WatchError as exc:
        print(f"Check failed: {exc}")
        return

    if not listings:
        print("No apartments are currently available.")
        return
    print("\n".join(render_table(listings)))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="unitwatch")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the watcher")
    subparsers.add_parser("check", help="Fetch the listing page once and print the table")

    args = parser.parse_args(argv)
    if args.command == "check":
        _check()
        return
    _run()


if __name__ == "__main__":
    main()
