from __future__ import annotations

import logging

import app


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("unitwatch", logging.WARNING, __file__, 1, message, None, None)


def test_formatter_masks_every_secret() -> None:
    formatter = app._SecretMaskingFormatter(["123:abc", "hash"])
    line = formatter.format(_record("POST https://api.telegram.org/bot123:abc/sendMessage hash"))
    assert "123:abc" not in line
    assert "hash" not in line
    assert "bot***/sendMessage" in line


def test_bot_token_is_masked_even_without_redact_block(monkeypatch) -> None:
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.delenv("API_HASH", raising=False)
    assert app._secrets_to_mask({}) == ["123:abc"]


def test_redact_patterns_are_resolved_longest_first(monkeypatch) -> None:
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setenv("API_HASH", "deadbeefcafe")
    secrets = app._secrets_to_mask({"redact": {"enabled": True, "patterns": ["API_HASH"]}})
    assert secrets == ["deadbeefcafe", "123:abc"]
