"""Tests for environment-driven settings."""

from __future__ import annotations

import logging

import pytest

from notification_hub.config import (
    DatabaseSettings,
    LoggingSettings,
    PaginationSettings,
    QueueSettings,
    Settings,
    configure_logging,
    get_settings,
)


def test_defaults() -> None:
    """Defaults point at a local MongoDB and RabbitMQ."""
    settings = Settings()
    assert settings.database.uri == "mongodb://localhost:27017/notification-service"
    assert settings.queue.email_queue == "email-notifications"
    assert settings.queue.ui_queue == "ui-notifications"
    assert settings.pagination.max_limit == 100


def test_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Each group reads its own prefix."""
    monkeypatch.setenv("DATABASE_URI", "mongodb://db:27017/notify")
    monkeypatch.setenv("DATABASE_NAME", "notify")
    monkeypatch.setenv("QUEUE_ATTEMPTS", "5")
    monkeypatch.setenv("PAGINATION_MAX_LIMIT", "50")

    assert DatabaseSettings().uri == "mongodb://db:27017/notify"
    assert DatabaseSettings().name == "notify"
    assert QueueSettings().attempts == 5
    assert PaginationSettings().max_limit == 50


def test_job_options_from_queue_settings() -> None:
    """Queue settings build the options attached to every job."""
    options = QueueSettings(attempts=4, backoff_delay_ms=1000).job_options()
    assert options.attempts == 4
    assert options.delay == 0
    assert options.backoff.type == "exponential"
    assert options.backoff.delay_for_attempt(3) == 4000


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValueError):
        QueueSettings(attempts=0)


def test_get_settings_is_cached() -> None:
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()


def test_configure_logging_sets_level(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    configure_logging(LoggingSettings(level="debug"))
    assert calls[0]["level"] == "DEBUG"
