"""Job contract shared by the dispatcher and the channel workers."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..domain.enums import NotificationChannel

EMAIL_QUEUE = "email-notifications"
UI_QUEUE = "ui-notifications"

SEND_EMAIL = "send-email"
SEND_UI = "send-ui"

# Channels with a worker behind them. Anything else is reported as unsupported.
JOB_KINDS: dict[NotificationChannel, str] = {
    NotificationChannel.EMAIL: SEND_EMAIL,
    NotificationChannel.UI: SEND_UI,
}


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class BackoffPolicy(_WireModel):
    """Delay between job attempts, in milliseconds."""

    type: Literal["exponential", "fixed"] = "exponential"
    delay: int = Field(default=2000, ge=0)

    def delay_for_attempt(self, attempt: int) -> int:
        """Return the delay (ms) before retrying after the given 1-based attempt.

        Exponential: ``delay * 2^(attempt-1)``; fixed: ``delay``.
        """
        if attempt < 1:
            return 0
        if self.type == "fixed":
            return self.delay
        return self.delay * (2 ** (attempt - 1))


class JobOptions(_WireModel):
    """Queue-side delivery options attached to every enqueued job."""

    delay: int = Field(default=0, ge=0)
    attempts: int = Field(default=3, ge=1)
    backoff: BackoffPolicy = Field(default_factory=BackoffPolicy)

    def should_retry(self, attempt: int) -> bool:
        """Return True if another attempt is allowed (attempt is 1-based)."""
        return 1 <= attempt < self.attempts


DEFAULT_JOB_OPTIONS = JobOptions()


class JobPayload(_WireModel):
    """Rendered notification handed to a channel worker."""

    notification_name: str
    subject: str = ""
    content: str
    user_id: str | None = None


class Job(_WireModel):
    """Envelope carrying a payload through a queue."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    queue: str
    kind: str
    payload: JobPayload
    options: JobOptions = Field(default_factory=JobOptions)
    attempt: int = Field(default=1, ge=1)
    correlation_id: str | None = None
    enqueued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def next_attempt(self) -> Job:
        """Copy of this job for its next delivery attempt."""
        return self.model_copy(update={"attempt": self.attempt + 1})
