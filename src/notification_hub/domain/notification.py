"""NotificationLog: append-only record of a processed channel job."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ..exceptions import InvariantViolationError
from .enums import NotificationChannel
from .value_object import DomainModel, utcnow


class NotificationLog(DomainModel):
    """A notification as it was delivered on one channel.

    ``content`` is the fully rendered text, never the template. ``subject`` is
    empty for channels without a subject line.
    """

    notification_name: str
    subject: str = ""
    content: str
    user_id: str
    notification_channel: NotificationChannel
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        *,
        notification_name: str,
        content: str,
        user_id: str,
        notification_channel: NotificationChannel | str,
        subject: str | None = None,
        created_at: datetime | None = None,
    ) -> NotificationLog:
        if not notification_name or not notification_name.strip():
            raise InvariantViolationError("Notification name is required")
        if not content or not content.strip():
            raise InvariantViolationError("Content is required")
        if not user_id or not user_id.strip():
            raise InvariantViolationError("User ID is required")
        if not notification_channel:
            raise InvariantViolationError("Notification channel is required")
        try:
            channel = NotificationChannel(notification_channel)
        except ValueError:
            raise InvariantViolationError(
                f"Invalid channel type: {notification_channel}"
            ) from None

        stamp = created_at or utcnow()
        return cls(
            notification_name=notification_name,
            subject=subject or "",
            content=content,
            user_id=user_id,
            notification_channel=channel,
            created_at=stamp,
            updated_at=stamp,
        )
