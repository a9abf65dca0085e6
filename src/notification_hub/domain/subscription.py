"""ChannelSubscription: a subscriber's opt-in (or opt-out) for one channel."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from ..exceptions import InvariantViolationError
from .enums import NotificationChannel, SubscriberType
from .value_object import DomainModel, utcnow


class ChannelSubscription(DomainModel):
    """Read-only subscription record.

    Identity is the ``(subscriber_id, subscriber_type, channel)`` triple; the
    store enforces at most one record per triple. Subscriptions are retired by
    flipping ``is_active`` rather than being deleted.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    subscriber_id: str
    subscriber_type: SubscriberType
    channel: NotificationChannel
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        *,
        subscriber_id: str,
        subscriber_type: SubscriberType | str,
        channel: NotificationChannel | str,
        is_active: bool = True,
        id: str | None = None,  # noqa: A002
    ) -> ChannelSubscription:
        """Validate and build a new subscription.

        Raises:
            InvariantViolationError: empty subscriber id or unknown
                subscriber type / channel.
        """
        if not subscriber_id or not subscriber_id.strip():
            raise InvariantViolationError("Subscriber ID is required")
        if not subscriber_type:
            raise InvariantViolationError("Subscriber type is required")
        if not channel:
            raise InvariantViolationError("Channel is required")
        try:
            kind = SubscriberType(subscriber_type)
        except ValueError:
            raise InvariantViolationError(
                f"Invalid subscriber type: {subscriber_type}"
            ) from None
        try:
            target = NotificationChannel(channel)
        except ValueError:
            raise InvariantViolationError(f"Invalid channel type: {channel}") from None

        data: dict[str, object] = {
            "subscriber_id": subscriber_id.strip(),
            "subscriber_type": kind,
            "channel": target,
            "is_active": is_active,
        }
        if id is not None:
            data["id"] = id
        return cls(**data)


class ChannelGroup(DomainModel):
    """Subscriptions for a single channel, possibly from several subscribers."""

    channel: NotificationChannel
    subscriptions: list[ChannelSubscription] = Field(default_factory=list)

    @property
    def has_active(self) -> bool:
        return any(sub.is_active for sub in self.subscriptions)
