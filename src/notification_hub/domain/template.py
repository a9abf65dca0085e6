"""NotificationTemplate: named, per-channel subject/body definitions."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from pydantic import Field

from ..exceptions import InvariantViolationError
from .enums import NotificationChannel
from .value_object import DomainModel, utcnow


class ChannelDetail(DomainModel):
    """Configuration of one channel inside a template.

    ``subject`` and ``body`` may contain ``{{placeholder}}`` tokens; channels
    without a subject line (e.g. UI) leave ``subject`` unset.
    """

    active: bool = False
    subject: str | None = None
    body: str | None = None


class RenderedMessage(DomainModel):
    """Subject/content pair produced for one channel."""

    subject: str = ""
    content: str = ""


class NotificationTemplate(DomainModel):
    """Read-only template record, unique by ``name``."""

    id: str | None = None
    name: str
    description: str = ""
    channel_details: dict[NotificationChannel, ChannelDetail]
    is_active: bool = True
    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        *,
        name: str,
        channel_details: Mapping[NotificationChannel | str, ChannelDetail | dict],
        description: str = "",
        is_active: bool = True,
        created_by: str | None = None,
        updated_by: str | None = None,
        id: str | None = None,  # noqa: A002
    ) -> NotificationTemplate:
        """Validate and build a template.

        Raises:
            InvariantViolationError: blank name, no channel configured, or a
                channel key that is not a known channel.
        """
        if not name or not name.strip():
            raise InvariantViolationError("Template name is required")
        if not channel_details:
            raise InvariantViolationError("At least one channel must be configured")

        details: dict[NotificationChannel, ChannelDetail] = {}
        for key, detail in channel_details.items():
            try:
                channel = NotificationChannel(key)
            except ValueError:
                raise InvariantViolationError(f"Invalid channel type: {key}") from None
            details[channel] = (
                detail
                if isinstance(detail, ChannelDetail)
                else ChannelDetail.model_validate(detail)
            )

        return cls(
            id=id,
            name=name.strip(),
            description=description.strip(),
            channel_details=details,
            is_active=is_active,
            created_by=created_by,
            updated_by=updated_by,
        )

    def active_channels(self) -> list[NotificationChannel]:
        """Channels switched on in this template, in declaration order."""
        return [ch for ch, detail in self.channel_details.items() if detail.active]
