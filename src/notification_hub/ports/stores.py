"""Store ports for subscriptions, templates and notification logs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.enums import NotificationChannel, SubscriberType
    from ..domain.notification import NotificationLog
    from ..domain.subscription import ChannelSubscription
    from ..domain.template import NotificationTemplate


@runtime_checkable
class ISubscriptionStore(Protocol):
    """
    Read access to channel subscriptions.

    ``add`` exists for administrative and seeding processes; the dispatch
    path only reads.
    """

    async def find_by_subscriber(
        self, subscriber_id: str, subscriber_type: SubscriberType
    ) -> list[ChannelSubscription]:
        """Return every record (active or not) owned by the subscriber."""
        ...

    async def add(self, subscription: ChannelSubscription) -> str:
        """Insert a subscription; raises DuplicateRecordError on a taken triple."""
        ...


@runtime_checkable
class ITemplateStore(Protocol):
    """Lookup of notification templates by unique name."""

    async def find_by_name(self, name: str) -> NotificationTemplate | None: ...

    async def add(self, template: NotificationTemplate) -> str:
        """Insert a template; raises DuplicateRecordError on a taken name."""
        ...


@runtime_checkable
class INotificationLogStore(Protocol):
    """Append-only store of delivered notifications."""

    async def insert(self, log: NotificationLog) -> NotificationLog: ...

    async def list_by_channel_and_user(
        self,
        channel: NotificationChannel,
        user_id: str,
        page: int,
        limit: int,
    ) -> tuple[list[NotificationLog], int]:
        """Return one page of logs (newest first) and the total match count."""
        ...
