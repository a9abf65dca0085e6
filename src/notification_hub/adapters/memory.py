"""Dict-backed fakes of the store ports for unit tests and local runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import DuplicateRecordError
from ..ports.stores import INotificationLogStore, ISubscriptionStore, ITemplateStore

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..domain.enums import NotificationChannel, SubscriberType
    from ..domain.notification import NotificationLog
    from ..domain.subscription import ChannelSubscription
    from ..domain.template import NotificationTemplate


class InMemorySubscriptionStore(ISubscriptionStore):
    """Subscriptions in insertion order, unique per subscriber/type/channel."""

    def __init__(self, records: Iterable[ChannelSubscription] = ()) -> None:
        self._records: list[ChannelSubscription] = list(records)

    async def find_by_subscriber(
        self, subscriber_id: str, subscriber_type: SubscriberType
    ) -> list[ChannelSubscription]:
        return [
            sub
            for sub in self._records
            if sub.subscriber_id == subscriber_id
            and sub.subscriber_type == subscriber_type
        ]

    async def add(self, subscription: ChannelSubscription) -> str:
        key = (
            subscription.subscriber_id,
            subscription.subscriber_type,
            subscription.channel,
        )
        for sub in self._records:
            if (sub.subscriber_id, sub.subscriber_type, sub.channel) == key:
                raise DuplicateRecordError(
                    f"Subscription already exists: {subscription.subscriber_id}/"
                    f"{subscription.subscriber_type.value}/{subscription.channel.value}"
                )
        self._records.append(subscription)
        return subscription.id

    def records(self) -> list[ChannelSubscription]:
        return list(self._records)


class InMemoryTemplateStore(ITemplateStore):
    def __init__(self, templates: Iterable[NotificationTemplate] = ()) -> None:
        self._by_name: dict[str, NotificationTemplate] = {t.name: t for t in templates}

    async def find_by_name(self, name: str) -> NotificationTemplate | None:
        return self._by_name.get(name)

    async def add(self, template: NotificationTemplate) -> str:
        if template.name in self._by_name:
            raise DuplicateRecordError(f"Template already exists: {template.name}")
        if template.id is None:
            template = template.model_copy(update={"id": str(len(self._by_name) + 1)})
        self._by_name[template.name] = template
        return template.id  # type: ignore[return-value]


class InMemoryNotificationLogStore(INotificationLogStore):
    """Append-only log list; reads are newest first."""

    def __init__(self) -> None:
        self.logs: list[NotificationLog] = []

    async def insert(self, log: NotificationLog) -> NotificationLog:
        self.logs.append(log)
        return log

    async def list_by_channel_and_user(
        self,
        channel: NotificationChannel,
        user_id: str,
        page: int,
        limit: int,
    ) -> tuple[list[NotificationLog], int]:
        matching = [
            log
            for log in reversed(self.logs)
            if log.notification_channel == channel and log.user_id == user_id
        ]
        # Stable sort keeps later inserts first among equal timestamps.
        matching.sort(key=lambda log: log.created_at, reverse=True)
        start = (page - 1) * limit
        return matching[start : start + limit], len(matching)
