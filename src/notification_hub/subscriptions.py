"""Subscription resolution and user/company channel matching."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .domain.enums import NotificationChannel, SubscriberType
from .domain.subscription import ChannelGroup, ChannelSubscription
from .exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .ports.stores import ISubscriptionStore

logger = logging.getLogger(__name__)


class SubscriptionResolver:
    """Fetches every subscription record a subscriber owns."""

    def __init__(self, store: ISubscriptionStore) -> None:
        self._store = store

    async def find(
        self, subscriber_id: str, subscriber_type: SubscriberType
    ) -> list[ChannelSubscription]:
        return await self._store.find_by_subscriber(subscriber_id, subscriber_type)


class SubscriptionMatch:
    """Channel groups produced by :class:`SubscriptionMatcher`.

    Groups keep first-seen order; no other ordering is implied.
    """

    __slots__ = ("groups",)

    def __init__(self, groups: list[ChannelGroup]) -> None:
        self.groups = groups

    @property
    def channels(self) -> list[NotificationChannel]:
        """Every channel with at least one record."""
        return [group.channel for group in self.groups]

    @property
    def active_channels(self) -> list[NotificationChannel]:
        """Channels with at least one active record."""
        return [group.channel for group in self.groups if group.has_active]

    @property
    def records(self) -> list[ChannelSubscription]:
        return [sub for group in self.groups for sub in group.subscriptions]

    def __len__(self) -> int:
        return len(self.groups)

    def __repr__(self) -> str:
        return f"SubscriptionMatch(channels={[c.value for c in self.channels]})"


def group_by_channel(subscriptions: Iterable[ChannelSubscription]) -> list[ChannelGroup]:
    """Group records by channel, preserving first-seen channel order."""
    grouped: dict[NotificationChannel, list[ChannelSubscription]] = {}
    for sub in subscriptions:
        grouped.setdefault(sub.channel, []).append(sub)
    return [
        ChannelGroup(channel=channel, subscriptions=subs)
        for channel, subs in grouped.items()
    ]


class SubscriptionMatcher:
    """
    Computes the channels a recipient may be notified on.

    With a single subscriber id the result is every channel that subscriber
    has a record for, active or not; callers filter on activity. With both a
    user and a company id only channels active on *both* sides survive, and
    only their active records are returned.
    """

    def __init__(self, resolver: SubscriptionResolver) -> None:
        self._resolver = resolver

    async def resolve(
        self,
        user_id: str | None = None,
        company_id: str | None = None,
    ) -> SubscriptionMatch:
        """Resolve channel groups for a user and/or a company.

        Raises:
            ValidationError: neither ``user_id`` nor ``company_id`` given.
        """
        if not user_id and not company_id:
            raise ValidationError("Either userId or companyId must be provided")

        user_subs: list[ChannelSubscription] = []
        company_subs: list[ChannelSubscription] = []
        if user_id:
            user_subs = await self._resolver.find(user_id, SubscriberType.USER)
        if company_id:
            company_subs = await self._resolver.find(company_id, SubscriberType.COMPANY)

        if user_id and company_id:
            selected = self._intersect_active(user_subs, company_subs)
        elif user_id:
            selected = user_subs
        else:
            selected = company_subs

        match = SubscriptionMatch(group_by_channel(selected))
        logger.debug(
            "Matched %d channel(s) for user=%s company=%s",
            len(match),
            user_id,
            company_id,
        )
        return match

    @staticmethod
    def _intersect_active(
        user_subs: list[ChannelSubscription],
        company_subs: list[ChannelSubscription],
    ) -> list[ChannelSubscription]:
        user_active = {s.channel for s in user_subs if s.is_active}
        company_active = {s.channel for s in company_subs if s.is_active}
        common = user_active & company_active
        return [
            sub
            for sub in (*user_subs, *company_subs)
            if sub.is_active and sub.channel in common
        ]
