"""Tests for SubscriptionMatcher."""

from __future__ import annotations

import pytest
from conftest import company_subscription, subscription

from notification_hub.adapters.memory import InMemorySubscriptionStore
from notification_hub.domain import NotificationChannel
from notification_hub.exceptions import ValidationError
from notification_hub.subscriptions import (
    SubscriptionMatcher,
    SubscriptionResolver,
    group_by_channel,
)

EMAIL = NotificationChannel.EMAIL
UI = NotificationChannel.UI
SMS = NotificationChannel.SMS


def _matcher(*records) -> SubscriptionMatcher:
    return SubscriptionMatcher(SubscriptionResolver(InMemorySubscriptionStore(records)))


class TestValidation:
    @pytest.mark.asyncio
    async def test_requires_an_identifier(self) -> None:
        """Neither user nor company raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            await _matcher().resolve()
        assert exc_info.value.errors == {
            "__root__": ["Either userId or companyId must be provided"]
        }

    @pytest.mark.asyncio
    async def test_empty_strings_count_as_missing(self) -> None:
        """Blank identifiers are treated as absent."""
        with pytest.raises(ValidationError):
            await _matcher().resolve(user_id="", company_id="")


class TestSingleSubscriber:
    @pytest.mark.asyncio
    async def test_user_only_returns_every_recorded_channel(self) -> None:
        """Active and inactive channels are both returned for one subscriber."""
        match = await _matcher(
            subscription("user-002", EMAIL),
            subscription("user-002", SMS, active=False),
            subscription("user-003", UI),
        ).resolve(user_id="user-002")

        assert set(match.channels) == {EMAIL, SMS}
        assert match.active_channels == [EMAIL]
        assert len(match.records) == 2

    @pytest.mark.asyncio
    async def test_company_only_reads_company_records(self) -> None:
        """A company id only sees records of subscriber type company."""
        match = await _matcher(
            subscription("acme", EMAIL),
            company_subscription("acme", UI, active=False),
        ).resolve(company_id="acme")

        assert match.channels == [UI]
        assert match.active_channels == []

    @pytest.mark.asyncio
    async def test_no_records(self) -> None:
        """Unknown subscriber yields an empty match."""
        match = await _matcher().resolve(user_id="ghost")
        assert len(match) == 0
        assert match.channels == []


class TestUserAndCompany:
    @pytest.mark.asyncio
    async def test_keeps_only_channels_active_on_both_sides(self) -> None:
        """Intersection of active channel sets."""
        match = await _matcher(
            subscription("user-001", EMAIL),
            subscription("user-001", UI),
            company_subscription("company-001", EMAIL),
            company_subscription("company-001", SMS),
        ).resolve(user_id="user-001", company_id="company-001")

        assert match.channels == [EMAIL]
        (group,) = match.groups
        assert {s.subscriber_type.value for s in group.subscriptions} == {
            "user",
            "company",
        }

    @pytest.mark.asyncio
    async def test_inactive_company_record_suppresses_user_channel(self) -> None:
        """A company opt-out wins over an active user subscription."""
        match = await _matcher(
            subscription("user-001", EMAIL),
            company_subscription("company-001", EMAIL, active=False),
        ).resolve(user_id="user-001", company_id="company-001")

        assert match.channels == []

    @pytest.mark.asyncio
    async def test_inactive_user_record_suppresses_company_channel(self) -> None:
        """A user opt-out wins over an active company subscription."""
        match = await _matcher(
            subscription("user-001", UI, active=False),
            company_subscription("company-001", UI),
        ).resolve(user_id="user-001", company_id="company-001")

        assert match.records == []


def test_group_by_channel_keeps_first_seen_order() -> None:
    """Channels are grouped in the order they first appear."""
    groups = group_by_channel(
        [
            subscription("a", UI),
            subscription("b", EMAIL),
            company_subscription("c", UI),
        ]
    )
    assert [g.channel for g in groups] == [UI, EMAIL]
    assert len(groups[0].subscriptions) == 2
    assert groups[0].has_active
