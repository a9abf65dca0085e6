"""Tests for the MongoDB stores using mongomock-motor."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from conftest import company_subscription, subscription

from notification_hub.config import DatabaseSettings
from notification_hub.dispatch import DispatchOrchestrator
from notification_hub.domain import (
    NotificationChannel,
    NotificationLog,
    NotificationTemplate,
    SubscriberType,
)
from notification_hub.exceptions import DuplicateRecordError, StoreConnectionError
from notification_hub.persistence import (
    NOTIFICATIONS,
    SUBSCRIPTIONS,
    TEMPLATES,
    MongoChannelSubscriptionRepository,
    MongoConnectionManager,
    MongoNotificationLogRepository,
    MongoNotificationTemplateRepository,
    ensure_indexes,
    model_from_doc,
    model_to_doc,
)
from notification_hub.profiles import StaticProfileProvider
from notification_hub.queue import EMAIL_QUEUE, InMemoryJobQueue
from notification_hub.subscriptions import SubscriptionMatcher, SubscriptionResolver
from notification_hub.templates import TemplateRepositoryAdapter

EMAIL = NotificationChannel.EMAIL
UI = NotificationChannel.UI


def _log(user_id: str, channel: NotificationChannel, minutes_ago: int) -> NotificationLog:
    return NotificationLog.create(
        notification_name=f"n-{minutes_ago}",
        content="content",
        user_id=user_id,
        notification_channel=channel,
        created_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        - timedelta(minutes=minutes_ago),
    )


class TestConnectionManager:
    def test_client_raises_before_connect(self) -> None:
        mgr = MongoConnectionManager("mongodb://localhost:27017")
        with pytest.raises(StoreConnectionError, match="Not connected"):
            _ = mgr.client

    def test_close_idempotent(self) -> None:
        mgr = MongoConnectionManager()
        mgr.close()
        mgr.close()

    @pytest.mark.asyncio
    async def test_health_check_false_when_not_connected(self) -> None:
        assert await MongoConnectionManager().health_check() is False

    def test_from_settings_carries_database_and_timeouts(self) -> None:
        mgr = MongoConnectionManager.from_settings(
            DatabaseSettings(name="notify", connect_timeout_ms=2500)
        )
        assert mgr.database_name == "notify"
        assert mgr._connect_timeout_ms == 2500


class TestSerialization:
    def test_subscription_document_shape(self) -> None:
        """Documents use camelCase keys, enum values and _id."""
        doc = model_to_doc(subscription("user-001", EMAIL))
        assert doc["subscriberId"] == "user-001"
        assert doc["subscriberType"] == "user"
        assert doc["channel"] == "email"
        assert isinstance(doc["createdAt"], datetime)
        assert "_id" in doc and "id" not in doc

    def test_template_without_id_leaves_id_unset(self) -> None:
        template = NotificationTemplate.create(
            name="t", channel_details={"ui": {"active": True, "body": "b"}}
        )
        doc = model_to_doc(template)
        assert "_id" not in doc
        assert doc["channelDetails"] == {
            "ui": {"active": True, "subject": None, "body": "b"}
        }

    def test_from_doc_maps_object_id(self) -> None:
        from bson import ObjectId

        oid = ObjectId()
        template = model_from_doc(
            NotificationTemplate,
            {"_id": oid, "name": "t", "channelDetails": {"email": {"active": True}}},
        )
        assert template.id == str(oid)


class TestSubscriptionRepository:
    @pytest.mark.asyncio
    async def test_find_by_subscriber(self, mongo_connection) -> None:
        """Lookup filters on subscriber id and type, returning inactive too."""
        repo = MongoChannelSubscriptionRepository(mongo_connection)
        await repo.add(subscription("user-002", EMAIL))
        await repo.add(subscription("user-002", NotificationChannel.SMS, active=False))
        await repo.add(company_subscription("user-002", UI))

        found = await repo.find_by_subscriber("user-002", SubscriberType.USER)

        assert {s.channel for s in found} == {EMAIL, NotificationChannel.SMS}
        assert {s.is_active for s in found} == {True, False}

    @pytest.mark.asyncio
    async def test_unique_subscriber_channel(self, mongo_connection) -> None:
        """The same subscriber/type/channel cannot be stored twice."""
        await ensure_indexes(mongo_connection)
        repo = MongoChannelSubscriptionRepository(mongo_connection)
        await repo.add(subscription("user-001", EMAIL))

        with pytest.raises(DuplicateRecordError):
            await repo.add(subscription("user-001", EMAIL))


class TestTemplateRepository:
    @pytest.mark.asyncio
    async def test_add_and_find_by_name(self, mongo_connection) -> None:
        repo = MongoNotificationTemplateRepository(mongo_connection)
        template = NotificationTemplate.create(
            name="monthly-payslip",
            channel_details={
                "email": {
                    "active": True,
                    "subject": "Your Monthly Payslip is Available",
                    "body": "<p>Dear {{fullName}}</p>",
                }
            },
            created_by="507f1f77bcf86cd799439011",
        )
        template_id = await repo.add(template)

        found = await repo.find_by_name("monthly-payslip")

        assert found is not None
        assert found.id == template_id
        assert found.active_channels() == [EMAIL]
        assert found.channel_details[EMAIL].subject == "Your Monthly Payslip is Available"

    @pytest.mark.asyncio
    async def test_missing_template(self, mongo_connection) -> None:
        repo = MongoNotificationTemplateRepository(mongo_connection)
        assert await repo.find_by_name("nope") is None

    @pytest.mark.asyncio
    async def test_unique_name(self, mongo_connection) -> None:
        await ensure_indexes(mongo_connection)
        repo = MongoNotificationTemplateRepository(mongo_connection)
        template = NotificationTemplate.create(
            name="dup", channel_details={"ui": {"active": True}}
        )
        await repo.add(template)
        with pytest.raises(DuplicateRecordError):
            await repo.add(template)


class TestUnknownStoredChannels:
    """Documents written by other services may name channels this one lacks."""

    @pytest.mark.asyncio
    async def test_template_drops_unknown_channel(self, mongo_connection) -> None:
        await mongo_connection.database[TEMPLATES].insert_one(
            {
                "name": "welcome",
                "channelDetails": {
                    "email": {"active": True, "subject": "Hi", "body": "Hello"},
                    "telegram": {"active": True},
                },
            }
        )

        found = await MongoNotificationTemplateRepository(mongo_connection).find_by_name(
            "welcome"
        )

        assert found is not None
        assert found.active_channels() == [EMAIL]

    @pytest.mark.asyncio
    async def test_subscription_with_unknown_channel_is_skipped(
        self, mongo_connection
    ) -> None:
        repo = MongoChannelSubscriptionRepository(mongo_connection)
        await repo.add(subscription("user-001", EMAIL))
        await mongo_connection.database[SUBSCRIPTIONS].insert_one(
            {
                "subscriberId": "user-001",
                "subscriberType": "user",
                "channel": "telegram",
                "isActive": True,
            }
        )

        found = await repo.find_by_subscriber("user-001", SubscriberType.USER)

        assert [s.channel for s in found] == [EMAIL]

    @pytest.mark.asyncio
    async def test_dispatch_still_reaches_known_channel(self, mongo_connection) -> None:
        """An unknown template channel must not cost the email job."""
        await MongoChannelSubscriptionRepository(mongo_connection).add(
            subscription("user-001", EMAIL)
        )
        await mongo_connection.database[TEMPLATES].insert_one(
            {
                "name": "welcome",
                "channelDetails": {
                    "email": {"active": True, "subject": "Hi {{fullName}}"},
                    "telegram": {"active": True},
                },
            }
        )
        email_queue = InMemoryJobQueue(EMAIL_QUEUE)
        orchestrator = DispatchOrchestrator(
            SubscriptionMatcher(
                SubscriptionResolver(MongoChannelSubscriptionRepository(mongo_connection))
            ),
            TemplateRepositoryAdapter(MongoNotificationTemplateRepository(mongo_connection)),
            StaticProfileProvider(),
            {EMAIL: email_queue},
        )

        outcome = await orchestrator.dispatch(user_id="user-001", template_name="welcome")

        assert outcome.success is True
        assert outcome.total_jobs_created == 1
        assert outcome.notified_channels == ["email"]
        assert outcome.errors == []
        (job,) = email_queue.get_enqueued()
        assert job.payload.subject == "Hi John Doe"


class TestNotificationLogRepository:
    @pytest.mark.asyncio
    async def test_pages_newest_first(self, mongo_connection) -> None:
        """Logs are filtered by channel and user and sorted by createdAt desc."""
        repo = MongoNotificationLogRepository(mongo_connection)
        for minutes_ago in (30, 10, 20):
            await repo.insert(_log("user-001", UI, minutes_ago))
        await repo.insert(_log("user-001", EMAIL, 5))
        await repo.insert(_log("user-002", UI, 1))

        first, total = await repo.list_by_channel_and_user(UI, "user-001", 1, 2)
        second, _ = await repo.list_by_channel_and_user(UI, "user-001", 2, 2)

        assert total == 3
        assert [log.notification_name for log in first] == ["n-10", "n-20"]
        assert [log.notification_name for log in second] == ["n-30"]

    @pytest.mark.asyncio
    async def test_stored_document_shape(self, mongo_connection) -> None:
        repo = MongoNotificationLogRepository(mongo_connection)
        await repo.insert(_log("user-001", UI, 0))

        doc = await mongo_connection.database[NOTIFICATIONS].find_one({})

        assert doc["notificationChannel"] == "ui"
        assert doc["userId"] == "user-001"
        assert doc["subject"] == ""


@pytest.mark.asyncio
async def test_ensure_indexes(mongo_connection) -> None:
    """Every collection gets its indexes."""
    names = await ensure_indexes(mongo_connection)
    assert len(names) == 5
    indexes = [
        idx async for idx in mongo_connection.database[SUBSCRIPTIONS].list_indexes()
    ]
    assert len(indexes) >= 4


@pytest.mark.asyncio
async def test_initialize_connects_and_creates_indexes(mongo_connection) -> None:
    names = await mongo_connection.initialize()
    assert "uniq_name" in names
    indexes = [
        idx async for idx in mongo_connection.database[TEMPLATES].list_indexes()
    ]
    assert any(idx["name"] == "uniq_name" for idx in indexes)
