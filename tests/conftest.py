"""Shared fixtures: in-memory stores and queues, a wired orchestrator, mongomock."""

from __future__ import annotations

import pytest

from notification_hub.adapters.memory import (
    InMemoryNotificationLogStore,
    InMemorySubscriptionStore,
    InMemoryTemplateStore,
)
from notification_hub.dispatch import DispatchOrchestrator
from notification_hub.domain import (
    ChannelSubscription,
    NotificationChannel,
    NotificationTemplate,
    SubscriberType,
)
from notification_hub.persistence import MongoConnectionManager
from notification_hub.profiles import StaticProfileProvider
from notification_hub.queue import EMAIL_QUEUE, UI_QUEUE, InMemoryJobQueue
from notification_hub.service import NotificationService
from notification_hub.subscriptions import SubscriptionMatcher, SubscriptionResolver
from notification_hub.templates import TemplateRepositoryAdapter

pytest_plugins = ["pytest_asyncio"]


def subscription(
    subscriber_id: str,
    channel: NotificationChannel | str,
    *,
    active: bool = True,
    subscriber_type: SubscriberType = SubscriberType.USER,
) -> ChannelSubscription:
    return ChannelSubscription.create(
        subscriber_id=subscriber_id,
        subscriber_type=subscriber_type,
        channel=channel,
        is_active=active,
    )


def company_subscription(
    company_id: str, channel: NotificationChannel | str, *, active: bool = True
) -> ChannelSubscription:
    return subscription(
        company_id, channel, active=active, subscriber_type=SubscriberType.COMPANY
    )


def welcome_template(**channel_details: dict) -> NotificationTemplate:
    return NotificationTemplate.create(name="welcome", channel_details=channel_details)


@pytest.fixture
def subscription_store() -> InMemorySubscriptionStore:
    return InMemorySubscriptionStore()


@pytest.fixture
def template_store() -> InMemoryTemplateStore:
    return InMemoryTemplateStore()


@pytest.fixture
def email_queue() -> InMemoryJobQueue:
    return InMemoryJobQueue(EMAIL_QUEUE)


@pytest.fixture
def ui_queue() -> InMemoryJobQueue:
    return InMemoryJobQueue(UI_QUEUE)


@pytest.fixture
def matcher(subscription_store: InMemorySubscriptionStore) -> SubscriptionMatcher:
    return SubscriptionMatcher(SubscriptionResolver(subscription_store))


@pytest.fixture
def orchestrator(
    matcher: SubscriptionMatcher,
    template_store: InMemoryTemplateStore,
    email_queue: InMemoryJobQueue,
    ui_queue: InMemoryJobQueue,
) -> DispatchOrchestrator:
    return DispatchOrchestrator(
        matcher,
        TemplateRepositoryAdapter(template_store),
        StaticProfileProvider(),
        {NotificationChannel.EMAIL: email_queue, NotificationChannel.UI: ui_queue},
    )


@pytest.fixture
def log_store() -> InMemoryNotificationLogStore:
    return InMemoryNotificationLogStore()


@pytest.fixture
def service(
    orchestrator: DispatchOrchestrator, log_store: InMemoryNotificationLogStore
) -> NotificationService:
    return NotificationService(orchestrator, log_store)


@pytest.fixture
async def mongo_connection():
    """MongoConnectionManager backed by mongomock-motor."""
    from mongomock_motor import AsyncMongoMockClient

    connection = MongoConnectionManager.__new__(MongoConnectionManager)
    connection._client = AsyncMongoMockClient(default_database_name="test_db")
    connection._database = "test_db"
    connection._url = "mongodb://mock:27017"

    async def _mock_connect():
        return connection._client

    connection.connect = _mock_connect
    return connection
