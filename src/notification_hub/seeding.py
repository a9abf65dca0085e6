"""Default subscriptions and templates for development databases.

Run ``python -m notification_hub.seeding`` to load them into the configured
MongoDB; records that already exist are skipped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from .domain.enums import NotificationChannel, SubscriberType
from .domain.subscription import ChannelSubscription
from .domain.template import NotificationTemplate
from .exceptions import DuplicateRecordError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .ports.stores import ISubscriptionStore, ITemplateStore

logger = logging.getLogger(__name__)

SEED_AUTHOR_ID = "507f1f77bcf86cd799439011"

_USER = SubscriberType.USER
_COMPANY = SubscriberType.COMPANY

DEFAULT_SUBSCRIPTIONS: tuple[tuple[str, SubscriberType, NotificationChannel, bool], ...] = (
    ("user-001", _USER, NotificationChannel.EMAIL, True),
    ("user-001", _USER, NotificationChannel.UI, True),
    ("user-002", _USER, NotificationChannel.EMAIL, True),
    ("user-002", _USER, NotificationChannel.SMS, False),
    ("user-003", _USER, NotificationChannel.EMAIL, True),
    ("user-003", _USER, NotificationChannel.MOBILE_PUSH, True),
    ("user-004", _USER, NotificationChannel.WHATSAPP, True),
    ("user-005", _USER, NotificationChannel.EMAIL, True),
    ("user-005", _USER, NotificationChannel.UI, True),
    ("user-006", _USER, NotificationChannel.EMAIL, False),
    ("company-001", _COMPANY, NotificationChannel.EMAIL, True),
    ("company-001", _COMPANY, NotificationChannel.UI, True),
    ("company-002", _COMPANY, NotificationChannel.EMAIL, True),
    ("company-002", _COMPANY, NotificationChannel.SMS, True),
    ("company-003", _COMPANY, NotificationChannel.EMAIL, False),
)

DEFAULT_TEMPLATES: tuple[dict[str, Any], ...] = (
    {
        "name": "leave-balance-reminder",
        "description": "To remind user he has to take his leave",
        "channel_details": {
            NotificationChannel.UI: {
                "active": True,
                "body": (
                    "<p>Dear {{fullName}},</p><p>You have {{leaveBalance}} days of "
                    "leave remaining. Please plan your leave accordingly.</p>"
                    "<p>Best regards,<br>HR Team</p>"
                ),
            },
        },
    },
    {
        "name": "monthly-payslip",
        "description": "To inform the user his payslip is available",
        "channel_details": {
            NotificationChannel.EMAIL: {
                "active": True,
                "subject": "Your Monthly Payslip is Available",
                "body": (
                    "<p>Dear {{fullName}},</p><p>Your monthly payslip for this month "
                    "is now available for download.</p><p>Please log in to your "
                    "employee portal to access it.</p>"
                    "<p>Best regards,<br>HR Department</p>"
                ),
            },
        },
    },
    {
        "name": "happy-birthday",
        "description": "To inform the user the company wishes him a happy birthday",
        "channel_details": {
            NotificationChannel.EMAIL: {
                "active": True,
                "subject": "Happy Birthday from All of Us!",
                "body": (
                    "<p>Dear {{fullName}},</p><p>Wishing you a very happy birthday "
                    "filled with joy, laughter, and wonderful moments!</p><p>May this "
                    "special day bring you happiness and success in the year "
                    "ahead.</p><p>Best wishes from your colleagues at "
                    "{{companyName}}</p>"
                ),
            },
            NotificationChannel.UI: {
                "active": True,
                "body": (
                    "<p>\U0001f389 Happy Birthday {{fullName}}! \U0001f382</p>"
                    "<p>Wishing you a fantastic day filled with joy and "
                    "celebration!</p>"
                ),
            },
        },
    },
)


def default_subscriptions() -> list[ChannelSubscription]:
    return [
        ChannelSubscription.create(
            subscriber_id=subscriber_id,
            subscriber_type=subscriber_type,
            channel=channel,
            is_active=is_active,
        )
        for subscriber_id, subscriber_type, channel, is_active in DEFAULT_SUBSCRIPTIONS
    ]


def default_templates() -> list[NotificationTemplate]:
    return [
        NotificationTemplate.create(
            **fields, created_by=SEED_AUTHOR_ID, updated_by=SEED_AUTHOR_ID
        )
        for fields in DEFAULT_TEMPLATES
    ]


async def seed_subscriptions(
    store: ISubscriptionStore,
    subscriptions: Iterable[ChannelSubscription] | None = None,
) -> int:
    """Insert subscriptions, skipping ones that already exist. Returns inserted."""
    inserted = 0
    for sub in subscriptions if subscriptions is not None else default_subscriptions():
        try:
            await store.add(sub)
        except DuplicateRecordError:
            logger.info(
                "Subscription %s/%s already exists; skipping",
                sub.subscriber_id,
                sub.channel.value,
            )
            continue
        inserted += 1
    logger.info("Seeded %d channel subscription(s)", inserted)
    return inserted


async def seed_templates(
    store: ITemplateStore,
    templates: Iterable[NotificationTemplate] | None = None,
) -> int:
    """Insert templates, skipping names that already exist. Returns inserted."""
    inserted = 0
    for template in templates if templates is not None else default_templates():
        try:
            await store.add(template)
        except DuplicateRecordError:
            logger.info("Template %r already exists; skipping", template.name)
            continue
        logger.info("- %s: %s", template.name, template.description)
        inserted += 1
    logger.info("Seeded %d notification template(s)", inserted)
    return inserted


async def _seed_database() -> None:
    from .config import get_settings
    from .persistence import (
        MongoChannelSubscriptionRepository,
        MongoConnectionManager,
        MongoNotificationTemplateRepository,
    )

    connection = MongoConnectionManager.from_settings(get_settings().database)
    await connection.initialize()
    try:
        await seed_subscriptions(MongoChannelSubscriptionRepository(connection))
        await seed_templates(MongoNotificationTemplateRepository(connection))
    finally:
        connection.close()


def main() -> None:
    from .config import configure_logging

    configure_logging()
    asyncio.run(_seed_database())


if __name__ == "__main__":
    main()
