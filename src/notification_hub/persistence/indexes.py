"""Index definitions for the notification collections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .connection import MongoConnectionManager

logger = logging.getLogger(__name__)

SUBSCRIPTIONS = "channel_subscriptions"
TEMPLATES = "notification_templates"
NOTIFICATIONS = "notifications"


async def create_compound_index(
    connection: MongoConnectionManager,
    collection: str,
    keys: list[tuple[str, int]],
    *,
    name: str | None = None,
    unique: bool = False,
) -> str:
    """Create a compound index. keys: [(field, 1|(-1)), ...]. Returns index name."""
    coll = connection.database.get_collection(collection)
    return await coll.create_index(keys, name=name, unique=unique)


async def ensure_indexes(connection: MongoConnectionManager) -> list[str]:
    """Create every index the repositories rely on. Safe to call repeatedly."""
    names = [
        await create_compound_index(
            connection,
            SUBSCRIPTIONS,
            [("subscriberId", 1), ("subscriberType", 1), ("channel", 1)],
            name="uniq_subscriber_channel",
            unique=True,
        ),
        await create_compound_index(
            connection,
            SUBSCRIPTIONS,
            [("subscriberId", 1), ("subscriberType", 1)],
            name="subscriber",
        ),
        await create_compound_index(
            connection, SUBSCRIPTIONS, [("isActive", 1)], name="is_active"
        ),
        await create_compound_index(
            connection, TEMPLATES, [("name", 1)], name="uniq_name", unique=True
        ),
        await create_compound_index(
            connection,
            NOTIFICATIONS,
            [("notificationChannel", 1), ("userId", 1), ("createdAt", -1)],
            name="channel_user_created",
        ),
    ]
    logger.info("Ensured %d indexes on %s", len(names), connection.database_name)
    return names
