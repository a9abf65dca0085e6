"""MongoDB stores for subscriptions, templates and notification logs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from ..domain.enums import NotificationChannel
from ..domain.notification import NotificationLog
from ..domain.subscription import ChannelSubscription
from ..domain.template import NotificationTemplate
from ..exceptions import DuplicateRecordError
from ..ports.stores import INotificationLogStore, ISubscriptionStore, ITemplateStore
from .indexes import NOTIFICATIONS, SUBSCRIPTIONS, TEMPLATES
from .serialization import model_from_doc, model_to_doc

if TYPE_CHECKING:
    from ..domain.enums import SubscriberType
    from .connection import MongoConnectionManager

logger = logging.getLogger(__name__)

_KNOWN_CHANNELS = frozenset(ch.value for ch in NotificationChannel)


def _known_channel_details(doc: dict[str, Any]) -> dict[str, Any]:
    """Drop ``channelDetails`` entries for channels this service cannot map.

    Documents are shared with other writers; an unknown key must not make the
    whole template unreadable.
    """
    details = doc.get("channelDetails")
    if not isinstance(details, dict):
        return doc
    unknown = [key for key in details if key not in _KNOWN_CHANNELS]
    if not unknown:
        return doc
    logger.warning(
        "Ignoring unknown channels %s in template %r", unknown, doc.get("name")
    )
    return {
        **doc,
        "channelDetails": {k: v for k, v in details.items() if k in _KNOWN_CHANNELS},
    }


class _MongoStore:
    """Shared collection access for the concrete stores."""

    collection_name: str

    def __init__(
        self,
        connection: MongoConnectionManager,
        *,
        collection: str | None = None,
    ) -> None:
        self._connection = connection
        self._collection_name = collection or self.collection_name

    def _collection(self) -> Any:
        return self._connection.database.get_collection(self._collection_name)

    async def _insert(self, doc: dict[str, Any]) -> str:
        if "_id" not in doc:
            doc["_id"] = ObjectId()
        try:
            await self._collection().insert_one(doc)
        except DuplicateKeyError as e:
            raise DuplicateRecordError(str(e)) from e
        return str(doc["_id"])


class MongoChannelSubscriptionRepository(_MongoStore, ISubscriptionStore):
    """Subscriptions keyed by ``(subscriberId, subscriberType, channel)``."""

    collection_name = SUBSCRIPTIONS

    async def find_by_subscriber(
        self, subscriber_id: str, subscriber_type: SubscriberType
    ) -> list[ChannelSubscription]:
        cursor = self._collection().find(
            {"subscriberId": subscriber_id, "subscriberType": subscriber_type.value}
        )
        found: list[ChannelSubscription] = []
        async for doc in cursor:
            if doc.get("channel") not in _KNOWN_CHANNELS:
                logger.warning(
                    "Skipping subscription %s with unknown channel %r",
                    doc.get("_id"),
                    doc.get("channel"),
                )
                continue
            found.append(model_from_doc(ChannelSubscription, doc))
        return found

    async def add(self, subscription: ChannelSubscription) -> str:
        return await self._insert(model_to_doc(subscription))


class MongoNotificationTemplateRepository(_MongoStore, ITemplateStore):
    collection_name = TEMPLATES

    async def find_by_name(self, name: str) -> NotificationTemplate | None:
        doc = await self._collection().find_one({"name": name})
        if doc is None:
            return None
        return model_from_doc(NotificationTemplate, _known_channel_details(doc))

    async def add(self, template: NotificationTemplate) -> str:
        return await self._insert(model_to_doc(template))


class MongoNotificationLogRepository(_MongoStore, INotificationLogStore):
    """Append-only notification history, read newest first."""

    collection_name = NOTIFICATIONS

    async def insert(self, log: NotificationLog) -> NotificationLog:
        doc_id = await self._insert(model_to_doc(log))
        logger.debug(
            "Stored %s notification %s for %s",
            log.notification_channel.value,
            doc_id,
            log.user_id,
        )
        return log

    async def list_by_channel_and_user(
        self,
        channel: NotificationChannel,
        user_id: str,
        page: int,
        limit: int,
    ) -> tuple[list[NotificationLog], int]:
        query = {"notificationChannel": channel.value, "userId": user_id}
        coll = self._collection()
        cursor = (
            coll.find(query)
            .sort("createdAt", DESCENDING)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        items = [model_from_doc(NotificationLog, doc) async for doc in cursor]
        total = await coll.count_documents(query)
        return items, total
