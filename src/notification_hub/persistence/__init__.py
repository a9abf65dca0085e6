"""MongoDB persistence for subscriptions, templates and notification logs."""

from __future__ import annotations

from .connection import MongoConnectionManager
from .indexes import NOTIFICATIONS, SUBSCRIPTIONS, TEMPLATES, ensure_indexes
from .repositories import (
    MongoChannelSubscriptionRepository,
    MongoNotificationLogRepository,
    MongoNotificationTemplateRepository,
)
from .serialization import model_from_doc, model_to_doc

__all__ = [
    "NOTIFICATIONS",
    "SUBSCRIPTIONS",
    "TEMPLATES",
    "MongoChannelSubscriptionRepository",
    "MongoConnectionManager",
    "MongoNotificationLogRepository",
    "MongoNotificationTemplateRepository",
    "ensure_indexes",
    "model_from_doc",
    "model_to_doc",
]
