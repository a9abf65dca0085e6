"""In-memory adapters for the store ports."""

from __future__ import annotations

from .memory import (
    InMemoryNotificationLogStore,
    InMemorySubscriptionStore,
    InMemoryTemplateStore,
)

__all__ = [
    "InMemoryNotificationLogStore",
    "InMemorySubscriptionStore",
    "InMemoryTemplateStore",
]
