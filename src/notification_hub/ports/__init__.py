"""Port definitions for notification-hub collaborators."""

from __future__ import annotations

from .profile import IProfileProvider
from .queue import IJobSink
from .stores import INotificationLogStore, ISubscriptionStore, ITemplateStore

__all__ = [
    "IJobSink",
    "INotificationLogStore",
    "IProfileProvider",
    "ISubscriptionStore",
    "ITemplateStore",
]
