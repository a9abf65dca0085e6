"""Read-only domain records and enumerations."""

from __future__ import annotations

from .enums import NotificationChannel, SubscriberType
from .notification import NotificationLog
from .profile import RecipientContext, RecipientProfile
from .subscription import ChannelGroup, ChannelSubscription
from .template import ChannelDetail, NotificationTemplate, RenderedMessage
from .value_object import DomainModel, utcnow

__all__ = [
    "ChannelDetail",
    "ChannelGroup",
    "ChannelSubscription",
    "DomainModel",
    "NotificationChannel",
    "NotificationLog",
    "NotificationTemplate",
    "RecipientContext",
    "RecipientProfile",
    "RenderedMessage",
    "SubscriberType",
    "utcnow",
]
