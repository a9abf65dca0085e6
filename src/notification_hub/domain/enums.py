"""Channel and subscriber enumerations shared by storage, templates and workers."""

from __future__ import annotations

from enum import Enum


class NotificationChannel(str, Enum):
    """Supported notification channels.

    Values are the wire representation used in stored documents, template
    ``channelDetails`` keys and job payloads.
    """

    EMAIL = "email"
    SMS = "sms"
    WHATSAPP = "whatsapp"
    UI = "ui"
    MOBILE_PUSH = "mobile_push"


class SubscriberType(str, Enum):
    """Kinds of subscriber that can own a channel subscription.

    Only ``USER`` and ``COMPANY`` take part in channel matching today.
    """

    USER = "user"
    EMPLOYEE = "employee"
    COMPANY = "company"
    DEPARTMENT = "department"
    TEAM = "team"
