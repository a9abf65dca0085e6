"""notification-hub: subscription-aware notification fan-out.

Matches a recipient's active channel subscriptions against a template,
renders the template per channel and enqueues one job per channel.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import (
    InMemoryNotificationLogStore,
    InMemorySubscriptionStore,
    InMemoryTemplateStore,
)
from .correlation import (
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

# ── Dispatch ─────────────────────────────────────────────────────
from .dispatch import ChannelError, DispatchOrchestrator, DispatchOutcome

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    ChannelDetail,
    ChannelGroup,
    ChannelSubscription,
    NotificationChannel,
    NotificationLog,
    NotificationTemplate,
    RecipientContext,
    RecipientProfile,
    RenderedMessage,
    SubscriberType,
)
from .exceptions import (
    DispatchFailedError,
    DomainError,
    DuplicateRecordError,
    InfrastructureError,
    InvariantViolationError,
    JobSerializationError,
    NotificationHubError,
    PersistenceError,
    QueueConnectionError,
    QueueError,
    StoreConnectionError,
    ValidationError,
)
from .profiles import StaticProfileProvider

# ── Queue ────────────────────────────────────────────────────────
from .queue import (
    DEFAULT_JOB_OPTIONS,
    JOB_KINDS,
    BackoffPolicy,
    InMemoryJobQueue,
    Job,
    JobOptions,
    JobPayload,
)
from .rendering import TemplateRenderer
from .service import NotificationPage, NotificationService, SendNotificationResult
from .subscriptions import SubscriptionMatch, SubscriptionMatcher, SubscriptionResolver
from .templates import TemplateRepositoryAdapter

# ── Workers ──────────────────────────────────────────────────────
from .workers import ChannelWorker, EmailWorker, UiWorker

__all__ = [
    "DEFAULT_JOB_OPTIONS",
    "JOB_KINDS",
    "BackoffPolicy",
    "ChannelDetail",
    "ChannelError",
    "ChannelGroup",
    "ChannelSubscription",
    "ChannelWorker",
    "DispatchFailedError",
    "DispatchOrchestrator",
    "DispatchOutcome",
    "DomainError",
    "DuplicateRecordError",
    "EmailWorker",
    "InMemoryJobQueue",
    "InMemoryNotificationLogStore",
    "InMemorySubscriptionStore",
    "InMemoryTemplateStore",
    "InfrastructureError",
    "InvariantViolationError",
    "Job",
    "JobOptions",
    "JobPayload",
    "JobSerializationError",
    "NotificationChannel",
    "NotificationHubError",
    "NotificationLog",
    "NotificationPage",
    "NotificationService",
    "NotificationTemplate",
    "PersistenceError",
    "QueueConnectionError",
    "QueueError",
    "RecipientContext",
    "RecipientProfile",
    "RenderedMessage",
    "SendNotificationResult",
    "StaticProfileProvider",
    "StoreConnectionError",
    "SubscriberType",
    "SubscriptionMatch",
    "SubscriptionMatcher",
    "SubscriptionResolver",
    "TemplateRenderer",
    "TemplateRepositoryAdapter",
    "UiWorker",
    "ValidationError",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]
