"""bootstrap_notifications: one-call wiring of dispatch, queues and workers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .dispatch import DispatchOrchestrator
from .domain.enums import NotificationChannel
from .profiles import StaticProfileProvider
from .queue.rabbitmq import RabbitMQJobConsumer, RabbitMQJobSink
from .service import NotificationService
from .subscriptions import SubscriptionMatcher, SubscriptionResolver
from .templates import TemplateRepositoryAdapter
from .workers import EmailWorker, UiWorker

if TYPE_CHECKING:
    from .config import Settings
    from .ports.profile import IProfileProvider
    from .ports.stores import INotificationLogStore, ISubscriptionStore, ITemplateStore
    from .queue.rabbitmq import RabbitMQConnectionManager

logger = logging.getLogger(__name__)


class NotificationBootstrapResult:
    """Container returned by :func:`bootstrap_notifications`.

    Attributes:
        service: Facade used by callers to send and list notifications.
        orchestrator: The dispatch orchestrator behind ``service``.
        sinks: Job sink per supported channel.
        consumers: One consumer per channel queue; call ``start()`` on each
            in a worker process.
    """

    def __init__(
        self,
        service: NotificationService,
        orchestrator: DispatchOrchestrator,
        sinks: dict[NotificationChannel, RabbitMQJobSink],
        consumers: list[RabbitMQJobConsumer],
    ) -> None:
        self.service = service
        self.orchestrator = orchestrator
        self.sinks = sinks
        self.consumers = consumers


def bootstrap_notifications(
    *,
    settings: Settings,
    connection: RabbitMQConnectionManager,
    subscriptions: ISubscriptionStore,
    templates: ITemplateStore,
    logs: INotificationLogStore,
    profiles: IProfileProvider | None = None,
) -> NotificationBootstrapResult:
    """Wire the notification pipeline from settings.

    Queue names, job retry options, consumer prefetch and paging limits all
    come from ``settings``; stores and the broker connection are supplied by
    the caller so tests can pass in-memory stores and a mocked connection.
    """
    queue = settings.queue
    sinks = {
        NotificationChannel.EMAIL: RabbitMQJobSink(connection, queue.email_queue),
        NotificationChannel.UI: RabbitMQJobSink(connection, queue.ui_queue),
    }
    orchestrator = DispatchOrchestrator(
        SubscriptionMatcher(SubscriptionResolver(subscriptions)),
        TemplateRepositoryAdapter(templates),
        profiles or StaticProfileProvider(),
        sinks,
        job_options=queue.job_options(),
    )
    service = NotificationService(orchestrator, logs, pagination=settings.pagination)
    consumers = [
        RabbitMQJobConsumer(
            connection,
            queue_name,
            worker,
            prefetch_count=queue.prefetch_count,
        )
        for queue_name, worker in (
            (queue.email_queue, EmailWorker(service)),
            (queue.ui_queue, UiWorker(service)),
        )
    ]
    logger.info(
        "Notification pipeline wired: queues %s, %s (attempts=%d, prefetch=%d)",
        queue.email_queue,
        queue.ui_queue,
        queue.attempts,
        queue.prefetch_count,
    )
    return NotificationBootstrapResult(service, orchestrator, sinks, consumers)
