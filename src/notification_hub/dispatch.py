"""Dispatch orchestrator: fan a template out to every eligible channel's queue."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import Field

from .correlation import generate_correlation_id, get_correlation_id
from .domain.value_object import DomainModel
from .exceptions import ValidationError
from .queue.jobs import DEFAULT_JOB_OPTIONS, JOB_KINDS, JobOptions, JobPayload
from .rendering import TemplateRenderer, default_renderer

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .domain.enums import NotificationChannel
    from .ports.profile import IProfileProvider
    from .ports.queue import IJobSink
    from .subscriptions import SubscriptionMatcher
    from .templates import TemplateRepositoryAdapter

logger = logging.getLogger(__name__)

GENERAL = "general"

NO_ACTIVE_SUBSCRIPTIONS = "No active channel subscriptions found for user"
NO_MATCHING_CHANNELS = (
    "No matching active channels found between template and user subscriptions"
)


class ChannelError(DomainModel):
    """A failure scoped to one channel, or to ``general`` for the whole call."""

    channel: str
    error: str


class DispatchOutcome(DomainModel):
    """Aggregated result of one dispatch call.

    ``notified_channels`` lists channels an enqueue was attempted for,
    including unsupported ones; ``total_jobs_created`` counts only jobs the
    queue accepted.
    """

    success: bool = False
    notified_channels: list[str] = Field(default_factory=list)
    errors: list[ChannelError] = Field(default_factory=list)
    total_jobs_created: int = 0

    @classmethod
    def failure(cls, error: str, channel: str = GENERAL) -> DispatchOutcome:
        return cls(errors=[ChannelError(channel=channel, error=error)])

    def to_dict(self) -> dict[str, Any]:
        """Wire shape: ``{success, notifiedChannels, errors, totalJobsCreated}``."""
        return self.to_wire()


@dataclass(frozen=True)
class _Enqueued:
    channel: NotificationChannel
    handle: Any


class DispatchOrchestrator:
    """
    Resolves eligible channels, renders the template and enqueues one job per
    channel.

    Pipeline exits early, with a single ``general`` error, when there is no
    active subscription, no template, or no overlap between the two. Per
    channel failures (unsupported channel, enqueue raising or rejecting) are
    isolated and recorded; sibling channels still go out. Only the matcher's
    ``ValidationError`` propagates to the caller.
    """

    def __init__(
        self,
        matcher: SubscriptionMatcher,
        templates: TemplateRepositoryAdapter,
        profiles: IProfileProvider,
        job_sinks: Mapping[NotificationChannel, IJobSink],
        *,
        renderer: TemplateRenderer | None = None,
        job_options: JobOptions | None = None,
    ) -> None:
        self._matcher = matcher
        self._templates = templates
        self._profiles = profiles
        self._sinks = dict(job_sinks)
        self._renderer = renderer or default_renderer
        self._job_options = job_options or DEFAULT_JOB_OPTIONS

    async def dispatch(
        self,
        user_id: str | None = None,
        company_id: str | None = None,
        template_name: str = "",
    ) -> DispatchOutcome:
        """Dispatch ``template_name`` to a user and/or company.

        Raises:
            ValidationError: neither ``user_id`` nor ``company_id`` given.
        """
        start = time.monotonic()
        correlation_id = get_correlation_id() or generate_correlation_id()
        try:
            outcome = await self._run(user_id, company_id, template_name, correlation_id)
        except ValidationError:
            raise
        except Exception as e:  # noqa: BLE001
            logger.exception("Unexpected error dispatching %r", template_name)
            outcome = DispatchOutcome.failure(f"Unexpected error: {e}")

        self._log_summary(template_name, outcome, start, correlation_id)
        return outcome

    async def _run(
        self,
        user_id: str | None,
        company_id: str | None,
        template_name: str,
        correlation_id: str,
    ) -> DispatchOutcome:
        match = await self._matcher.resolve(user_id=user_id, company_id=company_id)
        subscribed = set(match.active_channels)
        if not subscribed:
            return DispatchOutcome.failure(NO_ACTIVE_SUBSCRIPTIONS)

        template = await self._templates.get(template_name)
        if template is None:
            return DispatchOutcome.failure(
                f"Notification template '{template_name}' not found"
            )

        channels = [ch for ch in template.active_channels() if ch in subscribed]
        if not channels:
            return DispatchOutcome.failure(NO_MATCHING_CHANNELS)

        profile = await self._profiles.get_by_id(user_id)
        context = profile.to_context()

        notified: list[str] = []
        errors: list[ChannelError] = []
        enqueued: list[_Enqueued] = []

        for channel in channels:
            rendered = self._renderer.render(template.channel_details[channel], context)
            kind = JOB_KINDS.get(channel)
            sink = self._sinks.get(channel) if kind is not None else None
            if kind is None or sink is None:
                errors.append(
                    ChannelError(
                        channel=channel.value,
                        error=f"Unsupported notification channel: {channel.value}",
                    )
                )
                notified.append(channel.value)
                continue

            payload = JobPayload(
                notification_name=template.name,
                subject=rendered.subject,
                content=rendered.content,
                user_id=user_id,
            )
            try:
                handle = sink.enqueue(
                    kind,
                    payload,
                    self._job_options,
                    correlation_id=correlation_id,
                )
            except Exception as e:  # noqa: BLE001
                logger.warning("Enqueue on %s raised: %s", channel.value, e)
                errors.append(
                    ChannelError(channel=channel.value, error=f"Failed to create job: {e}")
                )
                continue
            enqueued.append(_Enqueued(channel, handle))
            notified.append(channel.value)

        # One channel's transport failure must not cancel or hide its siblings.
        results = await asyncio.gather(
            *(_settle(item.handle) for item in enqueued), return_exceptions=True
        )
        created = 0
        for item, result in zip(enqueued, results):
            if isinstance(result, BaseException):
                logger.warning("Job on %s was rejected: %s", item.channel.value, result)
                errors.append(
                    ChannelError(
                        channel=item.channel.value,
                        error=f"Failed to create job: {result}",
                    )
                )
            else:
                created += 1
                logger.debug("Created job %s on %s", result, item.channel.value)

        return DispatchOutcome(
            success=created > 0,
            notified_channels=notified,
            errors=errors,
            total_jobs_created=created,
        )

    def _log_summary(
        self,
        template_name: str,
        outcome: DispatchOutcome,
        start: float,
        correlation_id: str,
    ) -> None:
        entry = {
            "template": template_name,
            "outcome": "success" if outcome.success else "failure",
            "notified_channels": outcome.notified_channels,
            "jobs_created": outcome.total_jobs_created,
            "errors": len(outcome.errors),
            "duration_ms": round((time.monotonic() - start) * 1000, 2),
            "correlation_id": correlation_id,
        }
        logger.info(json.dumps(entry))


async def _settle(handle: Any) -> Any:
    if inspect.isawaitable(handle):
        return await handle
    return handle
