"""ChannelWorker: shared job handling for the per-channel consumers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from ..exceptions import ValidationError

if TYPE_CHECKING:
    from ..domain.enums import NotificationChannel
    from ..queue.jobs import Job, JobPayload
    from ..service import NotificationService

logger = logging.getLogger(__name__)


class ChannelWorker:
    """
    Delivers one channel's jobs and records them in the notification log.

    Delivery here is a console echo; a real provider plugs in by overriding
    :meth:`deliver`. Recording the log is best effort: a failure is logged and
    the job still counts as delivered.
    """

    channel: ClassVar[NotificationChannel]
    job_kind: ClassVar[str]
    queue_name: ClassVar[str]
    title: ClassVar[str]

    def __init__(
        self, service: NotificationService, *, output_to_stdout: bool = True
    ) -> None:
        self._service = service
        self.output_to_stdout = output_to_stdout

    async def __call__(self, job: Job) -> None:
        await self.handle(job)

    async def handle(self, job: Job) -> None:
        """Process one job. Raises ValidationError for a job of another kind."""
        if job.kind != self.job_kind:
            raise ValidationError(
                {"kind": [f"{type(self).__name__} cannot process job kind {job.kind!r}"]}
            )
        logger.info(
            "Processing %s job %s (attempt %d) for %s",
            job.kind,
            job.id,
            job.attempt,
            job.payload.user_id,
        )
        await self.deliver(job.payload)
        await self._record(job.payload)

    async def deliver(self, payload: JobPayload) -> None:
        full_output = "\n".join(self.format(payload))
        logger.info(full_output)
        if self.output_to_stdout:
            print(full_output)

    def format(self, payload: JobPayload) -> list[str]:
        return [
            f"=== {self.title} ===",
            f"To: User {payload.user_id}",
            f"Notification: {payload.notification_name}",
            f"Content: {payload.content}",
            "=" * (len(self.title) + 8),
        ]

    def log_subject(self, payload: JobPayload) -> str:
        return payload.subject

    async def _record(self, payload: JobPayload) -> None:
        try:
            await self._service.create_notification_log(
                notification_name=payload.notification_name,
                subject=self.log_subject(payload),
                content=payload.content,
                user_id=payload.user_id or "",
                channel=self.channel,
            )
        except Exception as e:  # noqa: BLE001
            logger.error(
                "Failed to log %s notification %r for %s: %s",
                self.channel.value,
                payload.notification_name,
                payload.user_id,
                e,
            )
