"""Email channel worker."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..domain.enums import NotificationChannel
from ..queue.jobs import EMAIL_QUEUE, SEND_EMAIL
from .base import ChannelWorker

if TYPE_CHECKING:
    from ..queue.jobs import JobPayload


class EmailWorker(ChannelWorker):
    channel = NotificationChannel.EMAIL
    job_kind = SEND_EMAIL
    queue_name = EMAIL_QUEUE
    title = "EMAIL NOTIFICATION"

    def format(self, payload: JobPayload) -> list[str]:
        lines = super().format(payload)
        lines.insert(2, f"Subject: {payload.subject or '(No Subject)'}")
        return lines
