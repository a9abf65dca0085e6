"""In-app (UI) channel worker. UI notifications carry no subject line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..domain.enums import NotificationChannel
from ..queue.jobs import SEND_UI, UI_QUEUE
from .base import ChannelWorker

if TYPE_CHECKING:
    from ..queue.jobs import JobPayload


class UiWorker(ChannelWorker):
    channel = NotificationChannel.UI
    job_kind = SEND_UI
    queue_name = UI_QUEUE
    title = "UI NOTIFICATION"

    def log_subject(self, payload: JobPayload) -> str:  # noqa: ARG002
        return ""
