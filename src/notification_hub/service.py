"""NotificationService: the application facade over dispatch and log reads."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from pydantic import Field

from .domain.enums import NotificationChannel
from .domain.notification import NotificationLog
from .domain.value_object import DomainModel
from .exceptions import DispatchFailedError, ValidationError

if TYPE_CHECKING:
    from .config import PaginationSettings
    from .dispatch import DispatchOrchestrator, DispatchOutcome
    from .ports.stores import INotificationLogStore

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class SendNotificationResult(DomainModel):
    success: bool
    message: str


class NotificationPage(DomainModel):
    """One page of notification history, newest first."""

    items: list[NotificationLog] = Field(default_factory=list)
    page: int
    limit: int
    total: int
    total_pages: int


class NotificationService:
    """
    Entry point used by controllers and channel workers.

    Wraps the orchestrator with request validation and a readable result, and
    owns the notification log: workers write through
    :meth:`create_notification_log`, inbox views read through
    :meth:`list_by_channel_and_user`.
    """

    def __init__(
        self,
        orchestrator: DispatchOrchestrator,
        logs: INotificationLogStore,
        *,
        pagination: PaginationSettings | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._logs = logs
        self._default_limit = pagination.default_limit if pagination else DEFAULT_LIMIT
        self._max_limit = pagination.max_limit if pagination else MAX_LIMIT

    async def dispatch(
        self,
        user_id: str | None = None,
        company_id: str | None = None,
        template_name: str = "",
    ) -> DispatchOutcome:
        return await self._orchestrator.dispatch(
            user_id=user_id, company_id=company_id, template_name=template_name
        )

    async def send_notification(
        self,
        user_id: str,
        notification_name: str,
        company_id: str | None = None,
    ) -> SendNotificationResult:
        """Dispatch a named notification to a user.

        Raises:
            ValidationError: missing ``user_id`` or ``notification_name``.
            DispatchFailedError: no job could be created.
        """
        errors: dict[str, list[str]] = {}
        if not user_id or not user_id.strip():
            errors["userId"] = ["User ID is required"]
        if not notification_name or not notification_name.strip():
            errors["notificationName"] = ["Notification name is required"]
        if errors:
            raise ValidationError(errors)

        outcome = await self.dispatch(
            user_id=user_id, company_id=company_id, template_name=notification_name
        )
        if not outcome.success:
            pairs = [(e.channel, e.error) for e in outcome.errors]
            raise DispatchFailedError(
                "; ".join(f"{channel}: {error}" for channel, error in pairs), pairs
            )

        return SendNotificationResult(
            success=True,
            message=(
                f"Jobs created: {outcome.total_jobs_created} on channels: "
                f"{', '.join(outcome.notified_channels)}"
            ),
        )

    async def create_notification_log(
        self,
        notification_name: str,
        subject: str | None,
        content: str,
        user_id: str,
        channel: NotificationChannel | str,
    ) -> NotificationLog:
        log = NotificationLog.create(
            notification_name=notification_name,
            subject=subject,
            content=content,
            user_id=user_id,
            notification_channel=channel,
        )
        saved = await self._logs.insert(log)
        logger.info(
            "Logged %s notification %r for %s",
            saved.notification_channel.value,
            saved.notification_name,
            saved.user_id,
        )
        return saved

    async def list_by_channel_and_user(
        self,
        channel: NotificationChannel | str,
        user_id: str,
        page: int = 1,
        limit: int | None = None,
    ) -> NotificationPage:
        """Return one page of a user's notifications on a channel.

        Raises:
            ValidationError: unknown channel, missing user, or page/limit out
                of range.
        """
        limit = self._default_limit if limit is None else limit
        errors: dict[str, list[str]] = {}
        try:
            target = NotificationChannel(channel)
        except ValueError:
            errors["channel"] = [f"Invalid channel type: {channel}"]
        if not user_id or not user_id.strip():
            errors["userId"] = ["User ID is required"]
        if page < 1:
            errors["page"] = ["Page must be at least 1"]
        if limit < 1 or limit > self._max_limit:
            errors["limit"] = [f"Limit must be between 1 and {self._max_limit}"]
        if errors:
            raise ValidationError(errors)

        items, total = await self._logs.list_by_channel_and_user(
            target, user_id, page, limit
        )
        return NotificationPage(
            items=items,
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        )

    async def list_ui_notifications(
        self, user_id: str, page: int = 1, limit: int | None = None
    ) -> NotificationPage:
        """The UI inbox: a user's ``ui`` channel history."""
        return await self.list_by_channel_and_user(
            NotificationChannel.UI, user_id, page, limit
        )
