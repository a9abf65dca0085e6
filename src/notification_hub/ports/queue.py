"""Job sink port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..queue.jobs import JobOptions, JobPayload


@runtime_checkable
class IJobSink(Protocol):
    """
    Port for handing a channel job to a queue transport.

    Retries and backoff are the transport's business; ``options`` only
    describes them. The returned awaitable resolves to the job id or raises a
    transport error.
    """

    async def enqueue(
        self,
        job_kind: str,
        payload: JobPayload,
        options: JobOptions,
        *,
        correlation_id: str | None = None,
    ) -> str: ...
