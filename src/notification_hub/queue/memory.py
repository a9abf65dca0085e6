"""InMemoryJobQueue: IJobSink with synchronous draining for tests and local runs."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from ..ports.queue import IJobSink
from .jobs import Job

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from typing import Any

    from .jobs import JobOptions, JobPayload

logger = logging.getLogger(__name__)


class InMemoryJobQueue(IJobSink):
    """In-memory queue that buffers jobs until :meth:`drain` hands them to a worker.

    Retries follow ``options.attempts``; backoff delays are not slept.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._enqueued: list[Job] = []
        self._pending: deque[Job] = deque()
        self.completed: list[Job] = []
        self.failed: list[tuple[Job, str]] = []

    async def enqueue(
        self,
        job_kind: str,
        payload: JobPayload,
        options: JobOptions,
        *,
        correlation_id: str | None = None,
    ) -> str:
        job = Job(
            queue=self.name,
            kind=job_kind,
            payload=payload,
            options=options,
            correlation_id=correlation_id,
        )
        self._enqueued.append(job)
        self._pending.append(job)
        logger.debug("Enqueued %s job %s on %s", job_kind, job.id, self.name)
        return job.id

    async def drain(
        self, handler: Callable[[Job], Coroutine[Any, Any, None]]
    ) -> int:
        """Run every pending job through ``handler``. Returns jobs completed."""
        done = 0
        while self._pending:
            job = self._pending.popleft()
            try:
                await handler(job)
            except Exception as e:  # noqa: BLE001
                if job.options.should_retry(job.attempt):
                    logger.warning(
                        "Job %s attempt %d failed, retrying: %s", job.id, job.attempt, e
                    )
                    self._pending.append(job.next_attempt())
                else:
                    logger.error("Job %s failed after %d attempts", job.id, job.attempt)
                    self.failed.append((job, str(e)))
            else:
                self.completed.append(job)
                done += 1
        return done

    def get_enqueued(self, kind: str | None = None) -> list[Job]:
        """Return every job enqueued so far, optionally filtered by kind."""
        if kind is None:
            return list(self._enqueued)
        return [job for job in self._enqueued if job.kind == kind]

    def assert_enqueued(self, kind: str, count: int = 1) -> None:
        """Assert that exactly ``count`` jobs of ``kind`` were enqueued."""
        matching = self.get_enqueued(kind)
        assert len(matching) == count, (
            f"Expected {count} job(s) of kind={kind!r} on {self.name}, "
            f"got {len(matching)}. Enqueued: {[j.kind for j in self._enqueued]}"
        )

    @property
    def pending(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        """Drop all jobs and results (for test teardown)."""
        self._enqueued.clear()
        self._pending.clear()
        self.completed.clear()
        self.failed.clear()
