"""Job contract and queue transports for channel jobs."""

from __future__ import annotations

from .jobs import (
    DEFAULT_JOB_OPTIONS,
    EMAIL_QUEUE,
    JOB_KINDS,
    SEND_EMAIL,
    SEND_UI,
    UI_QUEUE,
    BackoffPolicy,
    Job,
    JobOptions,
    JobPayload,
)
from .memory import InMemoryJobQueue
from .serialization import JobSerializer

__all__ = [
    "DEFAULT_JOB_OPTIONS",
    "EMAIL_QUEUE",
    "JOB_KINDS",
    "SEND_EMAIL",
    "SEND_UI",
    "UI_QUEUE",
    "BackoffPolicy",
    "InMemoryJobQueue",
    "Job",
    "JobOptions",
    "JobPayload",
    "JobSerializer",
]
