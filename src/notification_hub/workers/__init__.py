"""Per-channel job workers."""

from __future__ import annotations

from .base import ChannelWorker
from .email import EmailWorker
from .ui import UiWorker

__all__ = ["ChannelWorker", "EmailWorker", "UiWorker"]
