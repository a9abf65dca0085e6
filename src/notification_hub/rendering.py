"""Placeholder renderer for template subjects and bodies."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .domain.template import RenderedMessage

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .domain.template import ChannelDetail

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")


class TemplateRenderer:
    """
    Substitutes ``{{identifier}}`` tokens from a flat context mapping.

    A token whose identifier is missing from the context is left verbatim.
    Rendering never raises and has no side effects.
    """

    def __init__(self, pattern: re.Pattern[str] = PLACEHOLDER_PATTERN) -> None:
        self._pattern = pattern

    def render(
        self, detail: ChannelDetail, context: Mapping[str, object]
    ) -> RenderedMessage:
        """Render a channel detail into a subject/content pair."""
        return RenderedMessage(
            subject=self.substitute(detail.subject, context),
            content=self.substitute(detail.body, context),
        )

    def substitute(self, text: str | None, context: Mapping[str, object]) -> str:
        if not text:
            return ""

        def _replace(match: re.Match[str]) -> str:
            key = match.group(1)
            if key in context:
                return str(context[key])
            logger.debug("Placeholder %r has no value in context", key)
            return match.group(0)

        return self._pattern.sub(_replace, text)


default_renderer = TemplateRenderer()
