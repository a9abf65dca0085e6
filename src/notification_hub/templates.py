"""Template lookup by name."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .domain.template import NotificationTemplate
    from .ports.stores import ITemplateStore


class TemplateRepositoryAdapter:
    """Read-only access to notification templates."""

    def __init__(self, store: ITemplateStore) -> None:
        self._store = store

    async def get(self, name: str) -> NotificationTemplate | None:
        """Return the template named ``name`` or None."""
        if not name or not name.strip():
            return None
        return await self._store.find_by_name(name.strip())
