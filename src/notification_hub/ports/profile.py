"""Profile provider port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.profile import RecipientProfile


@runtime_checkable
class IProfileProvider(Protocol):
    """Resolves recipient profile data used as template context.

    Implementations must not fail for unknown ids; they return a
    deterministic placeholder profile instead.
    """

    async def get_by_id(self, user_id: str | None) -> RecipientProfile: ...
