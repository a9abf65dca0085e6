"""Profile provider backed by a fixed directory of known recipients."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .domain.profile import RecipientProfile
from .ports.profile import IProfileProvider

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown User"

DEFAULT_PROFILES: tuple[RecipientProfile, ...] = (
    RecipientProfile(
        id="user-001",
        email="john.doe@techcorp.com",
        first_name="John",
        last_name="Doe",
        full_name="John Doe",
        company_name="TechCorp Solutions",
        phone="+1-555-0123",
    ),
    RecipientProfile(
        id="user-002",
        email="sarah.smith@innovatetech.com",
        first_name="Sarah",
        last_name="Smith",
        full_name="Sarah Smith",
        company_name="InnovateTech Ltd",
        phone="+1-555-0456",
    ),
    RecipientProfile(
        id="user-003",
        email="mike.johnson@globaltech.com",
        first_name="Mike",
        last_name="Johnson",
        full_name="Mike Johnson",
        company_name="GlobalTech Industries",
        phone="+1-555-0789",
    ),
)


def placeholder_profile(user_id: str | None) -> RecipientProfile:
    """Deterministic stand-in for a recipient the directory does not know."""
    return RecipientProfile(
        id=user_id or "",
        email=f"user-{user_id}@example.com",
        first_name="Unknown",
        last_name="User",
        full_name=UNKNOWN_USER,
        company_name="Unknown Company",
    )


class StaticProfileProvider(IProfileProvider):
    """Looks recipients up in an in-process directory; never fails."""

    def __init__(self, profiles: Iterable[RecipientProfile] = DEFAULT_PROFILES) -> None:
        self._profiles = {profile.id: profile for profile in profiles}

    async def get_by_id(self, user_id: str | None) -> RecipientProfile:
        profile = self._profiles.get(user_id) if user_id else None
        if profile is None:
            logger.debug("No profile for %r; using placeholder", user_id)
            return placeholder_profile(user_id)
        return profile
