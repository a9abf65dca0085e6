"""Immutable model base shared by every domain record."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Timezone-aware current time used for record timestamps."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base class for the read-only domain records.

    Records are frozen and compared structurally. Field names are snake_case
    in Python and camelCase on the wire (``subscriber_id`` <-> ``subscriberId``);
    both spellings are accepted on input.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, object]:
        """Dump to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
