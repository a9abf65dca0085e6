"""Recipient profile and the flat template context derived from it."""

from __future__ import annotations

from .value_object import DomainModel

RecipientContext = dict[str, str]


class RecipientProfile(DomainModel):
    """Profile data of a notification recipient, owned by an external service."""

    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    company_name: str
    phone: str | None = None

    def to_context(self) -> RecipientContext:
        """Flatten to template-substitution input keyed by camelCase names.

        Unset optional fields are omitted so their placeholders stay verbatim.
        """
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return {key: str(value) for key, value in data.items()}
