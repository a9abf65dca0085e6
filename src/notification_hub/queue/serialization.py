"""JobSerializer: JSON roundtrip for job envelopes."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import JobSerializationError
from .jobs import Job


def _json_serializer(obj: Any) -> Any:
    """Serialize datetime and other non-JSON types."""
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class JobSerializer:
    """Serialize/deserialize :class:`Job` to/from JSON bytes (camelCase keys)."""

    def serialize(self, job: Job) -> bytes:
        """Encode job to JSON bytes."""
        try:
            data = job.model_dump(mode="json", by_alias=True)
            return json.dumps(data, default=_json_serializer).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise JobSerializationError(str(e)) from e

    def deserialize(self, raw: bytes) -> Job:
        """Decode JSON bytes to a :class:`Job`."""
        try:
            data = json.loads(raw.decode("utf-8"))
            return Job.model_validate(data)
        except (json.JSONDecodeError, UnicodeDecodeError, PydanticValidationError) as e:
            raise JobSerializationError(str(e)) from e
