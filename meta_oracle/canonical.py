"""
Canonical JSON and SHA256 Hashing

Deterministic JSON serialization (sorted keys, no whitespace) and SHA256
digests. Signal hashes are computed over the canonical form of their
payload so that identical observations always hash identically, which is
what replay detection relies on.
"""

import hashlib
import json
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel


class CanonicalJSONEncoder(json.JSONEncoder):
    """Encodes enums and nested pydantic models found inside payloads."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Enum):
            return obj.value

        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json")

        return super().default(obj)


def to_canonical_json(data: Any) -> str:
    """
    Convert data to canonical JSON string.

    Args:
        data: Any JSON-serializable data, or a pydantic model

    Returns:
        Canonical JSON string (deterministic, sorted keys, no whitespace)
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    return json.dumps(
        data,
        cls=CanonicalJSONEncoder,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def calculate_sha256(data: Union[str, bytes]) -> str:
    """Return the hex SHA256 digest of a string or bytes."""
    if isinstance(data, str):
        data = data.encode("utf-8")

    return hashlib.sha256(data).hexdigest()


def calculate_data_hash(data: Any) -> str:
    """SHA256 of the canonical JSON form of ``data``."""
    return calculate_sha256(to_canonical_json(data))
