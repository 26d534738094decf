"""Nostr user profile metadata."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass
class NostrProfile:
    """Profile metadata; every field is optional."""

    banner: str | None = None
    website: str | None = None
    lud06: str | None = None
    nip05: str | None = None
    picture: str | None = None
    display_name: str | None = None
    about: str | None = None
    name: str | None = None
    lud16: str | None = None
    nip05_verified: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NostrProfile":
        """Build a profile from decoded JSON, ignoring unknown keys."""
        if not isinstance(data, Mapping):
            raise TypeError("profile data must be a mapping")
        values = {}
        for item in fields(cls):
            value = data.get(item.name)
            expected = bool if item.name == "nip05_verified" else str
            if value is not None and not isinstance(value, expected):
                raise TypeError(f"field {item.name!r} must be {expected.__name__} or null")
            values[item.name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)