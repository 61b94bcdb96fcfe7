"""Timestamps at which execution-layer forks activate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class ForkSchedule:
    """Activation timestamps of execution-layer forks."""

    prague_timestamp: int = 0

    def __post_init__(self) -> None:
        value = self.prague_timestamp
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("prague_timestamp must be an integer")
        if not 0 <= value <= _U64_MAX:
            raise ValueError("prague_timestamp out of range for u64")

    def to_dict(self) -> dict[str, int]:
        """Return the serialised form."""
        return {"prague_timestamp": self.prague_timestamp}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ForkSchedule:
        """Build a schedule from its serialised form; the field is required."""
        try:
            value = data["prague_timestamp"]
        except KeyError:
            raise ValueError("missing field `prague_timestamp`") from None
        return cls(prague_timestamp=value)