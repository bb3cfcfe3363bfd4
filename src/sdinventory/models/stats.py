"""Per-drive aggregate statistics accumulated across resumed invocations."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(slots=True)
class TraversalStats:
    total_files: int = 0
    total_folders: int = 0
    total_size_bytes: int = 0
    external_share_count: int = 0

    def add_file(self, size_bytes: int) -> None:
        self.total_files += 1
        self.total_size_bytes += size_bytes

    def add_folder(self) -> None:
        self.total_folders += 1

    def add_external(self) -> None:
        self.external_share_count += 1

    def copy(self) -> "TraversalStats":
        return TraversalStats(**self.to_dict())

    def to_dict(self) -> dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TraversalStats":
        """Build from a serialized dict. Raises ValueError on non-integer counters."""
        values: dict[str, int] = {}
        for key in ("total_files", "total_folders", "total_size_bytes", "external_share_count"):
            value = data.get(key, 0)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"stats.{key} must be a non-negative integer")
            values[key] = value
        return cls(**values)
