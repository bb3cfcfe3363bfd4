"""Serializable continuation of an in-progress drive walk."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from sdinventory.errors import CheckpointError

from .access import AccessEntry
from .stats import TraversalStats

CHECKPOINT_VERSION: int = 1


@dataclass(slots=True, frozen=True)
class FolderRef:
    """A folder scheduled for (or undergoing) paging."""

    id: str
    path: str
    depth: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "path": self.path, "depth": self.depth}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FolderRef":
        folder_id = data["id"]
        path = data["path"]
        depth = data["depth"]
        if not isinstance(folder_id, str) or not folder_id:
            raise ValueError("folder id must be a non-empty string")
        if not isinstance(path, str) or not path.endswith("/"):
            raise ValueError("folder path must be a string ending with '/'")
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 0:
            raise ValueError("folder depth must be a non-negative integer")
        return cls(id=folder_id, path=path, depth=depth)


@dataclass(slots=True)
class WalkCheckpoint:
    """
    Everything needed to continue a suspended walk exactly where it stopped.

    The walk is either mid-folder (current is set; page_token is the token
    that fetched the page being consumed, None for the first page, and
    page_offset counts that page's records already emitted) or between
    folders (current is None and the next folder comes from pending).

    drive_entries freezes the drive-level permissions fetched when the walk
    started so that every invocation renders inherited roles identically.
    """

    drive_id: str
    current: Optional[FolderRef]
    page_token: Optional[str] = None
    page_offset: int = 0
    pending: list[FolderRef] = field(default_factory=list)
    visited_folder_ids: set[str] = field(default_factory=set)
    stats: TraversalStats = field(default_factory=TraversalStats)
    items_written: int = 0
    drive_entries: list[AccessEntry] = field(default_factory=list)
    failed_folder_ids: list[str] = field(default_factory=list)

    def to_json(self) -> str:
        payload = {
            "version": CHECKPOINT_VERSION,
            "drive_id": self.drive_id,
            "current": self.current.to_dict() if self.current is not None else None,
            "page_token": self.page_token,
            "page_offset": self.page_offset,
            "pending": [ref.to_dict() for ref in self.pending],
            "visited_folder_ids": sorted(self.visited_folder_ids),
            "stats": self.stats.to_dict(),
            "items_written": self.items_written,
            "drive_entries": [entry.to_dict() for entry in self.drive_entries],
            "failed_folder_ids": list(self.failed_folder_ids),
        }
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str) -> "WalkCheckpoint":
        """
        Parse a payload produced by to_json.

        Raises:
            CheckpointError: on invalid JSON, a version mismatch, or any
                missing/ill-typed field.
        """
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise CheckpointError("Checkpoint payload is not valid JSON", cause=exc) from exc

        if not isinstance(data, dict):
            raise CheckpointError("Checkpoint payload must be a JSON object")
        if data.get("version") != CHECKPOINT_VERSION:
            raise CheckpointError(
                "Unsupported checkpoint version",
                details={"version": data.get("version")},
            )

        try:
            return cls._from_payload(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise CheckpointError(
                "Checkpoint payload is malformed",
                details={"error": str(exc)},
                cause=exc,
            ) from exc

    @classmethod
    def _from_payload(cls, data: dict[str, Any]) -> "WalkCheckpoint":
        drive_id = data["drive_id"]
        if not isinstance(drive_id, str) or not drive_id:
            raise ValueError("drive_id must be a non-empty string")

        current_raw = data.get("current")
        current = FolderRef.from_dict(current_raw) if current_raw is not None else None

        page_token = data.get("page_token")
        if page_token is not None and not isinstance(page_token, str):
            raise ValueError("page_token must be a string or null")

        page_offset = data.get("page_offset", 0)
        items_written = data.get("items_written", 0)
        for name, value in (("page_offset", page_offset), ("items_written", items_written)):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer")

        visited = data.get("visited_folder_ids", [])
        failed = data.get("failed_folder_ids", [])
        if not all(isinstance(v, str) for v in visited):
            raise ValueError("visited_folder_ids must be strings")
        if not all(isinstance(v, str) for v in failed):
            raise ValueError("failed_folder_ids must be strings")

        return cls(
            drive_id=drive_id,
            current=current,
            page_token=page_token,
            page_offset=page_offset,
            pending=[FolderRef.from_dict(item) for item in data.get("pending", [])],
            visited_folder_ids=set(visited),
            stats=TraversalStats.from_dict(data.get("stats", {})),
            items_written=items_written,
            drive_entries=[AccessEntry.from_dict(item) for item in data.get("drive_entries", [])],
            failed_folder_ids=list(failed),
        )
