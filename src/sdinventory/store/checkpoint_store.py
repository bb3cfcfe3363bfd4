"""Single-slot persistence for the walk checkpoint."""

from __future__ import annotations

import json
import logging
from typing import Optional, Protocol

from sdinventory.errors import CheckpointError, ConflictError
from sdinventory.models import WalkCheckpoint

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class CheckpointStore:
    """
    Holds at most one live checkpoint for the whole system.

    Only one drive may be mid-walk at a time: saving a checkpoint for a drive
    while another drive's checkpoint is live raises ConflictError. Clear the
    slot (or finish that drive) first.
    """

    DEFAULT_KEY: str = "walk_checkpoint"

    def __init__(self, kv: KeyValueStore, *, key: str = DEFAULT_KEY) -> None:
        self._kv = kv
        self._key = key

    def save(self, drive_id: str, checkpoint: WalkCheckpoint) -> None:
        if checkpoint.drive_id != drive_id:
            raise ConflictError(
                "Checkpoint drive does not match",
                details={"drive_id": drive_id, "checkpoint_drive_id": checkpoint.drive_id},
            )
        owner = self.peek_drive_id()
        if owner is not None and owner != drive_id:
            raise ConflictError(
                "Another drive's walk is still in progress",
                details={"drive_id": drive_id, "live_drive_id": owner},
            )
        self._kv.set(self._key, checkpoint.to_json())
        logger.debug("Saved checkpoint for drive %s", drive_id)

    def load(self) -> Optional[WalkCheckpoint]:
        """
        Return the live checkpoint, or None when the slot is empty.

        Raises:
            CheckpointError: if the stored payload cannot be parsed.
        """
        raw = self._kv.get(self._key)
        if raw is None:
            return None
        return WalkCheckpoint.from_json(raw)

    def peek_drive_id(self) -> Optional[str]:
        """Drive owning the slot, read leniently (None for damaged payloads)."""
        try:
            raw = self._kv.get(self._key)
        except CheckpointError as exc:
            logger.warning("Checkpoint slot is unreadable: %s", exc)
            return None
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            return None
        drive_id = data.get("drive_id") if isinstance(data, dict) else None
        return drive_id if isinstance(drive_id, str) and drive_id else None

    def clear(self) -> None:
        """Empty the slot. Works on a damaged payload too."""
        self._kv.delete(self._key)
        logger.debug("Cleared checkpoint slot")
