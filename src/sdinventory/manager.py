"""InventoryManager: orchestrates drive discovery and resumable drive walks."""

from __future__ import annotations

import logging
from typing import Optional

from sdinventory.auth import AuthInfo, ensure_allowed
from sdinventory.config import InventoryConfig
from sdinventory.controller import DriveController, SheetsController
from sdinventory.errors import (
    AuthError,
    CheckpointError,
    InvalidStateError,
    InventoryError,
    SetupError,
)
from sdinventory.models import Drive, DriveStatus, WalkCheckpoint, WalkIssue, WalkResult
from sdinventory.sink import (
    DRIVE_HEADER,
    ERROR_HEADER,
    NODE_HEADER,
    DriveRow,
    DriveTable,
    ErrorLog,
    ResultSink,
    SheetTable,
)
from sdinventory.store import CheckpointStore, JsonFileKeyValueStore
from sdinventory.util.time import now_utc
from sdinventory.walker import TreeWalker

logger = logging.getLogger(__name__)


class InventoryManager:
    """
    Two-phase operator surface: discover_drives() once, then walk_files()
    repeatedly until every drive is finished.

    Each walk_files() call processes a single drive within the configured
    budget. The manager owns the checkpoint slot: it loads it, hands it to the
    walker, and saves or clears it after the rows have been appended.

    Policy:
        - Raise for fatal errors: caller not allowed, sheets unavailable.
        - Recovered errors (permissions, listings, corrupt checkpoint) go to
          the error log and never change the outcome of the call.
    """

    DEFAULT_DRIVE_SCOPES: tuple[str, ...] = (
        "https://www.googleapis.com/auth/drive.readonly",
    )
    DEFAULT_SHEETS_SCOPES: tuple[str, ...] = (
        "https://www.googleapis.com/auth/spreadsheets",
    )

    def __init__(self, auth_info: AuthInfo, config: InventoryConfig) -> None:
        scopes = list(self.DEFAULT_DRIVE_SCOPES) + list(self.DEFAULT_SHEETS_SCOPES)
        drive = DriveController(auth_info, scopes=scopes, call_delay_sec=config.call_delay_sec)
        sheets = SheetsController(auth_info, scopes=scopes)
        store = CheckpointStore(JsonFileKeyValueStore(config.checkpoint_file))
        self._init(drive, sheets, store, config)

    @classmethod
    def from_components(
        cls,
        drive_controller,
        sheets_controller,
        store: CheckpointStore,
        config: InventoryConfig,
    ) -> "InventoryManager":
        """Create manager with injected collaborators (useful for tests)."""
        obj = cls.__new__(cls)
        obj._init(drive_controller, sheets_controller, store, config)
        return obj

    def _init(self, drive, sheets, store: CheckpointStore, config: InventoryConfig) -> None:
        self._drive = drive
        self._store = store
        self._config = config
        self._walker = TreeWalker(
            drive,
            company_domains=config.company_domains,
            max_depth=config.max_depth,
        )
        sid = config.spreadsheet_id
        self._drives = DriveTable(SheetTable(sheets, sid, config.drives_sheet, DRIVE_HEADER))
        self._results = ResultSink(SheetTable(sheets, sid, config.files_sheet, NODE_HEADER))
        self._errors = ErrorLog(SheetTable(sheets, sid, config.errors_sheet, ERROR_HEADER))

    # ----------------------------
    # Public API
    # ----------------------------
    def discover_drives(self) -> list[Drive]:
        """
        List every shared drive and reset the inventory.

        The drive list and the item inventory are recreated, every drive is
        marked pending and any live checkpoint is discarded.
        """
        self._authorize()
        self._setup()

        drives = self._drive.list_drives()
        self._drives.write_drives(drives)
        self._results.recreate()
        self._store.clear()

        logger.info("Discovered %d shared drives", len(drives))
        return drives

    def walk_files(self) -> Optional[WalkResult]:
        """
        Walk one drive for at most one budget.

        Returns:
            The walk result, or None when every drive is already finished.

        Raises:
            AuthorizationError: caller not on the allow-list.
            SetupError: the output sheets could not be prepared.
            InvalidStateError: discovery has not been run.
        """
        self._authorize()
        self._setup()

        entries = self._drives.entries()
        if not entries:
            raise InvalidStateError("No drives listed. Run discover_drives() first.")

        checkpoint, slot_drive_id = self._load_checkpoint()
        target, checkpoint = self._pick_drive(entries, checkpoint, slot_drive_id)
        if target is None:
            logger.info("All drives are finished")
            return None

        # An in-progress drive without a usable checkpoint restarts from its
        # root; rows it already wrote are skipped rather than appended twice.
        written_ids: set[str] = set()
        if checkpoint is None and target.status is DriveStatus.IN_PROGRESS:
            written_ids = self._results.node_ids(target.drive_id)
            logger.warning(
                "Restarting drive %s from scratch; %d rows already written will be skipped",
                target.drive_id,
                len(written_ids),
            )

        result = self._walker.walk(
            target.drive_id,
            checkpoint=checkpoint,
            item_budget=self._config.item_budget,
            time_budget_sec=self._config.time_budget_sec,
        )

        nodes = [n for n in result.nodes if n.id not in written_ids]
        self._results.append_nodes(nodes)
        self._errors.record(result.issues)

        if result.checkpoint is not None:
            self._store.save(target.drive_id, result.checkpoint)
            status = DriveStatus.IN_PROGRESS
        else:
            self._store.clear()
            status = DriveStatus.COMPLETE if result.complete else DriveStatus.COMPLETE_WITH_ERRORS
        self._drives.update_progress(target.drive_id, status, result.stats)

        logger.info(
            "Drive %s: %s (%d rows appended, %d items total)",
            target.drive_id,
            status.value,
            len(nodes),
            result.stats.total_files + result.stats.total_folders,
        )
        return result

    # ----------------------------
    # Internals
    # ----------------------------
    def _authorize(self) -> str:
        try:
            identity = self._drive.current_user_email()
        except AuthError:
            raise
        except InventoryError as exc:
            logger.warning("Could not determine invoking user: %s", exc)
            identity = None
        return ensure_allowed(identity, self._config.allowed_users)

    def _setup(self) -> None:
        try:
            self._drives.ensure()
            self._results.ensure()
            self._errors.ensure()
        except InventoryError as exc:
            raise SetupError(
                "Failed to prepare output sheets",
                details={"spreadsheet_id": self._config.spreadsheet_id},
                cause=exc,
            ) from exc

    def _load_checkpoint(self) -> tuple[Optional[WalkCheckpoint], Optional[str]]:
        """Return (checkpoint, drive id owning the slot). Corrupt slots are cleared."""
        slot_drive_id = None
        try:
            slot_drive_id = self._store.peek_drive_id()
            return self._store.load(), slot_drive_id
        except CheckpointError as exc:
            logger.warning("Discarding unreadable checkpoint: %s", exc)
            self._errors.record(
                [WalkIssue(context="checkpoint", message=str(exc), timestamp=now_utc())]
            )
            self._store.clear()
            return None, slot_drive_id

    def _pick_drive(
        self,
        entries: list[DriveRow],
        checkpoint: Optional[WalkCheckpoint],
        slot_drive_id: Optional[str],
    ) -> tuple[Optional[DriveRow], Optional[WalkCheckpoint]]:
        """
        The drive owning the checkpoint slot goes first; otherwise the first
        drive that is not finished.
        """
        owner = checkpoint.drive_id if checkpoint is not None else slot_drive_id
        if owner is not None:
            for entry in entries:
                if entry.drive_id == owner:
                    return entry, checkpoint
            logger.warning("Checkpoint drive %s is not in the drive list; discarding it", owner)
            self._store.clear()

        for entry in entries:
            if not entry.status.is_finished:
                return entry, None
        return None, None
