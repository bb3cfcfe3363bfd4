"""Resumable, budgeted walk over one shared drive's folder hierarchy."""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from sdinventory.errors import AuthError, InvalidArgumentError, InventoryError
from sdinventory.models import (
    AccessEntry,
    DriveItem,
    FolderRef,
    Node,
    NodeKind,
    RoleAggregate,
    TraversalStats,
    WalkCheckpoint,
    WalkIssue,
    WalkResult,
    WalkState,
)
from sdinventory.permissions import (
    aggregate_by_role,
    classify_sharing,
    count_external,
    node_roles,
    normalize_domains,
    sharing_error,
)
from sdinventory.util.mime import is_folder
from sdinventory.util.time import now_utc

from .cursor import PaginationCursor

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH: int = 10
ROOT_PATH: str = "/"


class _Budget:
    """Items emitted and wall-clock time allowed for one invocation."""

    def __init__(
        self,
        item_limit: Optional[int],
        time_limit_sec: Optional[float],
        clock: Callable[[], float],
    ) -> None:
        self._item_limit = item_limit
        self._time_limit_sec = time_limit_sec
        self._clock = clock
        self._started = clock()
        self.used = 0

    def charge(self) -> None:
        self.used += 1

    def exhausted(self) -> bool:
        if self._item_limit is not None and self.used >= self._item_limit:
            return True
        if self._time_limit_sec is not None:
            return self._clock() - self._started >= self._time_limit_sec
        return False


@dataclass
class _Run:
    """Working state of a walk invocation; mirrors WalkCheckpoint."""

    drive_id: str
    current: Optional[FolderRef]
    page_token: Optional[str]
    page_offset: int
    pending: deque[FolderRef]
    visited: set[str]
    stats: TraversalStats
    items_written: int
    drive_entries: list[AccessEntry]
    failed: list[str]
    upper: RoleAggregate = field(default_factory=RoleAggregate)
    state: WalkState = WalkState.IDLE
    nodes: list[Node] = field(default_factory=list)
    issues: list[WalkIssue] = field(default_factory=list)

    def to_checkpoint(self) -> WalkCheckpoint:
        return WalkCheckpoint(
            drive_id=self.drive_id,
            current=self.current,
            page_token=self.page_token if self.current is not None else None,
            page_offset=self.page_offset if self.current is not None else 0,
            pending=list(self.pending),
            visited_folder_ids=set(self.visited),
            stats=self.stats.copy(),
            items_written=self.items_written,
            drive_entries=list(self.drive_entries),
            failed_folder_ids=list(self.failed),
        )

    def record_issue(self, context: str, message: str) -> None:
        self.issues.append(WalkIssue(context=context, message=message, timestamp=now_utc()))


class TreeWalker:
    """
    Walk a shared drive folder by folder, suspending on budget exhaustion.

    Each folder's children are listed completely (page by page) before the
    next folder is started; sub-folders are queued FIFO rather than recursed
    into. Only one folder is ever being paged, so a suspended walk is fully
    described by that folder's page position plus the queue.

    The walker never persists anything: it takes an optional checkpoint and
    returns the nodes it emitted together with the next checkpoint, if any.
    Feeding each returned checkpoint back in yields the same ordered nodes
    as one unbounded walk.
    """

    def __init__(
        self,
        controller,
        *,
        company_domains: Iterable[str],
        max_depth: int = DEFAULT_MAX_DEPTH,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_depth < 0:
            raise InvalidArgumentError("max_depth must be >= 0")
        self._controller = controller
        self._company_domains = normalize_domains(company_domains)
        self._max_depth = max_depth
        self._clock = clock

    def walk(
        self,
        drive_id: str,
        *,
        checkpoint: Optional[WalkCheckpoint] = None,
        item_budget: Optional[int] = None,
        time_budget_sec: Optional[float] = None,
    ) -> WalkResult:
        """
        Walk drive_id until the budget runs out or the drive is exhausted.

        Args:
            drive_id: Shared drive id; its root folder has the same id.
            checkpoint: Continuation returned by a previous suspended walk.
            item_budget: Max nodes emitted by this invocation (None = unbounded).
            time_budget_sec: Max wall-clock seconds for this invocation,
                checked before every item and every page.

        Raises:
            InvalidArgumentError: bad budgets, or a checkpoint for another drive.
            AuthError: credentials were rejected mid-walk.
        """
        if item_budget is not None and item_budget < 1:
            raise InvalidArgumentError("item_budget must be >= 1")
        if time_budget_sec is not None and time_budget_sec <= 0:
            raise InvalidArgumentError("time_budget_sec must be > 0")

        if checkpoint is None:
            run = self._start(drive_id)
        else:
            run = self._resume(drive_id, checkpoint)
        run.upper = aggregate_by_role(run.drive_entries)

        budget = _Budget(item_budget, time_budget_sec, self._clock)

        while True:
            if run.current is not None:
                run.state = WalkState.PAGING
                if self._page_current(run, budget):
                    return self._suspend(run)
                run.current = None
                run.page_token = None
                run.page_offset = 0

            run.state = WalkState.DRAINING
            if not run.pending:
                return self._complete(run)
            if budget.exhausted():
                return self._suspend(run)
            run.current = run.pending.popleft()

    # ----------------------------
    # Internals
    # ----------------------------
    def _start(self, drive_id: str) -> _Run:
        logger.info("Starting walk of drive %s", drive_id)
        run = _Run(
            drive_id=drive_id,
            current=FolderRef(id=drive_id, path=ROOT_PATH, depth=0),
            page_token=None,
            page_offset=0,
            pending=deque(),
            visited={drive_id},
            stats=TraversalStats(),
            items_written=0,
            drive_entries=[],
            failed=[],
        )
        try:
            run.drive_entries = self._controller.list_permissions(drive_id)
        except AuthError:
            raise
        except InventoryError as exc:
            logger.warning("Drive-level permissions unavailable for %s: %s", drive_id, exc)
            run.record_issue(f"drive permissions {drive_id}", str(exc))
        return run

    def _resume(self, drive_id: str, checkpoint: WalkCheckpoint) -> _Run:
        if checkpoint.drive_id != drive_id:
            raise InvalidArgumentError(
                "Checkpoint belongs to another drive",
                details={"drive_id": drive_id, "checkpoint_drive_id": checkpoint.drive_id},
            )
        logger.info(
            "Resuming walk of drive %s (%d items so far, %d folders queued)",
            drive_id,
            checkpoint.items_written,
            len(checkpoint.pending),
        )
        return _Run(
            drive_id=drive_id,
            current=checkpoint.current,
            page_token=checkpoint.page_token,
            page_offset=checkpoint.page_offset,
            pending=deque(checkpoint.pending),
            visited=set(checkpoint.visited_folder_ids),
            stats=checkpoint.stats.copy(),
            items_written=checkpoint.items_written,
            drive_entries=list(checkpoint.drive_entries),
            failed=list(checkpoint.failed_folder_ids),
        )

    def _page_current(self, run: _Run, budget: _Budget) -> bool:
        """Emit the current folder's children. Returns True when suspended."""
        folder = run.current
        assert folder is not None

        def fetch(token: Optional[str]):
            return self._controller.list_children_page(folder.id, run.drive_id, page_token=token)

        cursor: PaginationCursor[DriveItem] = PaginationCursor(fetch, start_token=run.page_token)
        try:
            for page in cursor:
                run.page_token = page.token
                logger.debug(
                    "Page of %s: %d items (offset %d)", folder.path, len(page.items), run.page_offset
                )
                while run.page_offset < len(page.items):
                    if budget.exhausted():
                        return True
                    if self._visit(run, folder, page.items[run.page_offset]):
                        budget.charge()
                    run.page_offset += 1

                if page.next_token is None:
                    break
                run.page_token = page.next_token
                run.page_offset = 0
                if budget.exhausted():
                    return True
        except AuthError:
            raise
        except InventoryError as exc:
            logger.warning("Listing failed for folder %s (%s): %s", folder.path, folder.id, exc)
            run.record_issue(f"list {folder.path} ({folder.id})", str(exc))
            run.failed.append(folder.id)
        return False

    def _visit(self, run: _Run, folder: FolderRef, item: DriveItem) -> bool:
        """Emit one child. Returns False when it was skipped."""
        folder_like = is_folder(item.mime_type)
        if folder_like and item.id in run.visited:
            logger.debug("Skipping already visited folder %s under %s", item.id, folder.path)
            return False

        kind = NodeKind.FOLDER if folder_like else NodeKind.FILE
        path = f"{folder.path}{item.name}/" if folder_like else f"{folder.path}{item.name}"

        entries, status = self._item_sharing(run, item, path)
        roles = node_roles(kind, run.upper, aggregate_by_role(entries))
        size = None if folder_like else (item.size or 0)

        run.nodes.append(
            Node(
                id=item.id,
                drive_id=run.drive_id,
                parent_id=folder.id,
                path=path,
                depth=folder.depth,
                kind=kind,
                name=item.name,
                roles=roles,
                sharing_status=status,
                creator=item.creator,
                created_at=item.created_time,
                modified_at=item.modified_time,
                size_bytes=size,
                url=item.web_view_link,
            )
        )
        run.items_written += 1

        if folder_like:
            run.stats.add_folder()
        else:
            run.stats.add_file(size or 0)
        if count_external(entries, self._company_domains):
            run.stats.add_external()

        if folder_like:
            run.visited.add(item.id)
            child = FolderRef(id=item.id, path=path, depth=folder.depth + 1)
            if child.depth <= self._max_depth:
                run.pending.append(child)
            else:
                logger.debug("Not descending into %s: depth %d exceeds max", path, child.depth)
        return True

    def _item_sharing(
        self,
        run: _Run,
        item: DriveItem,
        path: str,
    ) -> tuple[list[AccessEntry], str]:
        try:
            entries = self._controller.list_permissions(item.id)
        except AuthError:
            raise
        except InventoryError as exc:
            logger.warning("Permissions unavailable for %s (%s): %s", path, item.id, exc)
            run.record_issue(f"permissions {path} ({item.id})", str(exc))
            return [], sharing_error(str(exc))
        return entries, classify_sharing(entries, self._company_domains)

    def _suspend(self, run: _Run) -> WalkResult:
        run.state = WalkState.SUSPENDED
        checkpoint = run.to_checkpoint()
        logger.info(
            "Suspending walk of drive %s after %d items this run (%d total, %d folders queued)",
            run.drive_id,
            len(run.nodes),
            run.items_written,
            len(run.pending),
        )
        return self._result(run, checkpoint)

    def _complete(self, run: _Run) -> WalkResult:
        run.state = WalkState.COMPLETED
        logger.info(
            "Completed walk of drive %s: %d files, %d folders, %d bytes",
            run.drive_id,
            run.stats.total_files,
            run.stats.total_folders,
            run.stats.total_size_bytes,
        )
        return self._result(run, None)

    def _result(self, run: _Run, checkpoint: Optional[WalkCheckpoint]) -> WalkResult:
        return WalkResult(
            drive_id=run.drive_id,
            state=run.state,
            nodes=list(run.nodes),
            stats=run.stats.copy(),
            checkpoint=checkpoint,
            issues=list(run.issues),
            failed_folder_ids=list(run.failed),
        )
