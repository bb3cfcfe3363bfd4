"""Drive list, item inventory and error log tabs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from sdinventory.errors import InvalidStateError
from sdinventory.models import Drive, DriveStatus, Node, TraversalStats, WalkIssue
from sdinventory.util.time import now_utc, to_rfc3339

from .table import SheetTable

logger = logging.getLogger(__name__)

LIST_SEPARATOR: str = ", "
NOT_APPLICABLE: str = "-"

DRIVE_HEADER: tuple[str, ...] = (
    "Drive ID",
    "Name",
    "Created",
    "Restrictions",
    "Status",
    "Files",
    "Folders",
    "Total Size (bytes)",
    "External Shares",
    "Updated",
)

NODE_HEADER: tuple[str, ...] = (
    "Drive ID",
    "Item ID",
    "Path",
    "Kind",
    "Name",
    "Depth",
    "Creator",
    "Created",
    "Modified",
    "Size (bytes)",
    "Organizers",
    "File Organizers",
    "Writers",
    "Editors",
    "Commenters",
    "Readers",
    "Sharing",
    "URL",
)

ERROR_HEADER: tuple[str, ...] = ("Timestamp", "Context", "Message")

_NODE_ID_COLUMN = NODE_HEADER.index("Item ID")
_DRIVE_STATUS_COLUMN = DRIVE_HEADER.index("Status")


def _ts(value: Optional[datetime]) -> str:
    return to_rfc3339(value) if value is not None else ""


def _joined(values: Optional[Sequence[str]]) -> str:
    if values is None:
        return NOT_APPLICABLE
    return LIST_SEPARATOR.join(values)


def node_to_row(node: Node) -> list[object]:
    roles = node.roles
    return [
        node.drive_id,
        node.id,
        node.path,
        node.kind.value,
        node.name,
        node.depth,
        node.creator or "",
        _ts(node.created_at),
        _ts(node.modified_at),
        node.size_bytes if node.size_bytes is not None else "",
        _joined(roles.organizers),
        _joined(roles.file_organizers),
        _joined(roles.writers),
        _joined(roles.editors),
        _joined(roles.commenters),
        _joined(roles.readers),
        node.sharing_status,
        node.url or "",
    ]


def drive_to_row(drive: Drive) -> list[object]:
    active = sorted(name for name, enabled in drive.restrictions.items() if enabled)
    return [
        drive.id,
        drive.name,
        _ts(drive.created_at),
        LIST_SEPARATOR.join(active),
        DriveStatus.PENDING.value,
        0,
        0,
        0,
        0,
        to_rfc3339(now_utc()),
    ]


@dataclass(slots=True, frozen=True)
class DriveRow:
    row_number: int
    drive_id: str
    name: str
    status: DriveStatus
    cells: tuple[str, ...]


class ResultSink:
    """Append-only inventory of emitted nodes."""

    def __init__(self, table: SheetTable) -> None:
        self._table = table

    def ensure(self) -> None:
        self._table.ensure()

    def recreate(self) -> None:
        self._table.recreate()

    def append_nodes(self, nodes: Sequence[Node]) -> int:
        """Append one row per node. Returns the number of rows written."""
        if not nodes:
            return 0
        self._table.append([node_to_row(n) for n in nodes])
        return len(nodes)

    def node_ids(self, drive_id: str) -> set[str]:
        """Ids of items already written for drive_id."""
        ids: set[str] = set()
        for row in self._table.rows(columns=_NODE_ID_COLUMN + 1):
            if len(row) > _NODE_ID_COLUMN and row[0] == drive_id:
                ids.add(row[_NODE_ID_COLUMN])
        return ids


class DriveTable:
    """The drive list, with each drive's walk progress."""

    def __init__(self, table: SheetTable) -> None:
        self._table = table

    def ensure(self) -> None:
        self._table.ensure()

    def write_drives(self, drives: Sequence[Drive]) -> None:
        """Replace the drive list; every drive starts out pending."""
        self._table.recreate()
        self._table.append([drive_to_row(d) for d in drives])

    def entries(self) -> list[DriveRow]:
        out: list[DriveRow] = []
        for index, row in enumerate(self._table.rows()):
            if not row or not row[0]:
                continue
            raw_status = row[_DRIVE_STATUS_COLUMN] if len(row) > _DRIVE_STATUS_COLUMN else ""
            try:
                status = DriveStatus(raw_status)
            except ValueError:
                logger.warning("Unknown status %r for drive %s; treating as pending", raw_status, row[0])
                status = DriveStatus.PENDING
            out.append(
                DriveRow(
                    row_number=index + 2,
                    drive_id=row[0],
                    name=row[1] if len(row) > 1 else "",
                    status=status,
                    cells=tuple(row),
                )
            )
        return out

    def find(self, drive_id: str) -> Optional[DriveRow]:
        for entry in self.entries():
            if entry.drive_id == drive_id:
                return entry
        return None

    def update_progress(self, drive_id: str, status: DriveStatus, stats: TraversalStats) -> None:
        entry = self.find(drive_id)
        if entry is None:
            raise InvalidStateError(
                "Drive is not in the drive list; run discovery first",
                details={"drive_id": drive_id},
            )
        fixed = list(entry.cells[:_DRIVE_STATUS_COLUMN])
        fixed += [""] * (_DRIVE_STATUS_COLUMN - len(fixed))
        self._table.update_row(
            entry.row_number,
            fixed
            + [
                status.value,
                stats.total_files,
                stats.total_folders,
                stats.total_size_bytes,
                stats.external_share_count,
                to_rfc3339(now_utc()),
            ],
        )


class ErrorLog:
    """Append-only log of recovered errors."""

    def __init__(self, table: SheetTable) -> None:
        self._table = table

    def ensure(self) -> None:
        self._table.ensure()

    def record(self, issues: Iterable[WalkIssue]) -> int:
        rows = [[to_rfc3339(i.timestamp), i.context, i.message] for i in issues]
        if rows:
            self._table.append(rows)
        return len(rows)
