"""Result models for drive walks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .checkpoint import WalkCheckpoint
from .node import Node
from .stats import TraversalStats


class WalkState(str, Enum):
    """States of a single drive walk."""

    IDLE = "idle"
    PAGING = "paging"
    DRAINING = "draining"
    SUSPENDED = "suspended"
    COMPLETED = "completed"


class DriveStatus(str, Enum):
    """Progress of a drive as shown in the drive list."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    COMPLETE_WITH_ERRORS = "complete-with-errors"

    @property
    def is_finished(self) -> bool:
        return self in (DriveStatus.COMPLETE, DriveStatus.COMPLETE_WITH_ERRORS)


@dataclass(slots=True, frozen=True)
class WalkIssue:
    """A recovered error, destined for the error log."""

    context: str
    message: str
    timestamp: datetime


@dataclass(slots=True)
class WalkResult:
    """Outcome of one walk invocation for one drive."""

    drive_id: str
    state: WalkState
    nodes: list[Node]
    stats: TraversalStats

    checkpoint: Optional[WalkCheckpoint] = None
    issues: list[WalkIssue] = field(default_factory=list)
    failed_folder_ids: list[str] = field(default_factory=list)

    @property
    def has_more(self) -> bool:
        return self.checkpoint is not None

    @property
    def complete(self) -> bool:
        """True when the drive was walked to the end without losing any subtree."""
        return not self.has_more and not self.failed_folder_ids
