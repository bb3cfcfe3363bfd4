"""Public model exports for sdinventory."""

from __future__ import annotations

from .access import AccessEntry, PrincipalType, Role, RoleAggregate
from .checkpoint import CHECKPOINT_VERSION, FolderRef, WalkCheckpoint
from .drive import Drive, DriveItem
from .node import Node, NodeKind
from .results import DriveStatus, WalkIssue, WalkResult, WalkState
from .stats import TraversalStats

__all__ = [
    "Drive",
    "DriveItem",
    "AccessEntry",
    "PrincipalType",
    "Role",
    "RoleAggregate",
    "Node",
    "NodeKind",
    "TraversalStats",
    "FolderRef",
    "WalkCheckpoint",
    "CHECKPOINT_VERSION",
    "WalkState",
    "DriveStatus",
    "WalkIssue",
    "WalkResult",
]
