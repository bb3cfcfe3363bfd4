"""Data model for inventoried folders and files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .access import RoleAggregate


class NodeKind(str, Enum):
    FOLDER = "folder"
    FILE = "file"


@dataclass(slots=True, frozen=True)
class Node:
    """
    A folder or file emitted by the tree walk. Never mutated after creation.

    Notes:
        - depth counts the folders between the drive root and the node, so
          direct children of the root have depth 0.
        - path is slash-separated from the drive root; folder paths end with '/'.
        - size_bytes is 0 for files whose size is unknown and None for folders.
    """

    id: str
    drive_id: str
    parent_id: str
    path: str
    depth: int
    kind: NodeKind
    name: str
    roles: RoleAggregate
    sharing_status: str

    creator: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    size_bytes: Optional[int] = None
    url: Optional[str] = None
