"""Records for shared drives and the raw items listed inside them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True, frozen=True)
class Drive:
    """A shared drive discovered by the drive listing. Immutable for the run."""

    id: str
    name: str
    created_at: Optional[datetime] = None
    restrictions: dict[str, bool] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class DriveItem:
    """
    One record returned by the children listing of a folder.

    Notes:
        - size is None when the API omits it (folders, Google Docs) or returns
          something non-numeric.
        - creator is the owner's address when present; shared-drive items have
          no owner, so the last modifying user is used instead.
    """

    id: str
    name: str
    mime_type: str
    parents: tuple[str, ...] = ()

    created_time: Optional[datetime] = None
    modified_time: Optional[datetime] = None
    size: Optional[int] = None
    creator: Optional[str] = None
    web_view_link: Optional[str] = None
