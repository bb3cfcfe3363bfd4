"""Access-control entries and their per-role aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class PrincipalType(str, Enum):
    """Who an access entry grants to. Groups are identified by email like users."""

    USER = "user"
    GROUP = "group"
    DOMAIN = "domain"
    ANYONE = "anyone"


class Role(str, Enum):
    """Role tiers, ordered from full administrative control down to read-only."""

    ORGANIZER = "organizer"
    FILE_ORGANIZER = "fileOrganizer"
    WRITER = "writer"
    COMMENTER = "commenter"
    READER = "reader"

    @classmethod
    def parse(cls, value: object) -> Optional["Role"]:
        """Return the matching Role, or None for unknown/absent values."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(slots=True, frozen=True)
class AccessEntry:
    """A single grant on a drive or an item."""

    principal_type: PrincipalType
    role: Optional[Role] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    domain: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "principal_type": self.principal_type.value,
            "role": self.role.value if self.role is not None else None,
            "email": self.email,
            "display_name": self.display_name,
            "domain": self.domain,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccessEntry":
        """Inverse of to_dict. Raises ValueError/KeyError on malformed input."""
        return cls(
            principal_type=PrincipalType(data["principal_type"]),
            role=Role.parse(data.get("role")),
            email=data.get("email"),
            display_name=data.get("display_name"),
            domain=data.get("domain"),
        )


@dataclass(slots=True, frozen=True)
class RoleAggregate:
    """
    Display identifiers bucketed by role tier.

    editors is None where the "editor" concept does not apply (folders); the
    output sheet renders a placeholder for it.
    """

    organizers: tuple[str, ...] = ()
    file_organizers: tuple[str, ...] = ()
    writers: tuple[str, ...] = ()
    editors: Optional[tuple[str, ...]] = ()
    commenters: tuple[str, ...] = ()
    readers: tuple[str, ...] = ()
