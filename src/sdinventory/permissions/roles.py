"""Bucketing of access entries into role tiers, and the per-kind display policy."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from sdinventory.models import AccessEntry, NodeKind, PrincipalType, Role, RoleAggregate

EVERYONE: str = "everyone"


def display_identifier(entry: AccessEntry) -> Optional[str]:
    """
    Return how an entry is shown in the inventory, or None when it carries
    nothing identifying.
    """
    name = (entry.display_name or "").strip()
    email = (entry.email or "").strip()

    if name and email:
        return f"{name}:{email}"
    if name or email:
        return name or email
    if entry.principal_type is PrincipalType.DOMAIN and entry.domain:
        return f"@{entry.domain}"
    if entry.principal_type is PrincipalType.ANYONE:
        return EVERYONE
    return None


def aggregate_by_role(entries: Iterable[AccessEntry]) -> RoleAggregate:
    """
    Bucket entries by role.

    Writer grants populate both writers and editors: the access-control role
    is the same; "writer" names it on containers, "editor" on items.
    """
    buckets: dict[Role, list[str]] = {role: [] for role in Role}

    for entry in entries:
        if entry.role is None:
            continue
        ident = display_identifier(entry)
        if ident is None:
            continue
        buckets[entry.role].append(ident)

    writers = tuple(buckets[Role.WRITER])
    return RoleAggregate(
        organizers=tuple(buckets[Role.ORGANIZER]),
        file_organizers=tuple(buckets[Role.FILE_ORGANIZER]),
        writers=writers,
        editors=writers,
        commenters=tuple(buckets[Role.COMMENTER]),
        readers=tuple(buckets[Role.READER]),
    )


def combine(upper: Sequence[str], individual: Sequence[str]) -> tuple[str, ...]:
    """Ordered union: inherited identifiers first, then direct ones; blanks dropped."""
    seen: set[str] = set()
    out: list[str] = []
    for ident in list(upper) + list(individual):
        if not ident or not ident.strip():
            continue
        if ident in seen:
            continue
        seen.add(ident)
        out.append(ident)
    return tuple(out)


def node_roles(
    kind: NodeKind,
    upper: RoleAggregate,
    direct: RoleAggregate,
) -> RoleAggregate:
    """
    Apply the display policy for a node.

    Folders: every tier is inherited + direct; there is no editor column.
    Files: organizer, file organizer and writer tiers show the inherited
    grants as-is; editors are the item's own writers; commenter and reader
    tiers are inherited + direct.
    """
    if kind is NodeKind.FOLDER:
        return RoleAggregate(
            organizers=combine(upper.organizers, direct.organizers),
            file_organizers=combine(upper.file_organizers, direct.file_organizers),
            writers=combine(upper.writers, direct.writers),
            editors=None,
            commenters=combine(upper.commenters, direct.commenters),
            readers=combine(upper.readers, direct.readers),
        )

    return RoleAggregate(
        organizers=upper.organizers,
        file_organizers=upper.file_organizers,
        writers=upper.writers,
        editors=combine(direct.editors or (), ()),
        commenters=combine(upper.commenters, direct.commenters),
        readers=combine(upper.readers, direct.readers),
    )
