"""Allow-list check for the invoking principal."""

from __future__ import annotations

from typing import Iterable, Optional

from sdinventory.errors import AuthorizationError


def ensure_allowed(identity: Optional[str], allowed_users: Iterable[str]) -> str:
    """
    Return the normalized identity if it is on the allow-list.

    Fails closed: an unknown identity or an empty allow-list is refused.

    Raises:
        AuthorizationError: if the identity is missing or not listed.
    """
    allowed = {u.strip().lower() for u in allowed_users if u and u.strip()}
    who = (identity or "").strip().lower()

    if not who:
        raise AuthorizationError("Could not determine the invoking user")
    if who not in allowed:
        raise AuthorizationError(
            "User is not allowed to run the inventory",
            details={"identity": who},
        )
    return who
