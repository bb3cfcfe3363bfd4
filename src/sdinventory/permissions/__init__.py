"""Pure permission logic: sharing classification and role aggregation."""

from __future__ import annotations

from .classifier import (
    ERROR_PREFIX,
    INTERNAL_DOMAIN_SHARE,
    SHARING_NONE,
    classify_sharing,
    count_external,
    normalize_domains,
    sharing_error,
)
from .roles import EVERYONE, aggregate_by_role, combine, display_identifier, node_roles

__all__ = [
    "SHARING_NONE",
    "INTERNAL_DOMAIN_SHARE",
    "ERROR_PREFIX",
    "EVERYONE",
    "classify_sharing",
    "count_external",
    "normalize_domains",
    "sharing_error",
    "aggregate_by_role",
    "combine",
    "display_identifier",
    "node_roles",
]
