"""sdinventory public API."""

from __future__ import annotations

from sdinventory.auth import AuthInfo, OAuthClient, ensure_allowed
from sdinventory.config import InventoryConfig, load_config
from sdinventory.errors import (
    AccessDeniedError,
    ApiError,
    AuthError,
    AuthorizationError,
    CheckpointError,
    ConfigError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    InventoryError,
    NetworkError,
    NotFoundError,
    QuotaExceededError,
    RateLimitError,
    SetupError,
    map_http_error,
)
from sdinventory.manager import InventoryManager
from sdinventory.models import (
    AccessEntry,
    Drive,
    DriveStatus,
    Node,
    NodeKind,
    RoleAggregate,
    TraversalStats,
    WalkCheckpoint,
    WalkResult,
)
from sdinventory.permissions import aggregate_by_role, classify_sharing, combine
from sdinventory.store import CheckpointStore, JsonFileKeyValueStore
from sdinventory.walker import PaginationCursor, TreeWalker

__all__ = [
    # High-level
    "InventoryManager",
    "InventoryConfig",
    "load_config",
    "TreeWalker",
    "PaginationCursor",
    "CheckpointStore",
    "JsonFileKeyValueStore",
    # Auth
    "AuthInfo",
    "OAuthClient",
    "ensure_allowed",
    # Permissions
    "classify_sharing",
    "aggregate_by_role",
    "combine",
    # Models
    "AccessEntry",
    "Drive",
    "DriveStatus",
    "Node",
    "NodeKind",
    "RoleAggregate",
    "TraversalStats",
    "WalkCheckpoint",
    "WalkResult",
    # Errors
    "InventoryError",
    "InvalidStateError",
    "AuthorizationError",
    "SetupError",
    "CheckpointError",
    "AuthError",
    "AccessDeniedError",
    "InvalidArgumentError",
    "ConfigError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
