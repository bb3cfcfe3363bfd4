"""Public error exports for sdinventory."""

from __future__ import annotations

from .exceptions import (
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

__all__ = [
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
