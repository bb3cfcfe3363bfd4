"""Exception hierarchy and HTTP error mapping for sdinventory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class InventoryError(Exception):
    """
    Base exception for sdinventory.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidStateError(InventoryError):
    """Raised when the library is used in an invalid state (e.g., walk before discovery)."""


class AuthorizationError(InventoryError):
    """Raised when the invoking principal is not on the allow-list."""


class SetupError(InventoryError):
    """Raised when an output sheet cannot be obtained or created."""


class CheckpointError(InventoryError):
    """Raised when a stored walk checkpoint cannot be parsed."""


class AuthError(InventoryError):
    """Raised when OAuth authentication/refresh fails."""


class AccessDeniedError(InventoryError):
    """The caller may not read the drive, item or spreadsheet (HTTP 403, not quota)."""


class InvalidArgumentError(InventoryError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class ConfigError(InvalidArgumentError):
    """Raised when an InventoryConfig value is invalid."""


class NotFoundError(InventoryError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(InventoryError):
    """Raised on HTTP 409/412, or when the checkpoint slot belongs to another drive."""


class RateLimitError(InventoryError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(InventoryError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(InventoryError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(InventoryError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to sdinventory exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> InventoryError:
    """
    Map an HTTP error to an sdinventory exception.

    Policy:
        - 401 -> AuthError
        - 403 -> AccessDeniedError (default), but QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 400 -> InvalidArgumentError
        - 5xx -> ApiError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return AccessDeniedError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
