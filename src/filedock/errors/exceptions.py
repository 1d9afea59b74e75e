"""Exception hierarchy and HTTP error mapping for filedock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class FileDockError(Exception):
    """
    Base exception for filedock.

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


class InvalidPathError(FileDockError):
    """Raised when a file's relative path cannot be placed in a folder tree."""


class InvalidStateError(FileDockError):
    """Raised on a malformed OAuth state token or when used in an invalid state."""


class AuthError(FileDockError):
    """Raised when Google rejects an authorization code, refresh token or access token."""


class PermissionError(FileDockError):
    """Raised when the token lacks access to a Drive file (HTTP 403 non-quota)."""


class InvalidArgumentError(FileDockError):
    """Raised on bad caller input or a Drive request rejected with HTTP 400."""


class NotFoundError(FileDockError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class UnsupportedExportError(FileDockError):
    """Raised when a Google Workspace type has no export mapping."""


class RateLimitError(FileDockError):
    """Raised when Drive throttles the caller (HTTP 429). Not retried."""


class QuotaExceededError(FileDockError):
    """Raised when the Drive API daily or per-user quota is spent (HTTP 403 quota reason)."""


class NetworkError(FileDockError):
    """Raised on transport failures, non-2xx responses and unreadable bodies from the file API."""


class ApiError(FileDockError):
    """
    Raised for Drive failures that map to no narrower class.

    GoogleDriveService also raises it for failed list and search calls.
    """


@dataclass(frozen=True)
class HttpErrorInfo:
    """Status, reason and message pulled out of a googleapiclient HttpError."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> FileDockError:
    """
    Map an HTTP error to a filedock exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError (default), but QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 429 -> RateLimitError
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
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
