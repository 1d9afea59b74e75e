"""Public error exports for filedock."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    FileDockError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidPathError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    UnsupportedExportError,
    map_http_error,
)

__all__ = [
    "FileDockError",
    "InvalidPathError",
    "InvalidStateError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "UnsupportedExportError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
