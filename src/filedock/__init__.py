"""filedock public API."""

from __future__ import annotations

from filedock.api import FileDockClient
from filedock.auth import OAuthAppInfo, OAuthClient, decode_state, encode_state
from filedock.config import FileDockSettings, configure_logging, get_settings
from filedock.errors import (
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
from filedock.importer import import_drive_files
from filedock.models import (
    AuthUrl,
    DriveFile,
    FilePage,
    FolderFile,
    FolderNode,
    ImportSummary,
    Notification,
    TokenExchangeResult,
    UploadFile,
)
from filedock.notifications import import_notification
from filedock.service import GoogleDriveService
from filedock.session import ConnectionState, DriveSession, DriveTokens, TokenStore
from filedock.upload import (
    LocalEntry,
    UploadProgressTracker,
    build_folder_structure,
    collect_directory,
    collect_files,
    iter_entry_files,
    walk_entries,
)
from filedock.uploader import upload_dropped, upload_files, upload_folder

__all__ = [
    # High-level
    "GoogleDriveService",
    "FileDockClient",
    "DriveSession",
    "import_drive_files",
    "import_notification",
    "upload_files",
    "upload_folder",
    "upload_dropped",
    # Config
    "FileDockSettings",
    "get_settings",
    "configure_logging",
    # Auth / session
    "OAuthAppInfo",
    "OAuthClient",
    "encode_state",
    "decode_state",
    "ConnectionState",
    "DriveTokens",
    "TokenStore",
    # Upload
    "build_folder_structure",
    "collect_files",
    "collect_directory",
    "walk_entries",
    "iter_entry_files",
    "LocalEntry",
    "UploadProgressTracker",
    # Models
    "DriveFile",
    "FilePage",
    "UploadFile",
    "FolderFile",
    "FolderNode",
    "AuthUrl",
    "TokenExchangeResult",
    "ImportSummary",
    "Notification",
    # Errors
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
