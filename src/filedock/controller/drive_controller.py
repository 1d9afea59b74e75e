"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import io
import json
from typing import Any, Callable, Optional, TypeVar

from filedock.auth import OAuthClient
from filedock.errors import (
    ApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    map_http_error,
)
from filedock.models import DriveFile, FilePage

from .fields import FILE_FIELDS, LIST_FIELDS, PAGE_SIZE

T = TypeVar("T")

ROOT_FOLDER_ID = "root"


class GoogleDriveController:
    """
    Drive API controller bound to one access token (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - Requests are not retried; every failure surfaces as a FileDockError.
    """

    def __init__(self, oauth_client: OAuthClient, access_token: str) -> None:
        if not isinstance(access_token, str) or not access_token:
            raise InvalidArgumentError("access_token must be a non-empty string")
        self._service = oauth_client.build_drive_service(access_token)

    @classmethod
    def from_service(cls, service: Any) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def get(self, file_id: str) -> DriveFile:
        req = self._service.files().get(fileId=file_id, fields=FILE_FIELDS)
        data = self._execute(req.execute)
        return DriveFile.from_dict(data)

    def list_children(
        self,
        folder_id: Optional[str] = None,
        *,
        page_token: Optional[str] = None,
    ) -> FilePage:
        """List one page of non-trashed children, folders first then by name."""
        parent = folder_id or ROOT_FOLDER_ID
        q = f"trashed=false and '{escape_query_literal(parent)}' in parents"
        return self._list_page(q, order_by="folder,name", page_token=page_token)

    def search_by_name(
        self,
        query: str,
        *,
        page_token: Optional[str] = None,
    ) -> FilePage:
        """List one page of non-trashed items whose name contains query."""
        q = f"trashed=false and name contains '{escape_query_literal(query)}'"
        return self._list_page(q, order_by="name", page_token=page_token)

    def download_media(self, file_id: str) -> bytes:
        """Download the raw bytes of a binary (non-Workspace) file."""
        req = self._service.files().get_media(fileId=file_id)
        return self._download(req)

    def export(self, file_id: str, mime_type: str) -> bytes:
        """Export a Workspace document to mime_type."""
        req = self._service.files().export_media(fileId=file_id, mimeType=mime_type)
        return self._download(req)

    # ----------------------------
    # Internals
    # ----------------------------
    def _list_page(
        self,
        q: str,
        *,
        order_by: str,
        page_token: Optional[str],
    ) -> FilePage:
        req = self._service.files().list(
            q=q,
            fields=LIST_FIELDS,
            pageSize=PAGE_SIZE,
            pageToken=page_token,
            orderBy=order_by,
        )
        data = self._execute(req.execute)
        files = [DriveFile.from_dict(f) for f in data.get("files", []) or []]
        return FilePage(files=files, next_page_token=data.get("nextPageToken") or None)

    def _download(self, req: Any) -> bytes:
        from googleapiclient.http import MediaIoBaseDownload

        buf = io.BytesIO()
        downloader = MediaIoBaseDownload(fd=buf, request=req)
        done = False
        while not done:
            _, done = self._execute(downloader.next_chunk)
        return buf.getvalue()

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except Exception as exc:
            raise self._map_exception(exc) from exc

    def _map_exception(self, exc: Exception) -> Exception:
        from googleapiclient.errors import HttpError

        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def escape_query_literal(value: str) -> str:
    """Escape a value for use inside a single-quoted Drive query string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
