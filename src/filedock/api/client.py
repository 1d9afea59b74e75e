"""HTTP client for the file manager server's upload and Drive endpoints."""

from __future__ import annotations

import json
import mimetypes
from pathlib import Path
from typing import Any, Optional, Sequence

import httpx

from filedock.config import FileDockSettings, get_settings
from filedock.errors import InvalidArgumentError, NetworkError
from filedock.models import DriveFile, FolderNode, ImportSummary, UploadFile


class FileDockClient:
    def __init__(
        self,
        *,
        base_url: str,
        session_token: Optional[str] = None,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session_token = session_token
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Optional[FileDockSettings] = None) -> "FileDockClient":
        settings = settings or get_settings()
        return cls(
            base_url=settings.api_base_url,
            session_token=settings.session_token,
            timeout_seconds=settings.request_timeout_seconds,
        )

    # ----------------------------
    # Google Drive
    # ----------------------------
    async def get_auth_url(self) -> str:
        data = await self._request("GET", "/api/google-drive/auth-url")
        if not isinstance(data, dict) or not data.get("authUrl"):
            raise NetworkError(
                "Response from /api/google-drive/auth-url has no authUrl",
                details={"path": "/api/google-drive/auth-url"},
            )
        return str(data["authUrl"])

    async def list_drive_files(
        self,
        access_token: str,
        folder_id: Optional[str] = None,
    ) -> list[DriveFile]:
        params = {"access_token": access_token}
        if folder_id:
            params["folder_id"] = folder_id
        data = await self._request("GET", "/api/google-drive/files", params=params)
        return [DriveFile.from_dict(f) for f in (data or {}).get("files", [])]

    async def search_drive_files(self, access_token: str, query: str) -> list[DriveFile]:
        params = {"access_token": access_token, "q": query}
        data = await self._request("GET", "/api/google-drive/search", params=params)
        return [DriveFile.from_dict(f) for f in (data or {}).get("files", [])]

    async def import_drive_files(
        self,
        access_token: str,
        file_ids: Sequence[str],
    ) -> ImportSummary:
        payload = {"access_token": access_token, "file_ids": list(file_ids)}
        data = await self._request(
            "POST", "/api/google-drive/import-multiple", json=payload
        )
        return ImportSummary.from_dict(data or {})

    # ----------------------------
    # Uploads
    # ----------------------------
    async def upload_files(self, files: Sequence[UploadFile]) -> Any:
        return await self._request(
            "POST", "/api/files/upload-multiple", files=_multipart_files(files)
        )

    async def upload_folder(self, files: Sequence[UploadFile], structure: FolderNode) -> Any:
        return await self._request(
            "POST",
            "/api/folders/upload",
            files=_multipart_files(files),
            data={"folderStructure": json.dumps(structure.to_dict())},
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _headers(self) -> dict[str, str]:
        if not self._session_token:
            return {}
        return {"Authorization": f"Bearer {self._session_token}"}

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as client:
                resp = await client.request(method, url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as exc:
            raise NetworkError(
                f"Request to {path} failed",
                details={"method": method, "path": path},
                cause=exc,
            ) from exc

        if resp.is_error:
            raise NetworkError(
                _error_message(resp),
                details={"status_code": resp.status_code, "path": path, "body": resp.text},
            )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise NetworkError(
                f"Invalid JSON response from {path}",
                details={"status_code": resp.status_code, "path": path, "body": resp.text},
                cause=exc,
            ) from exc


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"{resp.status_code}: {resp.text}"


def _multipart_files(files: Sequence[UploadFile]) -> list[tuple[str, tuple[str, bytes, str]]]:
    parts = []
    for f in files:
        content_type = mimetypes.guess_type(f.name)[0] or "application/octet-stream"
        parts.append(("files", (f.name, _read_source(f), content_type)))
    return parts


def _read_source(f: UploadFile) -> bytes:
    if isinstance(f.source, (bytes, bytearray)):
        return bytes(f.source)
    if isinstance(f.source, (str, Path)):
        return Path(f.source).read_bytes()
    raise InvalidArgumentError(
        "upload source must be bytes or a path",
        details={"name": f.name, "source_type": type(f.source).__name__},
    )
