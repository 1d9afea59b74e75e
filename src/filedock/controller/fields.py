"""Field definitions for Google Drive API responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "size,"
    "createdTime,"
    "modifiedTime,"
    "webViewLink,"
    "thumbnailLink,"
    "parents"
)

LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"

PAGE_SIZE: int = 50
