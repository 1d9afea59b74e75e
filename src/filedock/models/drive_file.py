"""Data model for Drive items."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from filedock.util.mime import is_folder
from filedock.util.time import parse_rfc3339, to_rfc3339


@dataclass(slots=True)
class DriveFile:
    """
    Metadata record describing a remote Drive file or folder.

    Notes:
        - Built per list/search/get response and never persisted here.
        - `is_folder` is derived from `mime_type` and cannot be passed in.
    """

    id: str
    name: str
    mime_type: str

    size: Optional[int] = None
    created_time: Optional[datetime] = None
    modified_time: Optional[datetime] = None
    web_view_link: Optional[str] = None
    thumbnail_link: Optional[str] = None
    parents: Optional[list[str]] = None

    is_folder: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.is_folder = is_folder(self.mime_type)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DriveFile":
        """
        Build from a Drive API file resource or its camelCase wire shape.

        Unparseable optional fields are dropped rather than rejected.
        """
        file_id = data.get("id")
        name = data.get("name", "")
        mime_type = data.get("mimeType", "")

        size = None
        if isinstance(data.get("size"), str) and data["size"].isdigit():
            size = int(data["size"])
        elif isinstance(data.get("size"), int) and data["size"] >= 0:
            size = data["size"]

        parents = data.get("parents")
        web_view_link = data.get("webViewLink")
        thumbnail_link = data.get("thumbnailLink")

        return cls(
            id=file_id if isinstance(file_id, str) else "",
            name=name if isinstance(name, str) else "",
            mime_type=mime_type if isinstance(mime_type, str) else "",
            size=size,
            created_time=_parse_time(data.get("createdTime")),
            modified_time=_parse_time(data.get("modifiedTime")),
            web_view_link=web_view_link if isinstance(web_view_link, str) else None,
            thumbnail_link=thumbnail_link if isinstance(thumbnail_link, str) else None,
            parents=list(parents) if isinstance(parents, list) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase wire shape, omitting unset optional fields."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "mimeType": self.mime_type,
            "isFolder": self.is_folder,
        }
        if self.size is not None:
            data["size"] = self.size
        if self.created_time is not None:
            data["createdTime"] = to_rfc3339(self.created_time)
        if self.modified_time is not None:
            data["modifiedTime"] = to_rfc3339(self.modified_time)
        if self.web_view_link is not None:
            data["webViewLink"] = self.web_view_link
        if self.thumbnail_link is not None:
            data["thumbnailLink"] = self.thumbnail_link
        if self.parents is not None:
            data["parents"] = list(self.parents)
        return data


@dataclass(slots=True)
class FilePage:
    """One page of a list/search response."""

    files: list[DriveFile]
    next_page_token: Optional[str] = None


def _parse_time(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return parse_rfc3339(value)
    except ValueError:
        return None
