"""File-backed key/value store for client-side Drive tokens."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from filedock.errors import FileDockError

logger = logging.getLogger(__name__)

TOKENS_KEY = "google_drive_tokens"


@dataclass(slots=True, frozen=True)
class DriveTokens:
    access_token: str
    refresh_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DriveTokens":
        access_token = data.get("accessToken")
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("accessToken must be a non-empty string")
        refresh_token = data.get("refreshToken")
        return cls(
            access_token=access_token,
            refresh_token=refresh_token if isinstance(refresh_token, str) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"accessToken": self.access_token}
        if self.refresh_token is not None:
            data["refreshToken"] = self.refresh_token
        return data


class TokenStore:
    """
    JSON file holding string keys to JSON values.

    The file is rewritten on every change; a missing file is an empty store.
    """

    def __init__(self, path: Union[str, "os.PathLike[str]"]) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Any:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def load_tokens(self) -> Optional[DriveTokens]:
        """Return cached tokens, or None if absent or unreadable."""
        try:
            raw = self.get(TOKENS_KEY)
            if raw is None:
                return None
            if not isinstance(raw, dict):
                raise ValueError("stored tokens must be a JSON object")
            return DriveTokens.from_dict(raw)
        except (FileDockError, ValueError):
            logger.exception("Failed to load stored Google Drive tokens")
            return None

    def save_tokens(self, tokens: DriveTokens) -> None:
        self.set(TOKENS_KEY, tokens.to_dict())

    def clear_tokens(self) -> None:
        self.remove(TOKENS_KEY)

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise FileDockError(
                "Failed to read token store",
                details={"path": str(self._path)},
                cause=exc,
            ) from exc
        if not isinstance(data, dict):
            raise FileDockError(
                "Token store must contain a JSON object",
                details={"path": str(self._path)},
            )
        return data

    def _write(self, data: dict[str, Any]) -> None:
        token_dir = self._path.parent
        try:
            token_dir.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(data, f)
        except OSError as exc:
            raise FileDockError(
                "Failed to save token store",
                details={"path": str(self._path)},
                cause=exc,
            ) from exc
