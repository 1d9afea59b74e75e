"""Client-side Google Drive connection state."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from filedock.api import FileDockClient
from filedock.config import FileDockSettings, get_settings
from filedock.errors import FileDockError, InvalidStateError
from filedock.models import DriveFile, ImportSummary, Notification
from filedock.notifications import import_error_notification, import_notification

from .token_store import DriveTokens, TokenStore

logger = logging.getLogger(__name__)

AUTH_RESULT_PARAM = "google_drive_auth"
ACCESS_TOKEN_PARAM = "access_token"
REFRESH_TOKEN_PARAM = "refresh_token"
_CALLBACK_PARAMS = (AUTH_RESULT_PARAM, ACCESS_TOKEN_PARAM, REFRESH_TOKEN_PARAM)


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


def parse_auth_redirect(url: str) -> tuple[Optional[DriveTokens], str]:
    """
    Extract tokens from an OAuth redirect back to the app.

    Returns:
        (tokens or None, url with the callback parameters removed). Tokens
        are only returned for `google_drive_auth=success` with an access token.
    """
    parts = urlsplit(url)
    params = parse_qsl(parts.query, keep_blank_values=True)
    values = dict(params)

    tokens = None
    access_token = values.get(ACCESS_TOKEN_PARAM)
    if values.get(AUTH_RESULT_PARAM) == "success" and access_token:
        tokens = DriveTokens(
            access_token=access_token,
            refresh_token=values.get(REFRESH_TOKEN_PARAM) or None,
        )

    remaining = [(k, v) for k, v in params if k not in _CALLBACK_PARAMS]
    cleaned = urlunsplit(parts._replace(query=urlencode(remaining)))
    return tokens, cleaned


class DriveSession:
    """
    Drive connection for one signed-in user.

    State is derived only from whether tokens are cached; tokens are never
    validated against Google. A revoked token reads as connected until a
    call fails and invalidate() is called.
    """

    def __init__(self, store: TokenStore) -> None:
        self._store = store
        self._tokens = store.load_tokens()

    @classmethod
    def from_settings(cls, settings: Optional[FileDockSettings] = None) -> "DriveSession":
        settings = settings or get_settings()
        return cls(TokenStore(settings.token_store_path))

    @property
    def state(self) -> ConnectionState:
        if self._tokens is None:
            return ConnectionState.DISCONNECTED
        return ConnectionState.CONNECTED

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    @property
    def tokens(self) -> Optional[DriveTokens]:
        return self._tokens

    def connect(self, tokens: DriveTokens) -> None:
        self._store.save_tokens(tokens)
        self._tokens = tokens

    def disconnect(self) -> None:
        self._store.clear_tokens()
        self._tokens = None

    def invalidate(self) -> None:
        """Drop tokens after Google rejected them."""
        if self._tokens is not None:
            logger.warning("Google Drive token rejected; disconnecting")
        self.disconnect()

    def handle_redirect(self, url: str) -> str:
        """Consume OAuth callback parameters, connecting if they carry tokens."""
        tokens, cleaned = parse_auth_redirect(url)
        if tokens is not None:
            self.connect(tokens)
        return cleaned

    def require_access_token(self) -> str:
        if self._tokens is None:
            raise InvalidStateError("Google Drive not authenticated")
        return self._tokens.access_token

    async def list_files(
        self,
        client: FileDockClient,
        folder_id: Optional[str] = None,
    ) -> list[DriveFile]:
        return await self._call(client.list_drive_files, folder_id)

    async def search_files(self, client: FileDockClient, query: str) -> list[DriveFile]:
        return await self._call(client.search_drive_files, query)

    async def import_files(
        self,
        client: FileDockClient,
        file_ids: Sequence[str],
    ) -> tuple[Optional[ImportSummary], Optional[Notification]]:
        """
        Import file_ids through the server.

        Returns the summary (None if the request failed) and the single
        notification describing the outcome.

        Raises:
            InvalidStateError: if the session is not connected.
        """
        self.require_access_token()
        try:
            summary = await self._call(client.import_drive_files, list(file_ids))
        except FileDockError as exc:
            logger.exception("Google Drive import failed")
            return None, import_error_notification(exc)
        return summary, import_notification(summary)

    async def _call(self, method, *args):
        access_token = self.require_access_token()
        try:
            return await method(access_token, *args)
        except FileDockError as exc:
            if exc.details.get("status_code") == 401:
                self.invalidate()
            raise
