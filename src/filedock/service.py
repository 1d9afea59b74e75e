"""GoogleDriveService: OAuth, listing, search and download for one Drive integration."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from filedock.auth import OAuthClient, credentials_to_tokens, decode_state
from filedock.config import FileDockSettings, get_settings
from filedock.controller import GoogleDriveController
from filedock.errors import (
    ApiError,
    AuthError,
    FileDockError,
    InvalidArgumentError,
    UnsupportedExportError,
)
from filedock.models import AuthUrl, DriveFile, FilePage, TokenExchangeResult
from filedock.util.mime import export_mime_for, is_google_app

logger = logging.getLogger(__name__)

ControllerFactory = Callable[[str], GoogleDriveController]


class GoogleDriveService:
    """
    Server-side Drive adapter.

    Every Drive call is made with the caller's access token; the service
    itself holds no per-user state.

    Error policy:
        - list_files / search_files raise ApiError with a generic message.
        - get_file_metadata / download_file return None on any failure.
        - exchange_code_for_tokens returns a result carrying `error`.
        - refresh_access_token raises AuthError.
    """

    def __init__(
        self,
        oauth_client: OAuthClient,
        *,
        controller_factory: Optional[ControllerFactory] = None,
    ) -> None:
        self._oauth = oauth_client
        self._controller_factory = controller_factory or (
            lambda token: GoogleDriveController(oauth_client, token)
        )

    @classmethod
    def from_settings(cls, settings: Optional[FileDockSettings] = None) -> "GoogleDriveService":
        settings = settings or get_settings()
        return cls(OAuthClient(settings.oauth_app_info()))

    # ----------------------------
    # OAuth
    # ----------------------------
    def generate_auth_url(self, user_id: str) -> AuthUrl:
        return self._oauth.generate_auth_url(user_id)

    def exchange_code_for_tokens(self, code: str, state: str) -> TokenExchangeResult:
        """
        Recover the user from state and exchange code for tokens.

        A malformed state and a rejected code produce the same error result.
        """
        try:
            user_id = decode_state(state).user_id
            creds = self._oauth.exchange_code(code)
        except FileDockError:
            logger.exception("Token exchange error")
            return TokenExchangeResult(error="Failed to exchange authorization code")

        return TokenExchangeResult(tokens=credentials_to_tokens(creds), user_id=user_id)

    def refresh_access_token(self, refresh_token: str) -> dict[str, Any]:
        if not isinstance(refresh_token, str) or not refresh_token:
            raise InvalidArgumentError("refresh_token must be a non-empty string")
        try:
            creds = self._oauth.refresh(refresh_token)
        except AuthError:
            logger.exception("Token refresh error")
            raise
        return credentials_to_tokens(creds)

    # ----------------------------
    # Listing
    # ----------------------------
    def list_files(
        self,
        access_token: str,
        folder_id: Optional[str] = None,
        page_token: Optional[str] = None,
    ) -> FilePage:
        """List children of folder_id (Drive root when unset)."""
        try:
            controller = self._controller_factory(access_token)
            return controller.list_children(folder_id, page_token=page_token)
        except FileDockError as exc:
            logger.exception("Google Drive list files error")
            raise ApiError("Failed to list Google Drive files", cause=exc) from exc

    def search_files(
        self,
        access_token: str,
        query: str,
        page_token: Optional[str] = None,
    ) -> FilePage:
        try:
            controller = self._controller_factory(access_token)
            return controller.search_by_name(query, page_token=page_token)
        except FileDockError as exc:
            logger.exception("Google Drive search error")
            raise ApiError("Failed to search Google Drive files", cause=exc) from exc

    def get_file_metadata(self, access_token: str, file_id: str) -> Optional[DriveFile]:
        try:
            return self._controller_factory(access_token).get(file_id)
        except FileDockError:
            logger.exception("Google Drive get file error: %s", file_id)
            return None

    # ----------------------------
    # Content
    # ----------------------------
    def download_file(self, access_token: str, file_id: str) -> Optional[bytes]:
        """
        Return the file's bytes, exporting Workspace documents first.

        Returns None when the file is missing, is a Workspace type without an
        export format, or the download fails.
        """
        fetched = self.fetch_file(access_token, file_id)
        return fetched[1] if fetched is not None else None

    def fetch_file(
        self,
        access_token: str,
        file_id: str,
    ) -> Optional[tuple[DriveFile, bytes, Optional[str]]]:
        """
        Like download_file, but also return the metadata and export format.

        Returns:
            (metadata, content, export_mime_type or None), or None on failure.
        """
        metadata = self.get_file_metadata(access_token, file_id)
        if metadata is None:
            return None

        try:
            controller = self._controller_factory(access_token)
            if is_google_app(metadata.mime_type):
                export_mime = export_mime_for(metadata.mime_type)
                if export_mime is None:
                    raise UnsupportedExportError(
                        "Unsupported Google Workspace file type for export",
                        details={"mime_type": metadata.mime_type, "file_id": file_id},
                    )
                return metadata, controller.export(file_id, export_mime), export_mime
            return metadata, controller.download_media(file_id), None
        except FileDockError:
            logger.exception("Google Drive download error: %s", file_id)
            return None
