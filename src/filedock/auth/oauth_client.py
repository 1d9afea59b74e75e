"""OAuth client utilities for filedock."""

from __future__ import annotations

import os
from datetime import timezone
from typing import Any, Optional, Sequence

from filedock.errors import AuthError, InvalidArgumentError
from filedock.models import AuthUrl
from filedock.util.time import to_rfc3339

from .app_info import OAuthAppInfo
from .state_token import encode_state

# Google may grant a superset of the requested scopes.
os.environ.setdefault("OAUTHLIB_RELAX_TOKEN_SCOPE", "1")

DRIVE_READONLY_SCOPE = "https://www.googleapis.com/auth/drive.readonly"


class OAuthClient:
    """Run the web-server OAuth flow for Drive and build Drive services."""

    DEFAULT_SCOPES: tuple[str, ...] = (DRIVE_READONLY_SCOPE,)

    def __init__(
        self,
        app_info: OAuthAppInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
    ) -> None:
        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        if not use_scopes or not all(isinstance(s, str) and s.strip() for s in use_scopes):
            raise InvalidArgumentError("scopes must be a non-empty sequence of strings")
        self._app_info = app_info
        self._scopes = use_scopes

    @property
    def scopes(self) -> list[str]:
        return list(self._scopes)

    def generate_auth_url(self, user_id: str) -> AuthUrl:
        """
        Build the consent-screen URL for user_id.

        `prompt=consent` is always sent so Google issues a refresh token on
        every authorization, not only the first.
        """
        if not isinstance(user_id, str) or not user_id.strip():
            raise InvalidArgumentError("user_id must be a non-empty string")

        state = encode_state(user_id)
        flow = self._build_flow()
        auth_url, _ = flow.authorization_url(
            access_type="offline",
            prompt="consent",
            include_granted_scopes="false",
            state=state,
        )
        return AuthUrl(auth_url=auth_url, state=state)

    def exchange_code(self, code: str):
        """
        Exchange an authorization code for credentials.

        Returns:
            google.oauth2.credentials.Credentials

        Raises:
            AuthError: if the provider rejects the code or the request fails.
        """
        if not isinstance(code, str) or not code:
            raise InvalidArgumentError("code must be a non-empty string")

        flow = self._build_flow()
        try:
            flow.fetch_token(code=code)
        except Exception as exc:
            raise AuthError("Failed to exchange authorization code", cause=exc) from exc
        return flow.credentials

    def refresh(self, refresh_token: str):
        """
        Exchange a refresh token for a fresh access token.

        Raises:
            AuthError: on refresh failures.
        """
        from google.auth.transport.requests import Request

        creds = self.credentials_for(None, refresh_token=refresh_token)
        try:
            creds.refresh(Request())
        except Exception as exc:
            raise AuthError("Failed to refresh access token", cause=exc) from exc
        return creds

    def credentials_for(self, access_token: Optional[str], *, refresh_token: Optional[str] = None):
        """Wrap stored tokens in a Credentials object bound to this client."""
        from google.oauth2.credentials import Credentials

        return Credentials(
            token=access_token,
            refresh_token=refresh_token,
            token_uri=self._app_info.token_uri,
            client_id=self._app_info.client_id,
            client_secret=self._app_info.client_secret,
            scopes=self._scopes,
        )

    def build_drive_service(self, access_token: str):
        """
        Build a Drive API service resource authorized by access_token.

        Returns:
            googleapiclient.discovery.Resource
        """
        from googleapiclient.discovery import build

        creds = self.credentials_for(access_token)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    def _build_flow(self):
        from google_auth_oauthlib.flow import Flow

        flow = Flow.from_client_config(
            self._app_info.client_config(),
            scopes=self._scopes,
            redirect_uri=self._app_info.redirect_uri,
            # The code is exchanged by a different Flow than the one that
            # built the URL, so no PKCE verifier can be carried across.
            autogenerate_code_verifier=False,
        )
        return flow


def credentials_to_tokens(creds: Any) -> dict[str, Any]:
    """Flatten Credentials into the token mapping handed back to callers."""
    tokens: dict[str, Any] = {
        "access_token": creds.token,
        "token_type": "Bearer",
    }
    if getattr(creds, "refresh_token", None):
        tokens["refresh_token"] = creds.refresh_token
    expiry = getattr(creds, "expiry", None)
    if expiry is not None:
        # google-auth keeps expiry as naive UTC.
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        tokens["expiry"] = to_rfc3339(expiry)
    scopes = getattr(creds, "scopes", None)
    if scopes:
        tokens["scope"] = " ".join(scopes)
    return tokens
