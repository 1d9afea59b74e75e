"""OAuth client registration for the Drive integration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass(slots=True, frozen=True)
class OAuthAppInfo:
    """
    Web-application OAuth client registration.

    All three values must be non-empty strings.
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    auth_uri: str = GOOGLE_AUTH_URI
    token_uri: str = GOOGLE_TOKEN_URI

    def __post_init__(self) -> None:
        for key in ("client_id", "client_secret", "redirect_uri"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"OAuthAppInfo.{key} must be a non-empty string")

    def client_config(self) -> dict[str, Any]:
        """Return the client secrets mapping expected by google-auth-oauthlib."""
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": self.auth_uri,
                "token_uri": self.token_uri,
                "redirect_uris": [self.redirect_uri],
            }
        }
