"""Public auth exports for filedock."""

from __future__ import annotations

from .app_info import OAuthAppInfo
from .oauth_client import DRIVE_READONLY_SCOPE, OAuthClient, credentials_to_tokens
from .state_token import StateToken, decode_state, encode_state

__all__ = [
    "OAuthAppInfo",
    "OAuthClient",
    "DRIVE_READONLY_SCOPE",
    "credentials_to_tokens",
    "StateToken",
    "encode_state",
    "decode_state",
]
