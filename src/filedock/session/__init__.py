"""Client-side session exports for filedock."""

from __future__ import annotations

from .drive_session import ConnectionState, DriveSession, parse_auth_redirect
from .token_store import TOKENS_KEY, DriveTokens, TokenStore

__all__ = [
    "ConnectionState",
    "DriveSession",
    "parse_auth_redirect",
    "DriveTokens",
    "TokenStore",
    "TOKENS_KEY",
]
