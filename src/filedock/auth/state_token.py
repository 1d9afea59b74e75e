"""OAuth `state` payload carrying the initiating user through the redirect."""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Optional

from filedock.errors import InvalidStateError
from filedock.util.time import now_millis


@dataclass(slots=True, frozen=True)
class StateToken:
    user_id: str
    timestamp: int


def encode_state(user_id: str, *, timestamp: Optional[int] = None) -> str:
    """
    Encode `{userId, timestamp}` as base64 JSON.

    The payload is not signed and carries no expiry.
    """
    payload = {
        "userId": user_id,
        "timestamp": now_millis() if timestamp is None else timestamp,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode_state(state: str) -> StateToken:
    """
    Decode a state token produced by encode_state.

    Raises:
        InvalidStateError: if the token is not base64 JSON with a userId.
    """
    if not isinstance(state, str) or not state:
        raise InvalidStateError("OAuth state is empty")

    try:
        raw = base64.b64decode(state.encode("ascii"), validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise InvalidStateError("OAuth state is not valid base64 JSON", cause=exc) from exc

    if not isinstance(payload, dict):
        raise InvalidStateError("OAuth state payload must be an object")

    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidStateError(
            "OAuth state payload has no userId",
            details={"keys": sorted(payload)},
        )

    timestamp = payload.get("timestamp")
    return StateToken(
        user_id=user_id,
        timestamp=timestamp if isinstance(timestamp, int) else 0,
    )
