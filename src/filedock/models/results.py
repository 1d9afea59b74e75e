"""Result models for OAuth and import operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional


NotificationVariant = Literal["default", "destructive"]


@dataclass(slots=True, frozen=True)
class AuthUrl:
    """Authorization URL plus the state token embedded in it."""

    auth_url: str
    state: str


@dataclass(slots=True)
class TokenExchangeResult:
    """
    Outcome of exchanging an authorization code.

    On success `tokens` and `user_id` are set; on failure only `error` is.
    """

    tokens: Optional[dict[str, Any]] = None
    user_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class ImportSummary:
    """Aggregate result for importing several Drive files."""

    imported: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImportSummary":
        errors = data.get("errors") or []
        return cls(
            imported=int(data.get("imported", 0)),
            failed=int(data.get("failed", 0)),
            errors=[str(e) for e in errors],
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"imported": self.imported, "failed": self.failed}
        if self.errors:
            data["errors"] = list(self.errors)
        return data


@dataclass(slots=True, frozen=True)
class Notification:
    """A single user-facing message summarizing one operation."""

    title: str
    description: str
    variant: NotificationVariant = "default"
