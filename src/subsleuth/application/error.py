from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from subsleuth.errors import AppError


@dataclass(frozen=True, slots=True)
class ApplicationError(AppError):
    """Base exception for application layer."""


@dataclass(frozen=True, slots=True)
class SnapshotLoadError(ApplicationError):
    """Raised when the cached subscriptions snapshot can't be read or decoded."""

    path: Path = field(kw_only=True)
    error: Exception = field(kw_only=True)
    message: str = field(init=False)
    code: str = field(init=False, default="APP_SNAPSHOT_LOAD_FAILED")
    context: dict[str, str] = field(init=False)

    def __post_init__(self) -> None:  # pragma: no cover - formatting helper
        object.__setattr__(
            self,
            "message",
            f"Failed to load event subscriptions from {self.path}: {self.error}",
        )
        object.__setattr__(
            self, "context", {"path": str(self.path), "error": repr(self.error)}
        )
