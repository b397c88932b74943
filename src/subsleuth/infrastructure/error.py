from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from subsleuth.errors import AppError


@dataclass(frozen=True, slots=True, kw_only=True)
class InfraError(AppError):
    """Base exception for infrastructure layer."""


@dataclass(frozen=True, slots=True, kw_only=True)
class ToolNotFoundError(InfraError):
    path: str
    message: str = field(init=False)
    code: str = field(init=False, default="INFRA_TWITCH_CLI_NOT_FOUND")

    def __post_init__(self) -> None:  # pragma: no cover - formatting helper
        object.__setattr__(
            self,
            "message",
            f"twitch cli not found at {self.path}, set EVENTSUB_TWITCH_CLI_PATH",
        )
        object.__setattr__(self, "context", {"path": self.path})


@dataclass(frozen=True, slots=True, kw_only=True)
class ToolExecutionError(InfraError):
    command: tuple[str, ...]
    error: Exception
    message: str = field(init=False)
    code: str = field(init=False, default="INFRA_TWITCH_CLI_FAILED")

    def __post_init__(self) -> None:  # pragma: no cover - formatting helper
        object.__setattr__(
            self,
            "message",
            f"failed to run twitch cli {' '.join(self.command)}: {self.error}",
        )
        object.__setattr__(
            self, "context", {"command": self.command, "error": repr(self.error)}
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheDirectoryError(InfraError):
    path: Path
    error: Exception
    message: str = field(init=False)
    code: str = field(init=False, default="INFRA_CACHE_DIR_UNAVAILABLE")

    def __post_init__(self) -> None:  # pragma: no cover - formatting helper
        object.__setattr__(
            self, "message", f"Can't create cache directory {self.path}: {self.error}"
        )
        object.__setattr__(self, "context", {"path": str(self.path)})


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheWriteError(InfraError):
    path: Path
    error: Exception
    message: str = field(init=False)
    code: str = field(init=False, default="INFRA_CACHE_WRITE_FAILED")

    def __post_init__(self) -> None:  # pragma: no cover - formatting helper
        object.__setattr__(
            self, "message", f"Failed to write cache file {self.path}: {self.error}"
        )
        object.__setattr__(self, "context", {"path": str(self.path)})


@dataclass(frozen=True, slots=True, kw_only=True)
class UsersSerializeError(InfraError):
    error: Exception
    message: str = field(init=False)
    code: str = field(init=False, default="INFRA_USERS_SERIALIZE_FAILED")

    def __post_init__(self) -> None:  # pragma: no cover - formatting helper
        object.__setattr__(
            self, "message", f"Failed to marshal users data: {self.error}"
        )
        object.__setattr__(self, "context", {"error": repr(self.error)})


@dataclass(frozen=True, slots=True, kw_only=True)
class LoggingSetupError(InfraError):
    path: Path
    error: Exception
    message: str = field(init=False)
    code: str = field(init=False, default="INFRA_LOG_SETUP_FAILED")

    def __post_init__(self) -> None:  # pragma: no cover - formatting helper
        object.__setattr__(
            self, "message", f"Can't open log file {self.path}: {self.error}"
        )
        object.__setattr__(self, "context", {"path": str(self.path)})
