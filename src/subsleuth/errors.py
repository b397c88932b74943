from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class AppError(Exception):
    """Root of every error subsleuth raises on purpose.

    The CLI catches it, logs it with traceback to ``subsleuth.log`` and exits
    with code 1 after printing ``message`` to stderr.

    Attributes:
        message: One-line description shown on stderr.
        code: Stable identifier such as ``INFRA_TWITCH_CLI_FAILED``.
        context: Paths, commands or wrapped errors for the log.
    """

    message: str
    code: str | None = None
    context: Mapping[str, Any] | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(frozen=True, slots=True, kw_only=True)
class SettingsError(AppError):
    """Raised when the environment or ``.env`` holds invalid settings."""

    error: Exception
    message: str = field(init=False)
    code: str = field(init=False, default="SETTINGS_INVALID")

    def __post_init__(self) -> None:  # pragma: no cover - formatting helper
        object.__setattr__(self, "message", f"Invalid settings: {self.error}")
        object.__setattr__(self, "context", {"error": repr(self.error)})
