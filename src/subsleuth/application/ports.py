from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, Sequence

from subsleuth.domain.models import User


class TwitchCliProtocol(Protocol):
    def invoke(self, args: Sequence[str]) -> bytes:
        """Run the Twitch CLI with *args* and return its combined output.

        Raises an :class:`~subsleuth.errors.AppError` subclass on failure.
        """
        ...  # pragma: no cover


class UserCacheProtocol(Protocol):
    """In-memory user directory with write-through persistence."""

    def get_user_by_id(self, user_id: str) -> User: ...  # pragma: no cover

    def add_users(self, users: Iterable[User]) -> None: ...  # pragma: no cover

    def flush_users(self) -> None: ...  # pragma: no cover
