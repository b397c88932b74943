from __future__ import annotations

import contextlib
import os
from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from subsleuth.application.ports import TwitchCliProtocol, UserCacheProtocol
from subsleuth.domain.commands import SUBSCRIPTIONS_ARGS
from subsleuth.domain.models import SubscriptionSnapshot, User, UserDirectory

from .error import (
    CacheDirectoryError,
    CacheWriteError,
    UsersSerializeError,
)

SUBSCRIPTIONS_FILE = "subs.json"
USERS_FILE = "users.json"


class CacheStore(UserCacheProtocol):
    """File-backed cache of the subscriptions snapshot and resolved users.

    ``subs.json`` is downloaded once and never refreshed automatically;
    deleting it (or :meth:`invalidate_subscriptions`) is the only way to get
    a fresh listing. ``users.json`` is written through on every append.
    """

    def __init__(self, cache_dir: Path, cli: TwitchCliProtocol) -> None:
        self.cache_dir = Path(cache_dir)
        self.subscriptions_path = self.cache_dir / SUBSCRIPTIONS_FILE
        self.users_path = self.cache_dir / USERS_FILE
        self.users = UserDirectory()
        self._cli = cli

    def prepare(self) -> None:
        if self.cache_dir.is_dir():
            return
        logger.info("cache directory not found, creating: {}", self.cache_dir)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheDirectoryError(path=self.cache_dir, error=exc) from exc

    def ensure_subscriptions_cached(self) -> bool:
        """Download the subscriptions listing unless it is already cached.

        Returns ``True`` if a download happened.
        """
        if self.subscriptions_path.exists():
            logger.debug("using cached subscriptions {}", self.subscriptions_path)
            return False

        logger.info("downloading and caching subscriptions from twitch")
        payload = self._cli.invoke(SUBSCRIPTIONS_ARGS)
        try:
            snapshot = SubscriptionSnapshot.model_validate_json(payload)
        except ValidationError as exc:
            logger.warning("subscriptions payload doesn't look valid: {}", exc)
        else:
            logger.debug(
                "downloaded {} subscriptions (total {})",
                len(snapshot.subscriptions),
                snapshot.total,
            )

        try:
            self.subscriptions_path.write_bytes(payload)
        except OSError as exc:
            raise CacheWriteError(path=self.subscriptions_path, error=exc) from exc
        logger.debug("wrote {} bytes to cache file", len(payload))
        return True

    def invalidate_subscriptions(self) -> bool:
        if not self.subscriptions_path.exists():
            return False
        logger.info("discarding cached subscriptions {}", self.subscriptions_path)
        try:
            self.subscriptions_path.unlink()
        except OSError as exc:
            raise CacheWriteError(path=self.subscriptions_path, error=exc) from exc
        return True

    def load_users(self) -> None:
        if not self.users_path.exists():
            self.users = UserDirectory()
            return
        try:
            self.users = UserDirectory.model_validate_json(self.users_path.read_bytes())
        except (OSError, ValidationError) as exc:
            logger.error("failed to decode users cache {}: {}", self.users_path, exc)
            self.users = UserDirectory()

    def flush_users(self) -> None:
        try:
            data = self.users.model_dump_json(by_alias=True)
        except PydanticSerializationError as exc:
            raise UsersSerializeError(error=exc) from exc
        tmp = self.users_path.with_suffix(self.users_path.suffix + ".tmp")
        try:
            tmp.write_text(data, encoding="utf-8")
            os.replace(tmp, self.users_path)
        except OSError as exc:
            logger.error("failed to write users cache {}: {}", self.users_path, exc)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)

    def add_users(self, users: Iterable[User]) -> None:
        self.users.users.extend(users)

    def get_user_by_id(self, user_id: str) -> User:
        for user in self.users.users:
            if user.id == user_id:
                return user
        return User()

    def get_user_by_name(self, name: str) -> User:
        for user in self.users.users:
            if user.login == name:
                return user
        return User()
