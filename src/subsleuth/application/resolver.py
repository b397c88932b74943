from __future__ import annotations

from loguru import logger
from pydantic import ValidationError

from subsleuth.domain.commands import users_args
from subsleuth.domain.models import UserResponse
from subsleuth.errors import AppError

from .ports import TwitchCliProtocol, UserCacheProtocol

UNKNOWN_GLYPH = "👾"


class UsernameResolver:
    """Resolve broadcaster ids to display names, enriching the user cache."""

    def __init__(self, cache: UserCacheProtocol, cli: TwitchCliProtocol) -> None:
        self.cache = cache
        self.cli = cli

    def resolve_display_name(self, broadcaster_id: str, *extra_ids: str) -> str:
        """Return the display name for *broadcaster_id*.

        Cached users are answered without I/O. On a miss the Twitch CLI is
        asked for *broadcaster_id* (and *extra_ids*, if any), every returned
        user is cached and persisted. Never raises: failures and empty
        lookups yield :data:`UNKNOWN_GLYPH`.
        """
        cached = self.cache.get_user_by_id(broadcaster_id)
        if not cached.is_empty:
            return cached.display_name

        try:
            payload = self.cli.invoke(users_args(broadcaster_id, *extra_ids))
        except AppError as exc:
            logger.error("failed to get broadcaster username: {}", exc)
            return UNKNOWN_GLYPH

        try:
            response = UserResponse.model_validate_json(payload)
        except ValidationError as exc:
            logger.error("failed to decode users response: {}", exc)
            return UNKNOWN_GLYPH

        if not response.users:
            logger.warning("no user found for broadcaster id {}", broadcaster_id)
            return UNKNOWN_GLYPH

        self.cache.add_users(response.users)
        self.cache.flush_users()
        return response.users[0].display_name
