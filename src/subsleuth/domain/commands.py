"""Argument lists understood by the Twitch CLI."""

from __future__ import annotations

SUBSCRIPTIONS_ARGS: tuple[str, ...] = ("api", "get", "-P", "eventsub/subscriptions")


def users_args(*ids: str) -> list[str]:
    """Build ``api get users -q id=<id> [-q id=<id> ...]``."""
    args = ["api", "get", "users"]
    for user_id in ids:
        args.extend(("-q", f"id={user_id}"))
    return args
