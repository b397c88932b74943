from __future__ import annotations

from .cache import CacheStore
from .twitch_cli import TwitchCli

__all__ = ["CacheStore", "TwitchCli"]
