from __future__ import annotations

from dependency_injector import containers, providers

from subsleuth.application.resolver import UsernameResolver
from subsleuth.infrastructure.cache import CacheStore
from subsleuth.infrastructure.twitch_cli import TwitchCli

from .config import Settings


# ---------- DI container ----------
class AppContainer(containers.DeclarativeContainer):
    """Dependency Injector container for the app."""

    settings = providers.Singleton(Settings)
    container_config = providers.Configuration()

    twitch_cli = providers.Singleton(
        TwitchCli,
        path_override=container_config.twitch_cli_path,
        config_dir=container_config.config_dir,
    )
    cache = providers.Singleton(
        CacheStore, cache_dir=container_config.cache_dir, cli=twitch_cli
    )
    resolver = providers.Singleton(UsernameResolver, cache=cache, cli=twitch_cli)


# ---------- bootstrap helpers ----------


def build_container(settings: Settings) -> AppContainer:
    """Create container and load config from *settings*."""
    container = AppContainer()
    container.container_config.from_pydantic(settings)  # pyright: ignore
    container.settings.override(providers.Object(settings))
    return container
