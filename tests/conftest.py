from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from subsleuth.infrastructure.cache import CacheStore
from subsleuth.infrastructure.error import ToolExecutionError

from .helpers import FakeCli


@pytest.fixture
def cli_failure() -> ToolExecutionError:
    return ToolExecutionError(command=("api",), error=RuntimeError("exit status 1"))


@pytest.fixture
def make_cache(tmp_path: Path) -> Callable[[FakeCli], CacheStore]:
    """Build a prepared CacheStore in a temporary directory."""

    def factory(cli: FakeCli) -> CacheStore:
        cache = CacheStore(tmp_path / "cache", cli)
        cache.prepare()
        return cache

    return factory


@pytest.fixture
def fake_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point all subsleuth directories into *tmp_path*."""
    cache_dir = tmp_path / "cache"
    monkeypatch.setenv("SUBSLEUTH_CACHE_DIR", str(cache_dir))
    monkeypatch.setenv("SUBSLEUTH_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("EVENTSUB_TWITCH_CLI_PATH", raising=False)
    monkeypatch.delenv("SUBSLEUTH_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    return cache_dir
