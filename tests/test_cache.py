from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from subsleuth.domain.models import User
from subsleuth.infrastructure.cache import CacheStore
from subsleuth.infrastructure import cache as cache_mod
from subsleuth.infrastructure.error import (
    CacheDirectoryError,
    CacheWriteError,
    ToolExecutionError,
)

from .helpers import FakeCli, snapshot_payload, subscription

MakeCache = Callable[[FakeCli], CacheStore]


def test_prepare_creates_nested_directory(tmp_path: Path) -> None:
    cache = CacheStore(tmp_path / "a" / "b", FakeCli())
    cache.prepare()
    cache.prepare()
    assert cache.cache_dir.is_dir()
    assert cache.subscriptions_path == tmp_path / "a" / "b" / "subs.json"
    assert cache.users_path == tmp_path / "a" / "b" / "users.json"


def test_prepare_fails_when_path_is_a_file(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("")
    cache = CacheStore(blocker / "cache", FakeCli())
    with pytest.raises(CacheDirectoryError):
        cache.prepare()


def test_download_writes_payload_verbatim(make_cache: MakeCache) -> None:
    payload = snapshot_payload(subscription("1"))
    cli = FakeCli(payload)
    cache = make_cache(cli)

    assert cache.ensure_subscriptions_cached() is True
    assert cache.subscriptions_path.read_bytes() == payload
    assert cli.calls == [["api", "get", "-P", "eventsub/subscriptions"]]


def test_ensure_subscriptions_cached_is_idempotent(make_cache: MakeCache) -> None:
    cli = FakeCli(snapshot_payload())
    cache = make_cache(cli)

    assert cache.ensure_subscriptions_cached() is True
    assert cache.ensure_subscriptions_cached() is False
    assert len(cli.calls) == 1


def test_malformed_payload_is_still_written(make_cache: MakeCache) -> None:
    cache = make_cache(FakeCli(b"Error: not logged in"))
    cache.ensure_subscriptions_cached()
    assert cache.subscriptions_path.read_bytes() == b"Error: not logged in"


def test_download_failure_propagates(
    make_cache: MakeCache, cli_failure: ToolExecutionError
) -> None:
    cache = make_cache(FakeCli(cli_failure))
    with pytest.raises(ToolExecutionError):
        cache.ensure_subscriptions_cached()
    assert not cache.subscriptions_path.exists()


def test_invalidate_forces_new_download(make_cache: MakeCache) -> None:
    cli = FakeCli(snapshot_payload(), snapshot_payload(subscription("2")))
    cache = make_cache(cli)
    cache.ensure_subscriptions_cached()

    assert cache.invalidate_subscriptions() is True
    assert cache.invalidate_subscriptions() is False
    assert cache.ensure_subscriptions_cached() is True
    assert b'"2"' in cache.subscriptions_path.read_bytes()
    assert len(cli.calls) == 2


def test_invalidate_failure_raises(make_cache: MakeCache) -> None:
    cache = make_cache(FakeCli())
    cache.subscriptions_path.mkdir()
    with pytest.raises(CacheWriteError):
        cache.invalidate_subscriptions()


def test_load_users_without_file_is_empty(make_cache: MakeCache) -> None:
    cache = make_cache(FakeCli())
    cache.load_users()
    assert cache.users.users == []


def test_load_users_with_corrupt_file_is_empty(make_cache: MakeCache) -> None:
    cache = make_cache(FakeCli())
    cache.users_path.write_text("{not json")
    cache.load_users()
    assert cache.users.users == []


def test_flush_and_load_round_trip(make_cache: MakeCache) -> None:
    cache = make_cache(FakeCli())
    users = [
        User(id="2", login="bar", display_name="Bar", view_count=7),
        User(id="1", login="foo", display_name="Foo", email="foo@example.com"),
    ]
    cache.add_users(users)
    cache.flush_users()

    data = json.loads(cache.users_path.read_text())
    assert [u["id"] for u in data["Users"]] == ["2", "1"]

    reloaded = CacheStore(cache.cache_dir, FakeCli())
    reloaded.load_users()
    by_id = lambda us: {u.id: u for u in us}  # noqa: E731
    assert by_id(reloaded.users.users) == by_id(users)
    assert list(cache.cache_dir.glob("*.tmp")) == []


def test_flush_write_failure_is_not_fatal(make_cache: MakeCache) -> None:
    cache = make_cache(FakeCli())
    cache.users_path.mkdir()
    cache.add_users([User(id="1")])
    cache.flush_users()
    assert cache.users_path.is_dir()
    assert list(cache.cache_dir.glob("*.tmp")) == []


def test_failed_flush_keeps_previous_users_file(
    make_cache: MakeCache, monkeypatch: pytest.MonkeyPatch
) -> None:
    cache = make_cache(FakeCli())
    cache.add_users([User(id="1", display_name="Foo")])
    cache.flush_users()
    before = cache.users_path.read_text()

    def fail_replace(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(cache_mod.os, "replace", fail_replace)
    cache.add_users([User(id="2", display_name="Bar")])
    cache.flush_users()

    assert cache.users_path.read_text() == before
    assert list(cache.cache_dir.glob("*.tmp")) == []


def test_lookups_return_empty_user_when_missing(make_cache: MakeCache) -> None:
    cache = make_cache(FakeCli())
    cache.add_users([User(id="1", login="foo", display_name="Foo")])

    assert cache.get_user_by_id("1").display_name == "Foo"
    assert cache.get_user_by_name("foo").id == "1"
    assert cache.get_user_by_id("404").is_empty
    assert cache.get_user_by_name("nobody").is_empty
