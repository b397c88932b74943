from __future__ import annotations

import time
from datetime import datetime
from typing import Sequence

import typer
from dependency_injector.wiring import Provide, inject
from loguru import logger

from subsleuth.application.resolver import UsernameResolver
from subsleuth.application.rows import build_display_rows, load_snapshot
from subsleuth.domain.models import DisplayRow
from subsleuth.errors import AppError
from subsleuth.infrastructure.cache import CacheStore
from subsleuth.infrastructure.log_setup import setup_logging
from subsleuth.tui.app import SubSleuthApp

from .config import Settings, load_settings
from .container import AppContainer, build_container

app = typer.Typer(
    name="subsleuth",
    help="Browse Twitch EventSub subscriptions in the terminal",
    add_completion=False,
)


def entry_point(settings: Settings) -> AppContainer:
    container = build_container(settings)
    container.wire(modules=[__name__])
    return container


def run_tui(rows: Sequence[DisplayRow], visible_rows: int | None) -> None:
    SubSleuthApp(rows, visible_rows=visible_rows).run()


@inject
def load_rows(
    refresh: bool,
    cache: CacheStore = Provide[AppContainer.cache],
    resolver: UsernameResolver = Provide[AppContainer.resolver],
) -> list[DisplayRow]:
    start = time.perf_counter()
    cache.prepare()
    if refresh:
        cache.invalidate_subscriptions()
    cache.ensure_subscriptions_cached()
    cache.load_users()
    logger.info("Users loaded: {}", len(cache.users.users))
    logger.info("Time to load cache: {:.3f}s", time.perf_counter() - start)

    snapshot = load_snapshot(cache.subscriptions_path)
    logger.info("EventSubs loaded: {}", len(snapshot.subscriptions))
    return build_display_rows(snapshot, resolver.resolve_display_name)


@app.command(help="Show cached EventSub subscriptions in an interactive table")
def main_command(
    rows: int | None = typer.Option(
        None,
        "--rows",
        "-n",
        min=1,
        help="Number of entries to display at once (default: a third of the terminal)",
    ),
    refresh: bool = typer.Option(
        False, "--refresh", help="Discard cached subscriptions and download again"
    ),
) -> None:
    try:
        settings = load_settings()
        setup_logging(settings)
        started = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        logger.info("Starting subsleuth at {}", started)

        entry_point(settings)
        display_rows = load_rows(refresh)
        run_tui(display_rows, rows)
    except AppError as exc:
        logger.opt(exception=exc).error("{}", exc.message)
        typer.echo(f"subsleuth: {exc.message}", err=True)
        raise typer.Exit(1) from exc


def main() -> None:  # pragma: no cover - CLI entry point
    """Entrypoint for the CLI."""
    app()


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
