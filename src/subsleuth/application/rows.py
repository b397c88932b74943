from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from subsleuth.domain.models import (
    OFFLINE_EVENT,
    ONLINE_EVENT,
    DisplayRow,
    SubscriptionSnapshot,
)

from .error import SnapshotLoadError

NameResolver = Callable[[str], str]


def load_snapshot(path: Path) -> SubscriptionSnapshot:
    try:
        return SubscriptionSnapshot.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as exc:
        raise SnapshotLoadError(path=path, error=exc) from exc


def build_display_rows(
    snapshot: SubscriptionSnapshot, resolve: NameResolver
) -> list[DisplayRow]:
    """Fold subscriptions into one row per broadcaster, sorted by name.

    The first subscription of a broadcaster provides status, callback and
    creation time; later ones only flip the online/offline flags.
    """
    rows: dict[str, DisplayRow] = {}
    for sub in snapshot.subscriptions:
        online = sub.type == ONLINE_EVENT
        offline = sub.type == OFFLINE_EVENT
        row = rows.get(sub.broadcaster_id)
        if row is None:
            rows[sub.broadcaster_id] = DisplayRow(
                broadcaster_id=sub.broadcaster_id,
                display_name=resolve(sub.broadcaster_id),
                status=sub.status,
                online=online,
                offline=offline,
                callback=sub.transport.callback,
                created_at=sub.created_at,
            )
        elif online or offline:
            rows[sub.broadcaster_id] = row.model_copy(
                update={
                    "online": row.online or online,
                    "offline": row.offline or offline,
                }
            )
    logger.debug(
        "folded {} subscriptions into {} rows", len(snapshot.subscriptions), len(rows)
    )
    return sorted(rows.values(), key=lambda row: row.display_name)
