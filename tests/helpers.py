from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any


class FakeCli:
    """Return canned payloads in order and record every invocation."""

    def __init__(self, *responses: bytes | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[list[str]] = []

    def invoke(self, args: Sequence[str]) -> bytes:
        self.calls.append(list(args))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def users_payload(*users: dict[str, Any]) -> bytes:
    return json.dumps({"data": list(users)}).encode()


def subscription(
    broadcaster_id: str,
    type_: str = "stream.online",
    *,
    status: str = "enabled",
    callback: str = "https://example.com/webhook",
    created_at: str = "2023-05-01T10:20:30.123456789Z",
) -> dict[str, Any]:
    return {
        "id": f"{broadcaster_id}-{type_}",
        "status": status,
        "type": type_,
        "version": "1",
        "condition": {"broadcaster_user_id": broadcaster_id},
        "created_at": created_at,
        "transport": {"method": "webhook", "callback": callback},
        "cost": 1,
    }


def snapshot_payload(*subs: dict[str, Any]) -> bytes:
    return json.dumps(
        {"data": list(subs), "pagination": {"cursor": ""}, "total": len(subs)}
    ).encode()
