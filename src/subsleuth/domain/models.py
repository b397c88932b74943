from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

ONLINE_EVENT = "stream.online"
OFFLINE_EVENT = "stream.offline"

CHECK_MARK = "✓"
CROSS_MARK = "x"
CREATED_FORMAT = "%Y-%m-%d %H:%M"

# Twitch reports nanoseconds, datetime keeps microseconds.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class ConfiguredBaseModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Condition(ConfiguredBaseModel):
    broadcaster_user_id: str = ""


class Transport(ConfiguredBaseModel):
    method: str = ""
    callback: str = ""


class Subscription(ConfiguredBaseModel):
    """A single EventSub webhook registration."""

    id: str = ""
    status: str = ""
    type: str = ""
    version: str = ""
    cost: int = 0
    created_at: datetime | None = None
    condition: Condition = Field(default_factory=Condition)
    transport: Transport = Field(default_factory=Transport)

    @field_validator("created_at", mode="before")
    @classmethod
    def _truncate_fraction(cls, v: Any) -> Any:
        if v == "":
            return None
        if isinstance(v, str):
            return _FRACTION_RE.sub(r"\1", v, count=1)
        return v

    @property
    def broadcaster_id(self) -> str:
        return self.condition.broadcaster_user_id


class Pagination(ConfiguredBaseModel):
    cursor: str = ""


class SubscriptionSnapshot(ConfiguredBaseModel):
    """Full listing as returned by ``twitch api get eventsub/subscriptions``."""

    subscriptions: list[Subscription] = Field(default_factory=list, alias="data")
    pagination: Pagination = Field(default_factory=Pagination)
    total: int = 0


class User(ConfiguredBaseModel):
    id: str = ""
    login: str = ""
    display_name: str = ""
    type: str = ""
    broadcaster_type: str = ""
    description: str = ""
    profile_image_url: str = ""
    offline_image_url: str = ""
    view_count: int = 0
    email: str = ""

    @property
    def is_empty(self) -> bool:
        return self == User()


class UserResponse(ConfiguredBaseModel):
    users: list[User] = Field(default_factory=list, alias="data")


class UserDirectory(BaseModel):
    """Users resolved so far, persisted as ``{"Users": [...]}``."""

    model_config = ConfigDict(populate_by_name=True)

    users: list[User] = Field(default_factory=list, alias="Users")


class DisplayRow(ConfiguredBaseModel):
    """One table row per broadcaster."""

    broadcaster_id: str
    display_name: str
    status: str = ""
    online: bool = False
    offline: bool = False
    callback: str = ""
    created_at: datetime | None = None

    def cells(self) -> tuple[str, str, str, str, str, str]:
        created = (
            self.created_at.astimezone().strftime(CREATED_FORMAT)
            if self.created_at
            else ""
        )
        return (
            self.display_name,
            self.status,
            CHECK_MARK if self.online else CROSS_MARK,
            CHECK_MARK if self.offline else CROSS_MARK,
            self.callback,
            created,
        )
