from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SignalType(str, Enum):
    review = "review"
    chat = "chat"
    like = "like"
    comment = "comment"
    wishlist = "wishlist"
    click = "click"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TasteSignal(BaseModel):
    """One recorded user interaction. Never mutated after creation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str = Field(..., min_length=1)
    signal_type: SignalType
    signal_strength: int = Field(..., ge=1, le=5)
    is_positive: bool = True
    restaurant_id: str | None = None
    place_id: str | None = None
    restaurant_name: str | None = None
    cuisine_types: tuple[str, ...] = ()
    content: str | None = None
    source_id: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class AddSignalRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    signal_type: SignalType
    signal_strength: int | None = Field(default=None, ge=1, le=5)
    is_positive: bool = True
    restaurant_id: str | None = None
    place_id: str | None = None
    restaurant_name: str | None = None
    cuisine_types: list[str] = Field(default_factory=list)
    content: str | None = Field(default=None, max_length=2000)
    source_id: str | None = None


class AddSignalResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    signal: TasteSignal | None = None


class SignalsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    signals: list[TasteSignal]
    total: int
