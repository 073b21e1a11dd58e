from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .models import SignalType


def _default_strengths() -> dict[SignalType, int]:
    # review is strongest (user actually visited); click is weakest
    return {
        SignalType.review: 5,
        SignalType.chat: 4,
        SignalType.like: 3,
        SignalType.comment: 3,
        SignalType.wishlist: 2,
        SignalType.click: 1,
    }


@dataclass(frozen=True)
class SignalConfig:
    max_workers: int = int(os.getenv("EMBEDDING_WORKERS", "2"))
    default_strengths: Mapping[SignalType, int] = field(default_factory=_default_strengths)

    def __post_init__(self) -> None:
        # Read-only copy, so neither the shared default nor a caller's dict can change it
        object.__setattr__(self, "default_strengths", MappingProxyType(dict(self.default_strengths)))


DEFAULT_SIGNAL_CONFIG = SignalConfig()
