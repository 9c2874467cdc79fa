"""Tagged controller states.

Each controller holds exactly one of these variants, so combinations such
as "loading and failed at once" cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

K = TypeVar("K")
T = TypeVar("T")


@dataclass(frozen=True)
class Idle:
    """Nothing requested (empty search term / no selection)."""


@dataclass(frozen=True)
class Loading(Generic[K]):
    """A request for *key* is in flight."""

    key: K


@dataclass(frozen=True)
class Loaded(Generic[K, T]):
    """The request for *key* completed with *data*."""

    key: K
    data: T


@dataclass(frozen=True)
class Failed(Generic[K]):
    """The request for *key* failed; *message* is user-facing."""

    key: K
    message: str


RequestState = Idle | Loading | Loaded | Failed

IDLE = Idle()


def is_loading(state: RequestState) -> bool:
    return isinstance(state, Loading)


def error_message(state: RequestState) -> str | None:
    if isinstance(state, Failed):
        return state.message
    return None
