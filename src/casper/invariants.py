"""Invariant markers."""

from __future__ import annotations

from typing import Callable, NoReturn, TypeVar

from casper.exceptions import NeverThrown

FuncT = TypeVar("FuncT", bound=Callable[..., object])


def never(reason: str = "", **env: object) -> NoReturn:
    """Mark a code path as intentionally unreachable.

    The env payload is attached to the raised exception for diagnostics only.
    """
    raise NeverThrown(reason or "never() marker reached", env=env)


def decision_protocol(func: FuncT) -> FuncT:
    """Marker decorator for explicit decision-protocol control surfaces."""
    return func
