"""Builtin helpers available to every casper script as ``require("utils")``."""

from __future__ import annotations

import json

_TRUTHY = {"1", "true", "yes", "on"}


def format_string(template: str, *args: object) -> str:
    """printf-style formatting that tolerates a missing argument list."""
    if not args:
        return template
    return template % args


def is_truthy(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def serialize(value: object, indent: int = 4) -> str:
    return json.dumps(value, indent=indent, sort_keys=True, default=str)
