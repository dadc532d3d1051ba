"""Environment and path policies read during bootstrap."""

from __future__ import annotations

__all__: list[str] = []
