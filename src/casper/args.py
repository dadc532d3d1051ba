"""Raw argument vector parsing.

Arguments starting with ``--`` are named options (``--name=value`` or the
flag form ``--name``); everything else is positional. Values are cast to
``int``, ``float`` or ``bool`` when they look like one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Sequence, TypeAlias

ArgValue: TypeAlias = str | int | float | bool

_OPTION_RE = re.compile(r"^--(.*?)=(.*)", re.DOTALL)
_FLAG_RE = re.compile(r"^--(.*)", re.DOTALL)
_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d*\.\d+$")


def cast_argument(arg: str) -> ArgValue:
    if _INT_RE.match(arg):
        return int(arg)
    if _FLOAT_RE.match(arg):
        return float(arg)
    if arg == "true":
        return True
    if arg == "false":
        return False
    return arg


def _raw_text(value: ArgValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class ParsedArgs:
    args: list[ArgValue] = field(default_factory=list)
    options: dict[str, ArgValue] = field(default_factory=dict)
    raw_args: list[str] = field(default_factory=list)
    raw_options: dict[str, str | bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(self.raw_args) != len(self.args):
            self.raw_args = [_raw_text(value) for value in self.args]

    def get(self, what: int | str, default: ArgValue | None = None) -> ArgValue | None:
        if isinstance(what, int):
            if 0 <= what < len(self.args):
                return self.args[what]
            return default
        return self.options.get(what, default)

    def has(self, what: int | str) -> bool:
        if isinstance(what, int):
            return 0 <= what < len(self.args)
        return what in self.options

    def raw(self, index: int) -> str | None:
        if 0 <= index < len(self.raw_args):
            return self.raw_args[index]
        return None

    def append(self, value: str) -> None:
        self.args.append(cast_argument(value))
        self.raw_args.append(value)

    def drop(self, what: int | str) -> None:
        """Remove a positional (by index or raw text) or an option (by name)."""
        if isinstance(what, int):
            if 0 <= what < len(self.args):
                del self.args[what]
                del self.raw_args[what]
            return
        if what in self.raw_args:
            index = self.raw_args.index(what)
            del self.args[index]
            del self.raw_args[index]
        elif what in self.options:
            del self.options[what]
            self.raw_options.pop(what, None)


def parse(argv: Sequence[str]) -> ParsedArgs:
    extract = ParsedArgs()
    for arg in argv:
        text = str(arg)
        if text.startswith("--"):
            option_match = _OPTION_RE.match(text)
            if option_match:
                name, value = option_match.group(1), option_match.group(2)
                extract.options[name] = cast_argument(value)
                extract.raw_options[name] = value
                continue
            flag_match = _FLAG_RE.match(text)
            if flag_match:
                extract.options[flag_match.group(1)] = True
                extract.raw_options[flag_match.group(1)] = True
            continue
        extract.args.append(cast_argument(text))
        extract.raw_args.append(text)
    return extract
