"""Discovery of the casper root installation path."""

from __future__ import annotations

import logging
import re
from typing import Mapping, Sequence

from casper.config import TomlTable, config_text
from casper.exceptions import BootstrapError
from casper.fs import FileSystemAdapter
from casper.runtime.env_policy import CASPER_PATH_ENV, env_text
from casper.runtime.path_policy import bundled_home

LOGGER = logging.getLogger(__name__)

_CASPER_PATH_ARG_RE = re.compile(r"^--casper-path=(.*)")

ROOT_PATH_ERROR = "Couldn't find nor compute casper path, exiting."


def casper_path_arguments(raw_argv: Sequence[str]) -> list[str]:
    """Values of every ``--casper-path=`` argument, in order."""
    values: list[str] = []
    for arg in raw_argv:
        match = _CASPER_PATH_ARG_RE.match(str(arg))
        if match:
            values.append(match.group(1))
    return values


def discover_root_path(
    raw_argv: Sequence[str],
    fs: FileSystemAdapter,
    *,
    env: Mapping[str, str] | None = None,
    config: TomlTable | None = None,
) -> str:
    """Return the absolute root path of the casper installation.

    Sources, first configured one wins: ``--casper-path=`` arguments (the last
    one naming a directory), ``CASPER_PATH``, ``casper_path`` in the
    ``[bootstrap]`` config section, then the bundled installation. A configured
    source that does not name a directory is fatal.
    """
    arguments = casper_path_arguments(raw_argv)
    if arguments:
        candidates = [fs.absolute(value) for value in arguments]
        source = "argument"
    elif env_text(CASPER_PATH_ENV, env=env):
        candidates = [fs.absolute(env_text(CASPER_PATH_ENV, env=env))]
        source = "environment"
    elif config_text(config, "casper_path"):
        candidates = [fs.absolute(config_text(config, "casper_path"))]
        source = "config"
    else:
        candidates = [fs.absolute(str(bundled_home()))]
        source = "bundled"
    directories = [path for path in candidates if fs.is_directory(path)]
    if not directories:
        raise BootstrapError(ROOT_PATH_ERROR)
    LOGGER.debug("root path %s (source=%s)", directories[-1], source)
    return directories[-1]
