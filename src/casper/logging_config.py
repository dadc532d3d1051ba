"""Logging setup for casper.

``setup_logging`` attaches a single handler to the ``casper`` logger: stderr
by default, or the file named by ``CASPER_LOG_FILE``. The level comes from an
explicit argument, then ``CASPER_LOG_LEVEL``, then ``log_level`` in the
``[bootstrap]`` section of ``casper.toml``, then ``WARNING``. Repeated calls
return the handler installed by the first one.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Mapping, Optional

from casper.config import bootstrap_defaults, config_text
from casper.runtime.env_policy import CASPER_LOG_FILE_ENV, CASPER_LOG_LEVEL_ENV, env_text

__all__ = [
    "LOGGER_NAME",
    "current_log_path",
    "reset_logging",
    "setup_logging",
]

LOGGER_NAME = "casper"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None
_log_path: Optional[Path] = None


def _resolve_level(level: str | None, env: Mapping[str, str] | None) -> int:
    name = (
        level
        or env_text(CASPER_LOG_LEVEL_ENV, env=env)
        or config_text(bootstrap_defaults(env=env), "log_level")
        or "WARNING"
    ).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def current_log_path() -> Optional[Path]:
    """Return the log file in use, or ``None`` when logging to stderr."""
    return _log_path


def setup_logging(
    *,
    level: str | None = None,
    env: Mapping[str, str] | None = None,
) -> logging.Handler:
    global _handler, _log_path

    if _handler is not None:
        return _handler

    file_override = env_text(CASPER_LOG_FILE_ENV, env=env)
    handler: logging.Handler
    if file_override:
        path = Path(file_override).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
        _log_path = path
    else:
        handler = logging.StreamHandler(sys.stderr)
        _log_path = None

    resolved = _resolve_level(level, env)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(handler)
    logger.setLevel(resolved)
    _handler = handler
    return handler


def reset_logging() -> None:
    """Detach the handler installed by ``setup_logging``."""
    global _handler, _log_path

    if _handler is None:
        return
    logging.getLogger(LOGGER_NAME).removeHandler(_handler)
    _handler.close()
    _handler = None
    _log_path = None
