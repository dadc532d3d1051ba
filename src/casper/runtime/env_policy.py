from __future__ import annotations

import os
from typing import Mapping

CASPER_PATH_ENV = "CASPER_PATH"
CASPER_CONFIG_ENV = "CASPER_CONFIG"
CASPER_LOG_LEVEL_ENV = "CASPER_LOG_LEVEL"
CASPER_LOG_FILE_ENV = "CASPER_LOG_FILE"

BOOTSTRAP_ENV_KEYS: tuple[str, ...] = (
    CASPER_PATH_ENV,
    CASPER_CONFIG_ENV,
    CASPER_LOG_LEVEL_ENV,
    CASPER_LOG_FILE_ENV,
)


def env_text(
    name: str,
    *,
    default: str = "",
    env: Mapping[str, str] | None = None,
) -> str:
    source = os.environ if env is None else env
    return str(source.get(name, default)).strip()
