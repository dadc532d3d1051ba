from __future__ import annotations

from pathlib import Path
from typing import Mapping, TypeAlias
import tomllib

from casper.runtime.env_policy import CASPER_CONFIG_ENV, env_text

DEFAULT_CONFIG_NAME = "casper.toml"

TomlTable: TypeAlias = dict[str, object]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def resolve_config_path(
    root: Path | None = None,
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> Path:
    if config_path is not None:
        return config_path
    override = env_text(CASPER_CONFIG_ENV, env=env)
    if override:
        return Path(override).expanduser()
    base = root if root is not None else Path.cwd()
    return base / DEFAULT_CONFIG_NAME


def load_config(
    root: Path | None = None,
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> TomlTable:
    return _load_toml(resolve_config_path(root, config_path, env=env))


def bootstrap_defaults(
    root: Path | None = None,
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> TomlTable:
    data = load_config(root=root, config_path=config_path, env=env)
    section = data.get("bootstrap", {})
    return section if isinstance(section, dict) else {}


def config_text(section: TomlTable | None, key: str) -> str:
    if not isinstance(section, dict):
        return ""
    value = section.get(key)
    if isinstance(value, str):
        return value.strip()
    return ""
