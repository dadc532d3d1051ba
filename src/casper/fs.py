"""File-system capability used by the bootstrap.

The bootstrap only ever talks to a :class:`FileSystemAdapter`. The adapter
wraps a host object (by default :class:`LocalFileSystem`) and, once at
construction time, binds each capability either to the host's own method or to
a default implementation when the host does not provide one.
"""

from __future__ import annotations

from functools import partial
import os
import re
from typing import Callable, Protocol

_REQUIRED_CAPABILITIES: tuple[str, ...] = (
    "exists",
    "is_file",
    "is_directory",
    "absolute",
    "read",
)
_OPTIONAL_CAPABILITIES: tuple[str, ...] = (
    "dirname",
    "basename",
    "path_join",
    "is_windows",
)
# Host method names accepted in place of a capability.
_CAPABILITY_ALIASES: dict[str, str] = {"path_join": "join_path"}

_WINDOWS_DRIVE_RE = re.compile(r"^[a-z]{1,2}:", re.IGNORECASE)


class FileSystem(Protocol):
    separator: str

    @property
    def working_directory(self) -> str: ...

    def exists(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...

    def is_directory(self, path: str) -> bool: ...

    def absolute(self, path: str) -> str: ...

    def dirname(self, path: str | None) -> str | None: ...

    def basename(self, path: str) -> str: ...

    def path_join(self, *segments: str) -> str: ...

    def read(self, path: str) -> str: ...

    def is_windows(self, path: str | None = None) -> bool: ...


class LocalFileSystem:
    """Host file system backed by ``os``."""

    separator = os.sep

    @property
    def working_directory(self) -> str:
        return os.getcwd()

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(path)

    def absolute(self, path: str) -> str:
        return os.path.normpath(os.path.join(self.working_directory, os.fspath(path)))

    def join_path(self, *segments: str) -> str:
        return os.path.join(*segments)

    def read(self, path: str) -> str:
        with open(path, encoding="utf-8") as handle:
            return handle.read()


def _default_dirname(fs: FileSystemAdapter, path: str | None) -> str | None:
    if not path:
        return None
    normalized = str(path).replace("\\", "/")
    return re.sub(r"/[^/]*$", "", normalized, count=1)


def _default_basename(fs: FileSystemAdapter, path: str) -> str:
    return re.sub(r".*/", "", str(path), count=1)


def _default_is_windows(fs: FileSystemAdapter, path: str | None = None) -> bool:
    test_path = str(path or fs.working_directory)
    return bool(_WINDOWS_DRIVE_RE.match(test_path)) or test_path.startswith("\\\\")


def _default_path_join(fs: FileSystemAdapter, *segments: str) -> str:
    return fs.separator.join(str(segment) for segment in segments)


_DEFAULTS: dict[str, Callable[..., object]] = {
    "dirname": _default_dirname,
    "basename": _default_basename,
    "is_windows": _default_is_windows,
    "path_join": _default_path_join,
}


def _host_method(host: object, name: str) -> Callable[..., object] | None:
    impl = getattr(host, name, None)
    return impl if callable(impl) else None


class FileSystemAdapter:
    exists: Callable[[str], bool]
    is_file: Callable[[str], bool]
    is_directory: Callable[[str], bool]
    absolute: Callable[[str], str]
    read: Callable[[str], str]
    dirname: Callable[[str | None], str | None]
    basename: Callable[[str], str]
    path_join: Callable[..., str]
    is_windows: Callable[..., bool]

    def __init__(self, host: object | None = None):
        self.host = host if host is not None else LocalFileSystem()
        self.separator: str = str(getattr(self.host, "separator", "/"))
        self.host_provided: dict[str, bool] = {}
        if not hasattr(self.host, "working_directory"):
            raise TypeError("file system host must expose working_directory")
        for name in _REQUIRED_CAPABILITIES:
            impl = _host_method(self.host, name)
            if impl is None:
                raise TypeError(f"file system host lacks required capability {name!r}")
            self._bind(name, impl, provided=True)
        for name in _OPTIONAL_CAPABILITIES:
            impl = _host_method(self.host, name)
            alias = _CAPABILITY_ALIASES.get(name)
            if impl is None and alias is not None:
                impl = _host_method(self.host, alias)
            if impl is None:
                self._bind(name, partial(_DEFAULTS[name], self), provided=False)
            else:
                self._bind(name, impl, provided=True)

    def _bind(self, name: str, impl: Callable[..., object], *, provided: bool) -> None:
        setattr(self, name, impl)
        self.host_provided[name] = provided

    @property
    def working_directory(self) -> str:
        return str(getattr(self.host, "working_directory"))


def default_file_system() -> FileSystemAdapter:
    return FileSystemAdapter(LocalFileSystem())
