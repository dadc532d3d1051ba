from __future__ import annotations

import os

import pytest

from casper.fs import FileSystemAdapter, LocalFileSystem
from tests.fs_helpers import MemoryFileSystem


def test_adapter_binds_host_methods_and_fills_gaps() -> None:
    host = MemoryFileSystem({"/work/a.py": ""})
    fs = FileSystemAdapter(host)
    assert fs.host_provided == {
        "exists": True,
        "is_file": True,
        "is_directory": True,
        "absolute": True,
        "read": True,
        "dirname": False,
        "basename": False,
        "path_join": True,
        "is_windows": False,
    }
    assert fs.is_file("a.py")
    assert fs.path_join("/opt", "casper") == "/opt/casper"


def test_adapter_prefers_host_dirname_when_present() -> None:
    class Host(MemoryFileSystem):
        def dirname(self, path: str | None) -> str | None:
            return "host-dirname"

    fs = FileSystemAdapter(Host())
    assert fs.host_provided["dirname"] is True
    assert fs.dirname("/a/b") == "host-dirname"


def test_adapter_requires_core_capabilities() -> None:
    class Incomplete:
        working_directory = "/"

        def exists(self, path: str) -> bool:
            return False

    with pytest.raises(TypeError, match="is_file"):
        FileSystemAdapter(Incomplete())


def test_default_dirname_semantics() -> None:
    fs = FileSystemAdapter(MemoryFileSystem())
    assert fs.dirname("/a/b/c.py") == "/a/b"
    assert fs.dirname("dir/file.py") == "dir"
    assert fs.dirname("C:\\scripts\\run.py") == "C:/scripts"
    # No separator at all: the input comes back unchanged.
    assert fs.dirname("bare.py") == "bare.py"
    assert fs.dirname("") is None
    assert fs.dirname(None) is None


def test_default_basename_and_path_join() -> None:
    class NoJoin:
        separator = "/"
        working_directory = "/work"

        def exists(self, path: str) -> bool:
            return False

        is_file = is_directory = exists

        def absolute(self, path: str) -> str:
            return path

        def read(self, path: str) -> str:
            return ""

    fs = FileSystemAdapter(NoJoin())
    assert fs.host_provided["path_join"] is False
    assert fs.path_join("a", "b", "c.py") == "a/b/c.py"
    assert fs.basename("/a/b/c.py") == "c.py"
    assert fs.basename("c.py") == "c.py"


def test_default_is_windows() -> None:
    fs = FileSystemAdapter(MemoryFileSystem(cwd="/work"))
    assert fs.is_windows("C:\\Users") is True
    assert fs.is_windows("\\\\server\\share") is True
    assert fs.is_windows("/usr/lib") is False
    assert fs.is_windows() is False


def test_local_file_system_queries(tmp_path) -> None:
    target = tmp_path / "pkg" / "mod.py"
    target.parent.mkdir()
    target.write_text("VALUE = 1\n", encoding="utf-8")
    fs = FileSystemAdapter(LocalFileSystem())
    assert fs.is_file(str(target))
    assert fs.is_directory(str(target.parent))
    assert fs.exists(str(target))
    assert not fs.is_file(str(target.parent))
    assert fs.read(str(target)) == "VALUE = 1\n"
    assert fs.working_directory == os.getcwd()
    assert fs.absolute("x.py") == os.path.join(os.getcwd(), "x.py")
    assert fs.path_join(str(tmp_path), "pkg") == str(target.parent)
