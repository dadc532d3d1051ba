from __future__ import annotations

import json
import shutil
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest

from casper.fs import FileSystemAdapter, LocalFileSystem
from casper.logging_config import reset_logging
from casper.runtime.path_policy import bundled_home
from casper.versioning import Version
from tests.env_helpers import cleared_bootstrap_env
from tests.env_helpers import restore_env as _restore_env
from tests.env_helpers import set_env as _set_env
from tests.fs_helpers import CASPER_ROOT, MemoryFileSystem



@pytest.fixture(autouse=True)
def _isolated_bootstrap_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    previous = _set_env(cleared_bootstrap_env())
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    try:
        yield
    finally:
        reset_logging()
        _restore_env(previous)


@pytest.fixture
def runtime() -> Version:
    return Version(3, 12, 1)


@pytest.fixture
def local_fs() -> FileSystemAdapter:
    return FileSystemAdapter(LocalFileSystem())


@pytest.fixture
def memory_host() -> MemoryFileSystem:
    return MemoryFileSystem(
        {
            f"{CASPER_ROOT}/package.json": json.dumps({"version": "1.1.0"}),
            f"{CASPER_ROOT}/bin/usage.txt": "Usage: casper [options] script.py\n",
            f"{CASPER_ROOT}/tests/run.py": "",
            f"{CASPER_ROOT}/tests/selftest.py": "",
            f"{CASPER_ROOT}/tests/suites/sample_suite.py": "",
            "/work/suite.py": "",
            "/work/hello.py": "",
            "/work/scripts/deploy.py": "",
        }
    )


@pytest.fixture
def memory_fs(memory_host: MemoryFileSystem) -> FileSystemAdapter:
    return FileSystemAdapter(memory_host)


@pytest.fixture
def casper_home(tmp_path: Path) -> Path:
    """A writable copy of the bundled root installation."""
    home = tmp_path / "casper-home"
    shutil.copytree(bundled_home(), home)
    return home


@pytest.fixture
def write_module():
    def _write(path: Path, source: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write
