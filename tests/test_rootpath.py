from __future__ import annotations

import pytest

from casper.exceptions import BootstrapError
from casper.rootpath import ROOT_PATH_ERROR, casper_path_arguments, discover_root_path
from casper.runtime.path_policy import bundled_home


def test_casper_path_arguments_in_order() -> None:
    argv = ["--casper-path=/a", "script.py", "--casper-path=/b", "--other=1"]
    assert casper_path_arguments(argv) == ["/a", "/b"]


def test_last_existing_argument_wins(tmp_path, local_fs) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    argv = [f"--casper-path={first}", f"--casper-path={second}", f"--casper-path={tmp_path / 'nope'}"]
    assert discover_root_path(argv, local_fs, env={}) == str(second)


def test_relative_argument_is_absolutized(tmp_path, local_fs, monkeypatch) -> None:
    (tmp_path / "home").mkdir()
    monkeypatch.chdir(tmp_path)
    assert discover_root_path(["--casper-path=home"], local_fs, env={}) == str(tmp_path / "home")


def test_argument_beats_environment_and_config(tmp_path, local_fs) -> None:
    arg_dir = tmp_path / "arg"
    env_dir = tmp_path / "env"
    arg_dir.mkdir()
    env_dir.mkdir()
    root = discover_root_path(
        [f"--casper-path={arg_dir}"],
        local_fs,
        env={"CASPER_PATH": str(env_dir)},
        config={"casper_path": str(env_dir)},
    )
    assert root == str(arg_dir)


def test_invalid_argument_is_fatal_even_with_environment(tmp_path, local_fs) -> None:
    with pytest.raises(BootstrapError, match=ROOT_PATH_ERROR):
        discover_root_path(
            [f"--casper-path={tmp_path / 'missing'}"],
            local_fs,
            env={"CASPER_PATH": str(tmp_path)},
        )


def test_environment_then_config(tmp_path, local_fs) -> None:
    env_dir = tmp_path / "env"
    cfg_dir = tmp_path / "cfg"
    env_dir.mkdir()
    cfg_dir.mkdir()
    config = {"casper_path": str(cfg_dir)}
    assert discover_root_path([], local_fs, env={"CASPER_PATH": str(env_dir)}, config=config) == str(env_dir)
    assert discover_root_path([], local_fs, env={}, config=config) == str(cfg_dir)


def test_invalid_environment_is_fatal(tmp_path, local_fs) -> None:
    with pytest.raises(BootstrapError):
        discover_root_path([], local_fs, env={"CASPER_PATH": str(tmp_path / "missing")})


def test_bundled_home_is_the_default(local_fs) -> None:
    assert discover_root_path(["script.py"], local_fs, env={}, config={}) == str(bundled_home())
