"""Launch planning: from parsed arguments to what runs, and from where.

The planner never exits the process. Every outcome is a value, either a
:class:`LaunchPlan` or an :class:`ExitRequest` that the top-level driver
turns into output and an exit status.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import Callable

from casper.args import ParsedArgs
from casper.fs import FileSystemAdapter
from casper.invariants import decision_protocol, never
from casper.runtime.path_policy import (
    SELFTEST_INCLUDE_NAME,
    SELFTEST_SUITES_NAME,
    TEST_RUNNER_NAME,
    TESTS_REL_DIR,
    USAGE_REL_PATH,
)
from casper.versioning import RUNTIME_NAME, Version

LOGGER = logging.getLogger(__name__)


class ExecutionMode(StrEnum):
    VERSION = "version"
    TEST = "test"
    SELFTEST = "selftest"
    HELP = "help"
    SCRIPT = "script"


@dataclass(frozen=True)
class LaunchPlan:
    script_path: str
    script_base_dir: str
    test_mode: bool = False
    self_test_mode: bool = False
    mode: ExecutionMode = ExecutionMode.SCRIPT


@dataclass(frozen=True)
class ExitRequest:
    code: int
    message: str = ""

    @property
    def is_error(self) -> bool:
        return self.code != 0


@dataclass(frozen=True)
class PlanningInputs:
    args: ParsedArgs
    root_path: str
    fs: FileSystemAdapter
    version: Version
    runtime: Version

    @property
    def tests_path(self) -> str:
        return self.fs.path_join(self.root_path, str(TESTS_REL_DIR))

    @property
    def test_runner(self) -> str:
        return self.fs.absolute(self.fs.path_join(self.tests_path, TEST_RUNNER_NAME))


@dataclass
class _Draft:
    script: str | None = None
    base_dir: str | None = None
    test_mode: bool = False
    self_test_mode: bool = False


_Handler = Callable[[PlanningInputs, _Draft], "ExitRequest | None"]


@decision_protocol
def select_mode(args: ParsedArgs) -> ExecutionMode:
    """Evaluate the launch decision table; the first matching row wins."""
    if args.options.get("version"):
        return ExecutionMode.VERSION
    first = args.get(0)
    if first == "test":
        return ExecutionMode.TEST
    if first == "selftest":
        return ExecutionMode.SELFTEST
    if not args.args or args.options.get("help"):
        return ExecutionMode.HELP
    return ExecutionMode.SCRIPT


def help_text(inputs: PlanningInputs) -> str:
    header = (
        f"casper version {inputs.version} at {inputs.root_path}, "
        f"using {RUNTIME_NAME} version {'.'.join(str(n) for n in inputs.runtime.numbers())}"
    )
    usage_path = inputs.fs.path_join(inputs.root_path, str(USAGE_REL_PATH))
    try:
        usage = inputs.fs.read(usage_path)
    except (OSError, UnicodeError):
        LOGGER.debug("usage text not readable at %s", usage_path)
        return header
    return "\n".join([header, usage.rstrip("\n")])


def _directory_of(fs: FileSystemAdapter, path: str | None) -> str | None:
    if not path:
        return None
    directory = fs.dirname(path)
    if not directory or directory == path:
        directory = "."
    return fs.absolute(directory)


def _plan_version(inputs: PlanningInputs, draft: _Draft) -> ExitRequest | None:
    return ExitRequest(0, str(inputs.version))


def _plan_test(inputs: PlanningInputs, draft: _Draft) -> ExitRequest | None:
    args = inputs.args
    draft.script = inputs.test_runner
    draft.test_mode = True
    args.drop("test")
    draft.base_dir = _directory_of(inputs.fs, args.raw(0))
    return None


def _plan_selftest(inputs: PlanningInputs, draft: _Draft) -> ExitRequest | None:
    args, fs = inputs.args, inputs.fs
    draft.script = inputs.test_runner
    draft.test_mode = draft.self_test_mode = True
    args.options["includes"] = fs.path_join(inputs.tests_path, SELFTEST_INCLUDE_NAME)
    if len(args.args) <= 1:
        args.append(fs.path_join(inputs.tests_path, SELFTEST_SUITES_NAME))
    args.drop("selftest")
    anchor = args.raw(1) or fs.dirname(draft.script)
    draft.base_dir = _directory_of(fs, anchor)
    return None


def _plan_help(inputs: PlanningInputs, draft: _Draft) -> ExitRequest | None:
    return ExitRequest(0, help_text(inputs))


def _plan_script(inputs: PlanningInputs, draft: _Draft) -> ExitRequest | None:
    draft.script = inputs.args.raw(0)
    return None


_MODE_HANDLERS: dict[ExecutionMode, _Handler] = {
    ExecutionMode.VERSION: _plan_version,
    ExecutionMode.TEST: _plan_test,
    ExecutionMode.SELFTEST: _plan_selftest,
    ExecutionMode.HELP: _plan_help,
    ExecutionMode.SCRIPT: _plan_script,
}


def plan_launch(
    args: ParsedArgs,
    root_path: str,
    fs: FileSystemAdapter,
    *,
    version: Version,
    runtime: Version,
) -> LaunchPlan | ExitRequest:
    """Turn parsed arguments into a launch plan.

    *args* is updated in place: consumed subcommand tokens and the target
    script itself are dropped so the script only sees its own arguments.
    """
    inputs = PlanningInputs(args=args, root_path=root_path, fs=fs, version=version, runtime=runtime)
    mode = select_mode(args)
    handler = _MODE_HANDLERS.get(mode)
    if handler is None:
        never("execution mode without a handler", mode=mode)
    draft = _Draft()
    outcome = handler(inputs, draft)
    if outcome is not None:
        LOGGER.info("launch mode %s terminates with status %d", mode, outcome.code)
        return outcome
    script = draft.script
    if script is None:
        never("launch handler did not choose a script", mode=mode)
    if not fs.is_file(script):
        return ExitRequest(1, f"Unable to open file: {script}")
    base_dir = draft.base_dir or _directory_of(fs, script)
    if base_dir is None:
        never("no base directory for script", script=script)
    args.drop(script)
    LOGGER.info("launch mode %s script=%s base=%s", mode, script, base_dir)
    return LaunchPlan(
        script_path=script,
        script_base_dir=base_dir,
        test_mode=draft.test_mode,
        self_test_mode=draft.self_test_mode,
        mode=mode,
    )
