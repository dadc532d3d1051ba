"""Process bootstrap.

``bootstrap`` performs the startup chain in a fixed order: runtime check,
root path discovery, package version, resolver installation, argument
parsing and, in CLI mode, launch planning. Each step only runs once the
previous one has succeeded. The resulting :class:`BootstrapContext` carries
all state that later stages need, so nothing lives in module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import runpy
import sys
from typing import Mapping, Sequence

import typer

from casper import args as cli_args
from casper.args import ParsedArgs
from casper.config import bootstrap_defaults
from casper.exceptions import BootstrapError
from casper.fs import FileSystemAdapter, default_file_system
from casper.loader import FileLoader
from casper.planner import ExitRequest, LaunchPlan, plan_launch
from casper.resolver import ModuleResolver, PrimitiveRequire
from casper.rootpath import discover_root_path
from casper.versioning import Version, check_runtime, read_package_version, runtime_version

LOGGER = logging.getLogger(__name__)

CASPER_NAME_HINT = "Hint: you may want to use the `casper test` command."


@dataclass
class BootstrapContext:
    fs: FileSystemAdapter
    root_path: str = ""
    version: Version | None = None
    runtime: Version | None = None
    script_base_dir: str | None = None
    primitive: FileLoader | None = None
    require: PrimitiveRequire | None = None
    args: ParsedArgs = field(default_factory=ParsedArgs)
    plan: LaunchPlan | None = None
    loaded: bool = False

    def patch_require(self, require: PrimitiveRequire) -> PrimitiveRequire:
        """Return *require* wrapped with casper module resolution."""
        return ModuleResolver(self).install(require)

    def script_globals(self) -> dict[str, object]:
        return {
            "require": self.require,
            "patch_require": self.patch_require,
            "casper": self,
            "casper_args": self.args,
        }


def _fatal(message: str) -> ExitRequest:
    LOGGER.debug("fatal: %s", message)
    return ExitRequest(1, message)


def bootstrap(
    argv: Sequence[str],
    *,
    fs: FileSystemAdapter | None = None,
    env: Mapping[str, str] | None = None,
    cli: bool = True,
    runtime: Version | None = None,
    context: BootstrapContext | None = None,
) -> BootstrapContext | ExitRequest:
    ctx = context if context is not None else BootstrapContext(fs=fs or default_file_system())
    if ctx.loaded:
        return ctx

    ctx.runtime = runtime if runtime is not None else runtime_version()
    runtime_problem = check_runtime(ctx.runtime)
    if runtime_problem is not None:
        return _fatal(runtime_problem)

    try:
        ctx.root_path = discover_root_path(
            argv,
            ctx.fs,
            env=env,
            config=bootstrap_defaults(env=env),
        )
        ctx.version = read_package_version(ctx.root_path, ctx.fs)
    except BootstrapError as exc:
        return _fatal(str(exc))

    ctx.primitive = FileLoader()
    ctx.require = ctx.patch_require(ctx.primitive)
    ctx.primitive.preamble["patch_require"] = ctx.patch_require
    ctx.primitive.preamble["require"] = ctx.primitive

    ctx.args = cli_args.parse(argv)
    if cli:
        outcome = plan_launch(
            ctx.args,
            ctx.root_path,
            ctx.fs,
            version=ctx.version,
            runtime=ctx.runtime,
        )
        if isinstance(outcome, ExitRequest):
            return outcome
        ctx.plan = outcome
        ctx.script_base_dir = outcome.script_base_dir

    ctx.loaded = True
    return ctx


def run_script(ctx: BootstrapContext) -> ExitRequest | None:
    """Execute the planned script; return an exit request on load failure."""
    if ctx.plan is None:
        return None
    script = ctx.plan.script_path
    saved_argv = sys.argv
    sys.argv = [script, *ctx.args.raw_args]
    try:
        runpy.run_path(script, init_globals=ctx.script_globals(), run_name="__main__")
    except SyntaxError as exc:
        LOGGER.debug("syntax error in %s: %s", script, exc)
        return _fatal(f"Unable to load script {script}; check file syntax")
    except NameError as exc:
        if "casper" in str(exc):
            typer.echo(CASPER_NAME_HINT, err=True)
        raise
    finally:
        sys.argv = saved_argv
    return None
