from __future__ import annotations

import sys
from typing import NoReturn, Sequence

import typer

from casper.bootstrap import BootstrapContext, bootstrap, run_script
from casper.logging_config import setup_logging
from casper.planner import ExitRequest

app = typer.Typer(add_completion=False)

# Arguments belong to the launched script, so typer must not claim any of
# them, not even --help.
_PASSTHROUGH_CONTEXT = {
    "allow_extra_args": True,
    "ignore_unknown_options": True,
    "help_option_names": [],
}


def _emit_exit(request: ExitRequest) -> NoReturn:
    if request.message:
        if request.is_error:
            typer.secho(request.message, err=True, fg=typer.colors.RED)
        else:
            typer.echo(request.message)
    raise typer.Exit(code=request.code)


def launch(argv: Sequence[str]) -> BootstrapContext:
    outcome = bootstrap(list(argv))
    if isinstance(outcome, ExitRequest):
        _emit_exit(outcome)
    failure = run_script(outcome)
    if failure is not None:
        _emit_exit(failure)
    return outcome


@app.command(context_settings=_PASSTHROUGH_CONTEXT)
def run(ctx: typer.Context) -> None:
    """Run a casper script, the test runner, or the self-test suite."""
    setup_logging()
    launch(ctx.args)


def main() -> None:  # pragma: no cover
    try:
        app()
    except Exception as exc:  # noqa: BLE001
        typer.secho(f"Unhandled error: {exc}", err=True, fg=typer.colors.RED)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
