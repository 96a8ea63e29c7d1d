"""Typer-based CLI application for runnerinfo."""

import logging
import traceback
from pathlib import Path
from typing import Annotated, Optional

import typer

from runnerinfo import __version__
from runnerinfo.core.config import RunContext, RunnerOS
from runnerinfo.core.diagnostics import run_diagnostics
from runnerinfo.core.timestamp import TIMESTAMP_OUTPUT, generate_timestamp
from runnerinfo.utils.workflow import Workflow

app = typer.Typer(
    name="runnerinfo",
    help="Environment diagnostics for CI pipeline steps",
    add_completion=False,
)

logger = logging.getLogger(__name__)


def version_callback(value: bool):
    """Display version and exit."""
    if value:
        typer.echo(f"runnerinfo v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
):
    """Runnerinfo - Environment diagnostics for CI runners.

    Logs a run timestamp, OS and host details, git repository metadata and,
    optionally, the Java installation and a workspace directory tree.
    """
    pass


def configure_logging(log_level: str) -> None:
    """Configure logging from a CLI log level name.

    Raises:
        typer.Exit: If the level name is invalid
    """
    log_level_upper = log_level.upper()
    if log_level_upper not in ["DEBUG", "INFO", "WARN", "WARNING", "ERROR"]:
        typer.echo(
            f"❌ Invalid log level: {log_level}. "
            "Must be debug, info, warn, or error.",
            err=True,
        )
        raise typer.Exit(1)

    # Map WARN to WARNING for Python logging
    if log_level_upper == "WARN":
        log_level_upper = "WARNING"

    logging.basicConfig(
        level=getattr(logging, log_level_upper),
        format="%(message)s",
    )


LogLevelOption = Annotated[
    str,
    typer.Option(
        help="Logging level (debug, info, warn, error)",
        case_sensitive=False,
        hidden=True,  # Hide from --help
    ),
]


@app.command()
def run(
    extended: Annotated[
        Optional[bool],
        typer.Option(
            "--extended/--no-extended",
            help="Show Java version and directory tree "
            "(default: INPUT_SHOW_EXTENDED_INFO)",
        ),
    ] = None,
    runner_os: Annotated[
        Optional[str],
        typer.Option(help="Runner OS family: Linux, macOS, Windows (default: RUNNER_OS)"),
    ] = None,
    workspace: Annotated[
        Optional[Path],
        typer.Option(help="Workspace directory (default: GITHUB_WORKSPACE)"),
    ] = None,
    snapshot: Annotated[
        Optional[Path],
        typer.Option(help="Also write the collected report to this file (.json/.yaml)"),
    ] = None,
    log_level: LogLevelOption = "info",
):
    """Collect and log runner diagnostics.

    Probe failures degrade to N/A. Only an unexpected error fails the run.
    """
    configure_logging(log_level)

    overrides = {"show_extended_info": extended, "workspace": workspace}
    if runner_os is not None:
        overrides["runner_os"] = RunnerOS.from_name(runner_os)
        overrides["runner_os_name"] = runner_os

    context = RunContext.from_env(**overrides)
    workflow = Workflow(output_file=context.output_file)

    try:
        report = run_diagnostics(context, workflow)
        if snapshot is not None:
            written = report.write(snapshot)
            typer.echo(f"📝 Report written to {written}")
    except Exception as e:
        logger.exception("Diagnostics run failed")
        workflow.set_failed(f"Action failed: {e}\n{traceback.format_exc()}")
        raise typer.Exit(1) from e


@app.command()
def timestamp(
    log_level: LogLevelOption = "info",
):
    """Print the run timestamp and export it as a step output."""
    configure_logging(log_level)

    context = RunContext.from_env()
    workflow = Workflow(output_file=context.output_file)

    try:
        value = generate_timestamp()
        workflow.set_output(TIMESTAMP_OUTPUT, value)
    except Exception as e:
        logger.exception("Timestamp export failed")
        workflow.set_failed(f"Action failed: {e}\n{traceback.format_exc()}")
        raise typer.Exit(1) from e
    typer.echo(value)


if __name__ == "__main__":
    app()
