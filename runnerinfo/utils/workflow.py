"""CI workflow commands: log groups, annotations, and step outputs.

Follows the GitHub Actions workflow-command protocol. Lines are written
with ``typer.echo`` so the CLI runner and the CI log both capture them.
"""

import logging
import secrets
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer

logger = logging.getLogger(__name__)


def escape_data(value: str) -> str:
    """Escape a workflow-command message (``%``, CR, LF)."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Workflow:
    """Writer for log lines, groups, annotations and step outputs.

    Args:
        output_file: File that receives named outputs (``GITHUB_OUTPUT``).
            When None, outputs are only logged at debug level.
    """

    def __init__(self, output_file: Optional[Path] = None):
        self.output_file = output_file

    def echo(self, message: str = "") -> None:
        typer.echo(message)

    def start_group(self, title: str) -> None:
        typer.echo(f"::group::{title}")

    def end_group(self) -> None:
        typer.echo("::endgroup::")

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """Wrap emitted lines in a collapsible log group."""
        self.start_group(title)
        try:
            yield
        finally:
            self.end_group()

    def warning(self, message: str) -> None:
        typer.echo(f"::warning::{escape_data(message)}")

    def error(self, message: str) -> None:
        typer.echo(f"::error::{escape_data(message)}")

    def set_output(self, name: str, value: str) -> None:
        """Expose a named step output to later workflow steps."""
        if self.output_file is None:
            logger.debug("No output file configured; %s=%s not exported", name, value)
            return

        if "\n" in value:
            delimiter = f"ghadelimiter_{secrets.token_hex(8)}"
            entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        else:
            entry = f"{name}={value}\n"

        with open(self.output_file, "a", encoding="utf-8") as f:
            f.write(entry)
        logger.debug("Exported output %s", name)

    def set_failed(self, message: str) -> None:
        """Report the run as failed; the caller sets the exit code."""
        self.error(message)
