"""External command execution and probe outcome types for runnerinfo."""

import logging
import subprocess
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Conventional shell exit code for "command not found"
NOT_LAUNCHED_EXIT_CODE = 127


class CommandResult(BaseModel):
    """Captured result of one external command invocation."""

    command: list[str] = Field(default_factory=list, description="argv executed")
    stdout: str = Field(default="", description="Trimmed standard output")
    stderr: str = Field(default="", description="Trimmed standard error")
    exit_code: int = Field(..., description="Process exit code")
    launched: bool = Field(
        default=True, description="Whether the executable could be started"
    )

    @property
    def ok(self) -> bool:
        """True when the process started and exited with code zero."""
        return self.launched and self.exit_code == 0


# Signature shared by run_command and the fakes used in tests
CommandRunner = Callable[..., CommandResult]


def run_command(
    command: str,
    args: Sequence[str] = (),
    cwd: Optional[Union[str, Path]] = None,
) -> CommandResult:
    """Run a command and capture its output without ever raising on failure.

    Non-zero exit codes are returned as data. Some tools (``java -version``)
    write informational text to stderr even on success, so interpretation is
    left to the caller.

    Args:
        command: Executable name or path
        args: Ordered argument list
        cwd: Optional working directory for the child process

    Returns:
        CommandResult with trimmed stdout/stderr and the exit code. When the
        executable cannot be started, ``launched`` is False and ``stderr``
        holds the launch error.
    """
    argv = [command, *args]
    logger.debug("Running command: %s", " ".join(argv))

    try:
        completed = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            errors="replace",
            stdin=subprocess.DEVNULL,
            cwd=str(cwd) if cwd is not None else None,
        )
    except OSError as e:
        # FileNotFoundError / PermissionError: tool absent or not executable
        logger.debug("Command %s could not be started: %s", command, e)
        return CommandResult(
            command=argv,
            stderr=str(e),
            exit_code=NOT_LAUNCHED_EXIT_CODE,
            launched=False,
        )

    result = CommandResult(
        command=argv,
        stdout=(completed.stdout or "").strip(),
        stderr=(completed.stderr or "").strip(),
        exit_code=completed.returncode,
    )
    if result.exit_code != 0:
        logger.debug("Command %s exited with code %d", command, result.exit_code)
    return result


class ProbeStatus(str, Enum):
    """Outcome of a single probe."""

    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"
    SKIPPED = "skipped"


class ProbeValue(BaseModel):
    """Explicit success-or-absent value produced by a probe.

    Keeps "tool ran and printed nothing" distinguishable from "tool failed".
    """

    status: ProbeStatus
    value: Optional[str] = None

    @property
    def present(self) -> bool:
        return self.status == ProbeStatus.OK

    def display(self, placeholder: str = "N/A") -> str:
        """Render the value, or the placeholder when absent."""
        if self.present and self.value:
            return self.value
        return placeholder

    @classmethod
    def of(cls, value: Optional[str]) -> "ProbeValue":
        """Wrap a plain value; None or blank strings become EMPTY."""
        if value is None or not value.strip():
            return cls(status=ProbeStatus.EMPTY)
        return cls(status=ProbeStatus.OK, value=value)

    @classmethod
    def failed(cls, detail: Optional[str] = None) -> "ProbeValue":
        return cls(status=ProbeStatus.FAILED, value=detail or None)

    @classmethod
    def skipped(cls) -> "ProbeValue":
        return cls(status=ProbeStatus.SKIPPED)

    @classmethod
    def from_command(cls, result: CommandResult) -> "ProbeValue":
        """Interpret a command's stdout as the probe value."""
        if not result.ok:
            return cls.failed(result.stderr)
        return cls.of(result.stdout)
