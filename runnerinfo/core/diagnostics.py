"""Sequential diagnostics pipeline: timestamp, platform, repository, extended."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..utils.workflow import Workflow
from .commands import CommandRunner, run_command
from .config import RunContext
from .extended import ExtendedInspector
from .platform_info import OS_RELEASE_PATH, PlatformInspector
from .report import DiagnosticReport
from .repository import RepositoryInspector
from .timestamp import TIMESTAMP_OUTPUT, generate_timestamp

logger = logging.getLogger(__name__)

TIMESTAMP_GROUP = "🕒 Generating Timestamp"
PLATFORM_GROUP = "🖥️ Operating System Details"
REPOSITORY_GROUP = "🌳 Git Repository Details"
EXTENDED_GROUP = "☕ Java Environment & 📁 Directory Structure"


def _echo_lines(workflow: Workflow, lines: list[str]) -> None:
    for line in lines:
        workflow.echo(line)


def run_diagnostics(
    context: RunContext,
    workflow: Workflow,
    runner: CommandRunner = run_command,
    now: Optional[datetime] = None,
    os_release_path: Union[str, Path] = OS_RELEASE_PATH,
) -> DiagnosticReport:
    """Collect and log all diagnostics for one run.

    Each stage runs once, in order, and writes its own log group. Probe
    failures degrade to placeholders; anything unexpected propagates to the
    caller.

    Args:
        context: Resolved run configuration
        workflow: Writer for log lines, groups and outputs
        runner: Command runner (injectable for tests)
        now: Fixed "current" time (default: wall clock)
        os_release_path: Location of the Linux os-release file

    Returns:
        DiagnosticReport with everything collected
    """
    # === STEP 1: Timestamp ===
    with workflow.group(TIMESTAMP_GROUP):
        timestamp = generate_timestamp(now)
        workflow.set_output(TIMESTAMP_OUTPUT, timestamp)
        workflow.echo(f"Generated Timestamp: {timestamp}")

    # === STEP 2: Platform ===
    with workflow.group(PLATFORM_GROUP):
        platform_info = PlatformInspector(
            context, timestamp, runner=runner, os_release_path=os_release_path
        ).collect()
        _echo_lines(workflow, platform_info.render())

    # === STEP 3: Repository ===
    with workflow.group(REPOSITORY_GROUP):
        repository_info = RepositoryInspector(context, runner=runner).collect()
        for warning in repository_info.warnings:
            workflow.warning(warning)
        _echo_lines(workflow, repository_info.render())

    # === STEP 4: Extended (optional) ===
    extended_info = None
    if context.show_extended_info:
        with workflow.group(EXTENDED_GROUP):
            extended_info = ExtendedInspector(context, runner=runner).collect()
            _echo_lines(workflow, extended_info.render())
    else:
        logger.debug("Extended info disabled; skipping Java and tree probes")

    return DiagnosticReport(
        timestamp=timestamp,
        runner_os=context.runner_os.value,
        platform=platform_info,
        repository=repository_info,
        extended=extended_info,
    )
