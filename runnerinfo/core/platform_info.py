"""Operating system and host inspection."""

import logging
import platform
from pathlib import Path
from typing import Callable, Optional, Union

import psutil
from pydantic import BaseModel, Field

from ..utils.formatters import SEPARATOR, format_block, format_field, format_gib
from .commands import CommandRunner, ProbeValue, run_command
from .config import RunContext, RunnerOS

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

WINDOWS_INFO_QUERY = (
    "Get-ComputerInfo | Select-Object OsName, OsVersion, OsArchitecture, "
    "CsManufacturer, CsModel | Format-List"
)


class DistroDetails(BaseModel):
    """OS-family specific distribution details."""

    label: str = Field(..., description="Report label, e.g. DISTRO INFO")
    value: ProbeValue
    block: bool = Field(
        default=False, description="Render value as an indented multi-line block"
    )
    omit_when_absent: bool = Field(
        default=False, description="Drop the line entirely when value is absent"
    )


class PlatformInfo(BaseModel):
    """Host facts gathered by the platform inspector."""

    action_time: str
    kernel: str
    architecture: str
    runner_os: str
    hostname: str
    total_memory_bytes: int
    free_memory_bytes: int
    distro: Optional[DistroDetails] = None

    def render(self) -> list[str]:
        """Render the report lines for the OS details group."""
        lines = [
            SEPARATOR,
            format_field("ACTION TIME", self.action_time),
            format_field("KERNEL INFO", self.kernel),
            format_field("ARCHITECTURE", self.architecture),
            format_field("RUNNER OS", self.runner_os),
            format_field("HOSTNAME", self.hostname),
            format_field("TOTAL MEMORY", format_gib(self.total_memory_bytes)),
            format_field("FREE MEMORY", format_gib(self.free_memory_bytes)),
        ]

        distro = self.distro
        if distro is not None:
            if distro.value.present and distro.block:
                lines.append(f"  {distro.label}:")
                lines.append(format_block(distro.value.display()))
            elif not distro.omit_when_absent:
                lines.append(format_field(distro.label, distro.value.display()))

        lines.append(SEPARATOR)
        return lines


def _unquote(value: str) -> str:
    return value.strip().replace('"', "")


def parse_os_release(text: str) -> ProbeValue:
    """Extract a distribution name from ``/etc/os-release`` content.

    ``PRETTY_NAME`` wins; otherwise ``NAME`` and ``VERSION`` are joined.

    Examples:
        >>> parse_os_release('PRETTY_NAME="Test OS 1.0"\\n').value
        'Test OS 1.0'
        >>> parse_os_release('NAME="Foo"\\nVERSION="2"\\n').value
        'Foo 2'
    """
    lines = text.splitlines()

    pretty = [
        _unquote(line.partition("=")[2])
        for line in lines
        if line.startswith("PRETTY_NAME=")
    ]
    distro = ", ".join(pretty)
    if not distro:
        distro = " ".join(
            _unquote(line.partition("=")[2])
            for line in lines
            if line.startswith("NAME=") or line.startswith("VERSION=")
        )
    return ProbeValue.of(distro)


class PlatformInspector:
    """Collect OS, kernel, memory and distribution facts for the runner.

    The distro handler is picked once from ``context.runner_os``.
    """

    def __init__(
        self,
        context: RunContext,
        timestamp: str,
        runner: CommandRunner = run_command,
        os_release_path: Union[str, Path] = OS_RELEASE_PATH,
    ):
        self.context = context
        self.timestamp = timestamp
        self.runner = runner
        self.os_release_path = Path(os_release_path)

        handlers: dict[RunnerOS, Callable[[], Optional[DistroDetails]]] = {
            RunnerOS.LINUX: self._linux_details,
            RunnerOS.MACOS: self._macos_details,
            RunnerOS.WINDOWS: self._windows_details,
            RunnerOS.OTHER: self._other_details,
        }
        self._distro_handler = handlers[context.runner_os]

    def collect(self) -> PlatformInfo:
        memory = psutil.virtual_memory()
        kernel = f"{platform.system()} {platform.release()} {platform.version()}"

        return PlatformInfo(
            action_time=self.timestamp,
            kernel=kernel,
            architecture=platform.machine(),
            runner_os=self.context.runner_os_name or "N/A",
            hostname=platform.node(),
            total_memory_bytes=memory.total,
            free_memory_bytes=memory.available,
            distro=self._distro_handler(),
        )

    def _linux_details(self) -> DistroDetails:
        if self.os_release_path.is_file():
            # Read errors on an existing file are unexpected; let them propagate
            value = parse_os_release(
                self.os_release_path.read_text(encoding="utf-8", errors="replace")
            )
            return DistroDetails(label="DISTRO INFO", value=value)

        logger.debug("%s not found, falling back to lsb_release", self.os_release_path)
        value = ProbeValue.from_command(self.runner("lsb_release", ["-a"]))
        return DistroDetails(label="DISTRO INFO", value=value, block=True)

    def _macos_details(self) -> DistroDetails:
        value = ProbeValue.from_command(self.runner("sw_vers", []))
        return DistroDetails(
            label="MACOS VERSION", value=value, block=True, omit_when_absent=True
        )

    def _windows_details(self) -> DistroDetails:
        value = ProbeValue.from_command(
            self.runner("powershell", ["-Command", WINDOWS_INFO_QUERY])
        )
        return DistroDetails(
            label="WINDOWS DETAILS", value=value, block=True, omit_when_absent=True
        )

    def _other_details(self) -> None:
        logger.debug("No distro handler for runner OS %r", self.context.runner_os_name)
        return None


def collect_platform_info(
    context: RunContext,
    timestamp: str,
    runner: CommandRunner = run_command,
) -> PlatformInfo:
    """Convenience function for collecting platform info."""
    return PlatformInspector(context, timestamp, runner=runner).collect()
