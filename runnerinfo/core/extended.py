"""Optional Java and directory tree probes."""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from ..utils.formatters import WIDE_SEPARATOR, format_block
from .commands import CommandResult, CommandRunner, ProbeValue, run_command
from .config import RunContext, RunnerOS

logger = logging.getLogger(__name__)

TREE_MAX_DEPTH = 3
TREE_IGNORE = (".git", ".m2", "target", "node_modules")

JAVA_HOME_MISSING = "N/A (Not explicitly set or found)"


class JavaInfo(BaseModel):
    """Result of the Java probe."""

    version: ProbeValue
    java_home: ProbeValue


class TreeInfo(BaseModel):
    """Result of the directory tree probe."""

    root: str
    listing: ProbeValue
    fallback_used: bool = Field(
        default=False, description="Whether the Windows native tree was tried"
    )


class ExtendedInfo(BaseModel):
    java: JavaInfo
    tree: TreeInfo

    def render(self) -> list[str]:
        """Render the report lines for the Java/directory group."""
        lines = [WIDE_SEPARATOR, "  JAVA DETAILS:"]
        if self.java.version.present:
            lines.append("    ▶ Version:")
            lines.append(format_block(self.java.version.value, "      --> "))
            lines.append(
                f"    ▶ JAVA_HOME:    {self.java.java_home.display(JAVA_HOME_MISSING)}"
            )
        else:
            lines.append("    ▶ Java not found in PATH or -version command failed.")

        lines.append("")
        lines.append(
            f"  DIRECTORY TREE (current workspace, max depth {TREE_MAX_DEPTH}):"
        )
        lines.extend(self._tree_lines())
        lines.append(WIDE_SEPARATOR)
        return lines

    def _tree_lines(self) -> list[str]:
        tree = self.tree
        if not tree.fallback_used:
            if tree.listing.present:
                return [format_block(tree.listing.value, "    ")]
            return [
                "    ▶ 'tree' command not found or failed. "
                "Please install it on the runner for a detailed view."
            ]

        lines = [
            "    ▶ 'tree' command failed or not found. "
            "Using 'cmd /c tree /F /A' for Windows (basic):"
        ]
        if tree.listing.present:
            lines.append(format_block(tree.listing.value, "      "))
        else:
            lines.append("    ▶ Windows 'tree' command also failed or directory is empty.")
        return lines


def interpret_java_version(result: CommandResult) -> ProbeValue:
    """Interpret ``java -version`` output.

    The JVM prints its version banner on stderr, so stderr is preferred.
    A run that exits zero yet prints nothing is treated as not found.
    """
    if not result.ok:
        return ProbeValue.failed(result.stderr)
    return ProbeValue.of(result.stderr or result.stdout)


class ExtendedInspector:
    """Java and directory tree probes, run only when extended info is on."""

    def __init__(self, context: RunContext, runner: CommandRunner = run_command):
        self.context = context
        self.runner = runner

    def probe_java(self) -> JavaInfo:
        version = interpret_java_version(self.runner("java", ["-version"]))
        return JavaInfo(version=version, java_home=ProbeValue.of(self.context.java_home))

    def probe_tree(self) -> TreeInfo:
        root = self.context.tree_root
        listing = ProbeValue.from_command(
            self.runner(
                "tree",
                ["-L", str(TREE_MAX_DEPTH), "-a", "-I", "|".join(TREE_IGNORE), root],
            )
        )
        if listing.present:
            return TreeInfo(root=root, listing=listing)

        if self.context.runner_os != RunnerOS.WINDOWS:
            logger.debug("tree unavailable on %s runner", self.context.runner_os.value)
            return TreeInfo(root=root, listing=listing)

        fallback = ProbeValue.from_command(
            self.runner("cmd", ["/c", "tree", "/F", "/A", root])
        )
        return TreeInfo(root=root, listing=fallback, fallback_used=True)

    def collect(self) -> ExtendedInfo:
        return ExtendedInfo(java=self.probe_java(), tree=self.probe_tree())


def collect_extended_info(
    context: RunContext, runner: CommandRunner = run_command
) -> Optional[ExtendedInfo]:
    """Run the extended probes if enabled in the context, else return None."""
    if not context.show_extended_info:
        return None
    return ExtendedInspector(context, runner=runner).collect()
