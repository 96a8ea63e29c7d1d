"""Git repository inspection."""

from typing import Optional

from pydantic import BaseModel, Field, computed_field

from ..utils.formatters import SEPARATOR, format_block, format_field
from .commands import CommandRunner, ProbeValue, run_command
from .config import RunContext

SHORT_SHA_LENGTH = 7
FIELD_WIDTH = 18

COMMIT_DATE_FORMAT = "format:%Y-%m-%d %H:%M:%S %Z"


class RepositoryInfo(BaseModel):
    """Repository facts gathered by the repository inspector."""

    safe_directory: Optional[str] = Field(
        None, description="Workspace registered as git safe.directory"
    )
    warnings: list[str] = Field(default_factory=list)

    repository: ProbeValue
    branch: ProbeValue
    commit_sha: ProbeValue
    author: ProbeValue
    commit_date: ProbeValue
    remote_url: ProbeValue
    tags: ProbeValue
    message: ProbeValue

    @computed_field
    @property
    def short_sha(self) -> ProbeValue:
        if not self.commit_sha.present:
            return self.commit_sha
        return ProbeValue.of(self.commit_sha.value[:SHORT_SHA_LENGTH])

    def render(self) -> list[str]:
        """Render the report lines for the git details group."""
        lines = []
        if self.safe_directory:
            lines.append(f"✅ Added {self.safe_directory} to git safe.directory")

        lines.extend(
            [
                SEPARATOR,
                format_field("REPOSITORY", self.repository.display(), FIELD_WIDTH),
                format_field("BRANCH", self.branch.display(), FIELD_WIDTH),
                format_field("COMMIT SHA", self.commit_sha.display(), FIELD_WIDTH),
                format_field("SHORT SHA", self.short_sha.display(), FIELD_WIDTH),
                format_field("AUTHOR", self.author.display(), FIELD_WIDTH),
                format_field("COMMIT DATE", self.commit_date.display(), FIELD_WIDTH),
                format_field("REMOTE URL", self.remote_url.display(), FIELD_WIDTH),
                format_field("TAGS AT HEAD", self.tags.display(), FIELD_WIDTH),
                "",
                "  COMMIT MESSAGE:",
                format_block(self.message.display(), "    "),
                SEPARATOR,
            ]
        )
        return lines


def join_tags(text: str) -> str:
    """Join newline-separated tag names with commas.

    Examples:
        >>> join_tags("v1.0\\nlatest\\n")
        'v1.0,latest'
    """
    return ",".join(line.strip() for line in text.splitlines() if line.strip())


class RepositoryInspector:
    """Collect git metadata for the checked-out workspace.

    CI-provided values (ref name, SHA) are preferred over git queries. Every
    git query is issued independently, so one failure never blocks another.
    """

    def __init__(self, context: RunContext, runner: CommandRunner = run_command):
        self.context = context
        self.runner = runner

    def _git(self, *args: str) -> ProbeValue:
        return ProbeValue.from_command(
            self.runner("git", list(args), cwd=self.context.workspace)
        )

    def configure_safe_directory(self, warnings: list[str]) -> Optional[str]:
        """Register the workspace as a git safe.directory.

        Returns:
            The registered workspace path, or None when skipped or failed
        """
        workspace = self.context.workspace
        if workspace is None:
            warnings.append(
                "GITHUB_WORKSPACE not set. Skipping git safe.directory configuration."
            )
            return None

        result = self.runner(
            "git", ["config", "--global", "--add", "safe.directory", str(workspace)]
        )
        if not result.ok:
            detail = result.stderr or f"exit code {result.exit_code}"
            warnings.append(f"Could not add {workspace} to git safe.directory: {detail}")
            return None
        return str(workspace)

    def collect(self) -> RepositoryInfo:
        warnings: list[str] = []
        safe_directory = self.configure_safe_directory(warnings)

        if self.context.ref_name:
            branch = ProbeValue.of(self.context.ref_name)
        else:
            branch = self._git("rev-parse", "--abbrev-ref", "HEAD")

        if self.context.sha:
            commit_sha = ProbeValue.of(self.context.sha)
        else:
            commit_sha = self._git("rev-parse", "HEAD")

        if self.context.repository:
            repository = ProbeValue.of(self.context.repository)
        else:
            repository = ProbeValue.skipped()

        tags = self._git("tag", "--points-at", "HEAD")
        if tags.present:
            tags = ProbeValue.of(join_tags(tags.value))

        return RepositoryInfo(
            safe_directory=safe_directory,
            warnings=warnings,
            repository=repository,
            branch=branch,
            commit_sha=commit_sha,
            author=self._git("log", "-1", "--pretty=format:%an <%ae>"),
            commit_date=self._git(
                "log", "-1", "--pretty=format:%ad", f"--date={COMMIT_DATE_FORMAT}"
            ),
            remote_url=self._git("remote", "get-url", "origin"),
            tags=tags,
            message=self._git("log", "-1", "--pretty=%B"),
        )


def collect_repository_info(
    context: RunContext, runner: CommandRunner = run_command
) -> RepositoryInfo:
    """Convenience function for collecting repository info."""
    return RepositoryInspector(context, runner=runner).collect()
