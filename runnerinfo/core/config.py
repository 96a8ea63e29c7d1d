"""Run configuration resolved once from the CI environment."""

import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

EXTENDED_INFO_INPUT = "INPUT_SHOW_EXTENDED_INFO"


class RunnerOS(str, Enum):
    """Operating system family of the CI runner."""

    LINUX = "Linux"
    MACOS = "macOS"
    WINDOWS = "Windows"
    OTHER = "Other"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "RunnerOS":
        """Map a runner OS name (e.g. ``RUNNER_OS``) onto the enumeration.

        Matching is case-insensitive; unknown or missing names map to OTHER.
        """
        if not name:
            return cls.OTHER
        lowered = name.strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return cls.OTHER


def _env_value(environ: Mapping[str, str], key: str) -> Optional[str]:
    """Return a stripped environment value, treating blanks as unset."""
    value = environ.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_flag(value: Optional[str]) -> bool:
    """Parse an action input flag; only "true" (any case) is true."""
    return bool(value) and value.strip().lower() == "true"


class RunContext(BaseModel):
    """Immutable per-run configuration.

    Built once at start-up and passed to every inspector, so no component
    reads ambient state mid-run.
    """

    model_config = ConfigDict(frozen=True)

    runner_os: RunnerOS = Field(default=RunnerOS.OTHER, description="Runner OS")
    runner_os_name: Optional[str] = Field(
        None, description="Raw runner OS name as reported by the platform"
    )
    workspace: Optional[Path] = Field(None, description="Checked-out workspace")
    show_extended_info: bool = Field(
        default=False, description="Whether Java/tree probes run"
    )
    repository: Optional[str] = Field(None, description="owner/name identifier")
    ref_name: Optional[str] = Field(None, description="Branch or tag name")
    sha: Optional[str] = Field(None, description="Commit SHA of the run")
    java_home: Optional[str] = Field(None, description="JAVA_HOME if set")
    output_file: Optional[Path] = Field(
        None, description="File receiving named step outputs"
    )

    @field_validator("workspace")
    @classmethod
    def resolve_workspace(cls, v: Optional[Path]) -> Optional[Path]:
        """Make the workspace absolute so git trusts the real directory."""
        if v is None:
            return v
        return Path(v).expanduser().resolve()

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "RunContext":
        """Build a context from environment variables.

        Args:
            environ: Mapping to read from (default: ``os.environ``)
            **overrides: Field values that take precedence over the
                environment; ``None`` values are ignored

        Returns:
            RunContext instance
        """
        if environ is None:
            environ = os.environ

        runner_os_name = _env_value(environ, "RUNNER_OS")
        workspace = _env_value(environ, "GITHUB_WORKSPACE")
        output_file = _env_value(environ, "GITHUB_OUTPUT")

        values = {
            "runner_os": RunnerOS.from_name(runner_os_name),
            "runner_os_name": runner_os_name,
            "workspace": Path(workspace) if workspace else None,
            "show_extended_info": parse_flag(environ.get(EXTENDED_INFO_INPUT)),
            "repository": _env_value(environ, "GITHUB_REPOSITORY"),
            "ref_name": _env_value(environ, "GITHUB_REF_NAME"),
            "sha": _env_value(environ, "GITHUB_SHA"),
            "java_home": _env_value(environ, "JAVA_HOME"),
            "output_file": Path(output_file) if output_file else None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        context = cls(**values)
        logger.debug(
            "Resolved run context: os=%s workspace=%s extended=%s",
            context.runner_os.value,
            context.workspace,
            context.show_extended_info,
        )
        return context

    @property
    def tree_root(self) -> str:
        """Directory listed by the tree probe."""
        return str(self.workspace) if self.workspace else "."
