"""Diagnostic report schema and serialization."""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field

from .extended import ExtendedInfo
from .platform_info import PlatformInfo
from .repository import RepositoryInfo

YAML_SUFFIXES = {".yml", ".yaml"}


class DiagnosticReport(BaseModel):
    """Everything a run collected, in one serializable snapshot."""

    report_version: str = Field(default="1.0", description="Report schema version")
    timestamp: str = Field(..., description="Run timestamp (YYYY-MM-DD HH:MM:SS UTC)")
    runner_os: str = Field(..., description="Runner OS family")
    platform: PlatformInfo
    repository: RepositoryInfo
    extended: Optional[ExtendedInfo] = Field(
        None, description="Java/tree probes (only when extended info is enabled)"
    )

    def to_yaml(self) -> str:
        """
        Serialize report to YAML string.

        Returns:
            YAML string representation
        """
        data = self.model_dump(exclude_none=True, mode="json")
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(exclude_none=True, indent=indent)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "DiagnosticReport":
        data = yaml.safe_load(yaml_str)
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "DiagnosticReport":
        return cls.model_validate_json(json_str)

    def write(self, path: Union[str, Path]) -> Path:
        """Write the report as YAML (``.yml``/``.yaml``) or JSON.

        Args:
            path: Destination file; parent directories are created

        Returns:
            Resolved path written
        """
        path = Path(path).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)

        if path.suffix.lower() in YAML_SUFFIXES:
            content = self.to_yaml()
        else:
            content = self.to_json() + "\n"

        path.write_text(content, encoding="utf-8")
        return path
