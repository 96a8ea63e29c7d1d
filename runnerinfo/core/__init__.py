"""Core diagnostics collection for runnerinfo."""

from .commands import CommandResult, ProbeStatus, ProbeValue, run_command
from .report import DiagnosticReport

__all__ = [
    "CommandResult",
    "DiagnosticReport",
    "ProbeStatus",
    "ProbeValue",
    "run_command",
]
