"""Runnerinfo - Environment diagnostics for CI pipeline steps."""

__version__ = "0.1.0"

from .core.config import RunContext, RunnerOS
from .core.diagnostics import run_diagnostics

__all__ = ["RunContext", "RunnerOS", "run_diagnostics"]
