"""Utilities for runnerinfo."""

from .formatters import format_block, format_gib
from .workflow import Workflow

__all__ = ["format_block", "format_gib", "Workflow"]
