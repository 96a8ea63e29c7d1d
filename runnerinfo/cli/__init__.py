"""Command-line interface for runnerinfo."""
