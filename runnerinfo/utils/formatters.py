"""Formatting utilities for runnerinfo."""

SEPARATOR = "=" * 40
WIDE_SEPARATOR = "=" * 54

BLOCK_INDENT = "    ▶ "


def format_block(text: str, indent: str = BLOCK_INDENT) -> str:
    """Prefix every line of a multi-line text with an indent.

    Args:
        text: Text to indent (may contain newlines)
        indent: Prefix applied to each line

    Returns:
        Indented text

    Examples:
        >>> format_block("a\\nb", "  ")
        '  a\\n  b'
    """
    return "\n".join(f"{indent}{line}" for line in text.split("\n"))


def format_gib(bytes_: int) -> str:
    """Format a byte count in gibibytes with two decimals.

    Examples:
        >>> format_gib(0)
        '0.00 GB'
        >>> format_gib(8 * 1024**3)
        '8.00 GB'
        >>> format_gib(1536 * 1024**2)
        '1.50 GB'
    """
    return f"{bytes_ / (1024**3):.2f} GB"


def format_field(label: str, value: str, width: int = 16) -> str:
    """Format a report line as ``  LABEL:<padding>value``."""
    return f"  {(label + ':').ljust(width)}{value}"
