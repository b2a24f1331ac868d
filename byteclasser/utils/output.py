"""Output formatting utilities for consistent CLI reporting."""

import click
from pathlib import Path


def error(text: str, prefix: str = "✗") -> str:
    """Format an error message."""
    return f"{click.style(prefix, fg='red')} {text}"


def file_path(path: Path | str, label: str | None = None) -> str:
    """Format a file path with optional label.

    Args:
        path: File path to format
        label: Optional label to show before path

    Returns:
        Formatted path string
    """
    path_str = str(Path(path).resolve())
    if label:
        return f"  {click.style('•', fg='blue')} {label}: {click.style(path_str, fg='yellow')}"
    return f"  {click.style(path_str, fg='yellow')}"


__all__ = [
    "error",
    "file_path",
]
