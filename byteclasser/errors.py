"""Exception types raised by byteclasser.

Fatal conditions (targets file, input file, output file) propagate to the
CLI which maps them to a non-zero exit status. Per-target and per-row
conditions are recovered where they occur and only show up in diagnostics.
"""

from __future__ import annotations


class ByteClasserError(Exception):
    """Base class for all byteclasser errors."""


class ConfigLoadError(ByteClasserError):
    """Targets file could not be read or parsed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ConfigMalformedError(ConfigLoadError):
    """Targets document is missing a required field or has a mistyped value."""


class PatternDecodeError(ByteClasserError):
    """A target's ``bytes_pattern`` is not valid hexadecimal."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"invalid hex pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class RowReadError(ByteClasserError):
    """A single input record could not be turned into fields."""

    def __init__(self, row_id: int, line: int | None, reason: str):
        where = f"row {row_id}" if line is None else f"row {row_id} (line {line})"
        super().__init__(f"{where}: {reason}")
        self.row_id = row_id
        self.line = line
        self.reason = reason


class InputReadError(ByteClasserError):
    """Input table could not be opened."""


class OutputWriteError(ByteClasserError):
    """Output table could not be created or written."""


__all__ = [
    "ByteClasserError",
    "ConfigLoadError",
    "ConfigMalformedError",
    "PatternDecodeError",
    "RowReadError",
    "InputReadError",
    "OutputWriteError",
]
