"""Input table ingestion."""

from .table import InputRow, ReadResult, read_rows

__all__ = ["InputRow", "ReadResult", "read_rows"]
