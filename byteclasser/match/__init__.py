"""Matching package: byte pattern primitives and per-row scoring.

The parallel engine lives in :mod:`byteclasser.match.engine` and is imported
from there directly to keep this package cheap to import in workers.
"""

from .patterns import decode_pattern, count_occurrences
from .scoring import RowResult, derive_text, score_label, score_row

__all__ = [
    "decode_pattern",
    "count_occurrences",
    "RowResult",
    "derive_text",
    "score_label",
    "score_row",
]
