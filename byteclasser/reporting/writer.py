"""Write scored rows back to a delimited table.

Label columns are the sorted union of labels across all results, so the
column order is stable regardless of vocabulary or completion order.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Sequence
from decimal import Decimal
import csv
import logging
import math

from ..errors import OutputWriteError
from ..match.scoring import RowResult

logger = logging.getLogger(__name__)

FIXED_COLUMNS = ["row_id", "text"]


def label_columns(results: Iterable[RowResult]) -> List[str]:
    """Return the alphabetically sorted set of label names across all results."""
    return sorted({label for result in results for label in result.scores})


def format_score(value: float) -> str:
    """Render a score as a positional decimal (``4.0``, ``0.0``, ``-1.5``, ``0.00001``).

    Uses the shortest round-trip digits but never an exponent.
    """
    value = float(value)
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    return text if "." in text else text + ".0"


def build_table_rows(results: Sequence[RowResult], labels: Sequence[str]) -> Iterator[List[Any]]:
    """Yield output rows in ascending row_id order, scores in ``labels`` order.

    A label missing from a result's score map is rendered as 0.0.
    """
    for result in sorted(results, key=lambda r: r.row_id):
        yield [result.row_id, result.text] + [
            format_score(result.scores.get(label, 0.0)) for label in labels
        ]


def write_csv_table(
    csv_path: Path,
    headers: list[str],
    rows: Iterable[list[Any]]
) -> None:
    """Write a CSV table with given headers and rows.

    Args:
        csv_path: Path to output CSV file
        headers: List of column headers
        rows: Iterable of row data (each row is a list matching headers)
    """
    with csv_path.open('w', newline='', encoding='utf-8') as fh:
        writer = csv.writer(fh)
        writer.writerow(headers)
        writer.writerows(rows)


def write_results(output_path: Path | str, results: Sequence[RowResult]) -> Path:
    """Write all results to ``output_path``.

    Args:
        output_path: Destination CSV file (parent directories are created)
        results: Collected RowResults, in any order

    Returns:
        Path of the written file

    Raises:
        OutputWriteError: If the file or its directory cannot be written
    """
    path = Path(output_path)
    labels = label_columns(results)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        write_csv_table(path, FIXED_COLUMNS + labels, build_table_rows(results, labels))
    except OSError as exc:
        raise OutputWriteError(f"Cannot write output table {path}: {exc}") from exc
    logger.debug(f"Wrote {len(results)} rows x {len(labels)} labels to {path}")
    return path


__all__ = ["label_columns", "format_score", "build_table_rows", "write_csv_table", "write_results"]
