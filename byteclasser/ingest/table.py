"""Read input rows from a delimited table.

The first record is the header and only fixes the expected field count;
an undecodable header is tolerated with a warning.
Every following non-blank record becomes an :class:`InputRow` whose
``row_id`` is its zero-based position among data records. Records that
cannot be read are dropped without shifting the ids of later rows.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple
import csv
import logging
import sys

from ..errors import InputReadError, RowReadError

logger = logging.getLogger(__name__)


def _raise_field_size_limit() -> None:
    """Lift the csv module's 128 KiB per-field cap so long documents parse."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            # C long is 32 bits on some platforms
            limit //= 2


@dataclass(frozen=True)
class InputRow:
    row_id: int
    fields: Tuple[str, ...]


@dataclass
class ReadResult:
    """Rows that survived reading plus the errors for the ones that did not."""
    header: List[str] = field(default_factory=list)
    rows: List[InputRow] = field(default_factory=list)
    dropped: List[RowReadError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.rows) + len(self.dropped)


def _has_invalid_utf8(fields: List[str]) -> bool:
    # surrogateescape maps undecodable bytes to lone surrogates U+DC80..U+DCFF
    return any(
        "\udc80" <= ch <= "\udcff"
        for value in fields
        for ch in value
    )


def _iter_records(path: Path) -> Iterator[Tuple[int, List[str] | None, str | None]]:
    """Yield (line number, fields, error) for every record in the file."""
    try:
        fh = path.open("r", newline="", encoding="utf-8-sig", errors="surrogateescape")
    except OSError as exc:
        raise InputReadError(f"Cannot open input table {path}: {exc}") from exc

    _raise_field_size_limit()
    with fh:
        reader = csv.reader(fh)
        while True:
            try:
                record = next(reader)
            except StopIteration:
                return
            except csv.Error as exc:
                yield reader.line_num, None, str(exc)
                continue
            yield reader.line_num, record, None


def read_rows(path: Path | str) -> ReadResult:
    """Read a CSV file into index-assigned rows.

    A data record is dropped (and recorded in ``ReadResult.dropped``) when
    the CSV parser rejects it, when its field count differs from the
    header's, or when it contains bytes that are not valid UTF-8.

    Raises:
        InputReadError: If the file cannot be opened (the only fatal case)
    """
    path = Path(path)
    result = ReadResult()
    header_seen = False
    expected: int | None = None
    row_id = 0

    for line, record, error in _iter_records(path):
        if record is not None and not record:
            # blank line
            continue
        if not header_seen:
            header_seen = True
            if error is not None:
                # width unknown; the first readable data record fixes it
                logger.warning(f"⚠ Header of {path} could not be parsed ({error}); continuing")
                continue
            if _has_invalid_utf8(record):
                logger.warning(f"⚠ Header of {path} is not valid UTF-8; using its {len(record)} columns")
            result.header = record
            expected = len(record)
            continue

        if error is None and expected is None:
            expected = len(record)
        if error is None and len(record) != expected:
            error = f"expected {expected} fields, found {len(record)}"
        if error is None and _has_invalid_utf8(record):
            error = "invalid UTF-8"

        if error is not None:
            exc = RowReadError(row_id, line, error)
            logger.debug(f"Dropping {exc}")
            result.dropped.append(exc)
        else:
            result.rows.append(InputRow(row_id=row_id, fields=tuple(record)))
        row_id += 1

    return result


__all__ = ["InputRow", "ReadResult", "read_rows"]
