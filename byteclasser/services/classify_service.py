"""Classify service: load targets, read rows, score in parallel, write results.

Fatal errors (targets file, input file, output file) propagate to the
caller. Skipped targets and dropped rows are counted and reported.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, List
import logging
import time

from ..config_types import AppConfig
from ..ingest.table import read_rows
from ..match.engine import ScoringEngine
from ..reporting.writer import label_columns, write_results
from ..targets.loader import load_targets

logger = logging.getLogger(__name__)


class ClassifyResult:
    """Results from a classification run."""

    def __init__(self):
        self.labels: List[str] = []
        self.targets_total = 0
        self.targets_skipped = 0
        self.rows_read = 0
        self.rows_dropped = 0
        self.rows_scored = 0
        self.workers = 0
        self.output_path: Path | None = None
        self.duration_seconds = 0.0


def run_classification(
    input_path: Path | str,
    targets_path: Path | str,
    output_path: Path | str,
    config: Dict[str, Any] | None = None,
) -> ClassifyResult:
    """Score every row of ``input_path`` against ``targets_path``.

    Args:
        input_path: Input CSV (first record is the header)
        targets_path: Targets JSON vocabulary
        output_path: Destination CSV
        config: Settings dict (from load_config); defaults when None

    Returns:
        ClassifyResult with counts and the written path

    Raises:
        ConfigLoadError: Targets file unreadable or malformed
        InputReadError: Input table cannot be opened
        OutputWriteError: Output table cannot be written
    """
    result = ClassifyResult()
    start = time.time()
    settings = AppConfig.from_dict(config or {})

    # Vocabulary first: a bad targets file aborts before any row is read
    vocab = load_targets(targets_path)
    skipped = vocab.skipped_targets()
    result.targets_total = vocab.target_count()
    result.targets_skipped = len(skipped)
    if skipped:
        logger.warning(
            f"⚠ Skipped {len(skipped)} of {result.targets_total} targets with invalid hex patterns"
        )
        for label, target in skipped:
            logger.debug(f"  {label}: {target.text!r} -> {target.bytes_pattern!r} ({target.decode_error})")

    read = read_rows(input_path)
    result.rows_read = read.total
    result.rows_dropped = len(read.dropped)
    if read.dropped:
        logger.warning(f"⚠ Dropped {len(read.dropped)} of {read.total} input rows that could not be read")
        for err in read.dropped:
            logger.debug(f"  {err}")

    engine = ScoringEngine(
        vocab,
        max_workers=settings.scoring.max_workers,
        chunk_size=settings.scoring.chunk_size,
        progress_enabled=settings.logging.progress_enabled,
        progress_interval=settings.logging.progress_interval,
    )
    result.workers = min(engine.max_workers, max(1, len(read.rows)))
    scored = engine.score_all(read.rows)

    result.output_path = write_results(output_path, scored)
    result.rows_scored = len(scored)
    result.labels = label_columns(scored)
    result.duration_seconds = time.time() - start
    return result


__all__ = ["ClassifyResult", "run_classification"]
