"""Parallel scoring engine.

Applies :func:`score_row` to every input row on a process pool. The
vocabulary is handed to each worker once through the pool initializer and
is only ever read afterwards. Results are returned in ``row_id`` order no
matter how many workers ran or in which order they finished.
"""

from __future__ import annotations
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, Iterator, List, Optional, Sequence, TYPE_CHECKING
import logging
import os
import time

from .scoring import RowResult, score_row
from ..ingest.table import InputRow
from ..utils.logging_helpers import log_progress

if TYPE_CHECKING:
    from ..targets.models import Configuration

logger = logging.getLogger(__name__)

# Per-process copy of the vocabulary, set once by _init_worker
_worker_config: Optional[Configuration] = None


def _init_worker(config: Configuration) -> None:
    global _worker_config
    _worker_config = config


def _score_in_worker(row: InputRow) -> RowResult:
    return score_row(row.row_id, row.fields, _worker_config)


def resolve_worker_count(max_workers: int | None) -> int:
    """Map a configured worker count to a concrete one (0/None = all cores)."""
    if not max_workers or max_workers < 0:
        return os.cpu_count() or 1
    return max_workers


class ScoringEngine:
    """Score rows against a shared vocabulary, in parallel.

    Example usage:
        config = load_targets("targets.json")
        engine = ScoringEngine(config, max_workers=4)
        results = engine.score_all(read_rows("corpus.csv").rows)
    """

    def __init__(
        self,
        config: Configuration,
        max_workers: int | None = None,
        chunk_size: int | None = None,
        progress_enabled: bool = True,
        progress_interval: int = 1000,
    ):
        """Initialize the scoring engine.

        Args:
            config: Immutable targets vocabulary shared by all workers
            max_workers: Worker processes (None/0 = os.cpu_count())
            chunk_size: Rows per task sent to a worker (None/0 = auto)
            progress_enabled: Enable progress logging (default: True)
            progress_interval: Log progress every N rows (default: 1000)
        """
        self.config = config
        self.max_workers = resolve_worker_count(max_workers)
        self.chunk_size = chunk_size
        self.progress_enabled = progress_enabled
        self.progress_interval = max(1, progress_interval)

    def _chunk_size_for(self, row_count: int, workers: int) -> int:
        if self.chunk_size and self.chunk_size > 0:
            return self.chunk_size
        # ~4 chunks per worker keeps the pool busy without per-row IPC overhead
        return max(1, row_count // (workers * 4))

    def _score_serial(self, rows: Sequence[InputRow]) -> Iterator[RowResult]:
        for row in rows:
            yield score_row(row.row_id, row.fields, self.config)

    def _score_parallel(self, rows: Sequence[InputRow], workers: int) -> Iterator[RowResult]:
        chunk_size = self._chunk_size_for(len(rows), workers)
        logger.debug(f"Scoring {len(rows)} rows on {workers} workers (chunk size {chunk_size})")
        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=_init_worker,
            initargs=(self.config,),
        ) as pool:
            yield from pool.map(_score_in_worker, rows, chunksize=chunk_size)

    def score_all(self, rows: Sequence[InputRow]) -> List[RowResult]:
        """Score every row and return results sorted by row_id.

        Args:
            rows: Rows that survived reading, each carrying its own row_id

        Returns:
            One RowResult per input row
        """
        start = time.time()
        workers = min(self.max_workers, len(rows))

        if workers <= 1:
            stream: Iterable[RowResult] = self._score_serial(rows)
        else:
            stream = self._score_parallel(rows, workers)

        results: List[RowResult] = []
        for result in stream:
            results.append(result)
            if self.progress_enabled and len(results) % self.progress_interval == 0:
                log_progress(len(results), len(rows), time.time() - start)

        results.sort(key=lambda r: r.row_id)

        elapsed = time.time() - start
        if self.progress_enabled and len(results) % self.progress_interval:
            log_progress(len(results), len(rows), elapsed)
        logger.debug(f"Scored {len(results)} rows in {elapsed:.2f}s")
        return results


__all__ = ["ScoringEngine", "resolve_worker_count"]
