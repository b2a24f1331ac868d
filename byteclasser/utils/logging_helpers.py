"""Logging helper utilities for consistent progress reporting."""

import logging
import click

logger = logging.getLogger(__name__)


def log_progress(
    processed: int,
    total: int | None,
    elapsed_seconds: float = 0.0,
    item_name: str = "rows"
) -> None:
    """Log progress info with consistent formatting.

    Args:
        processed: Number of items processed so far
        total: Total number of items (None if unknown)
        elapsed_seconds: Time elapsed since start
        item_name: Name of items being processed (e.g., "rows")
    """
    parts = [
        f"{click.style(f'{processed}', fg='cyan')} {item_name} processed"
    ]

    if total:
        pct = (processed / total * 100) if total > 0 else 0
        parts[0] = f"{click.style(f'{processed}/{total}', fg='cyan')} {item_name} ({pct:.0f}%)"

    if elapsed_seconds > 0:
        rate = processed / elapsed_seconds
        parts.append(f"{rate:.1f} {item_name}/s")

    logger.info(" | ".join(parts))


def format_summary(
    scored: int,
    dropped: int = 0,
    skipped_targets: int = 0,
    labels: int = 0,
    workers: int = 0,
    duration_seconds: float = 0.0,
) -> str:
    """Format a one-line run summary with colored counts.

    Args:
        scored: Rows scored and written
        dropped: Rows dropped at read time
        skipped_targets: Targets excluded because their pattern did not decode
        labels: Number of label columns written
        workers: Worker processes used for scoring
        duration_seconds: Total duration in seconds

    Returns:
        Formatted summary string with colors
    """
    parts = [
        click.style('✓', fg='green'),
        "Rows:",
        click.style(f'{scored} scored', fg='green'),
        click.style(f'{labels} labels', fg='blue'),
    ]

    if dropped > 0:
        parts.append(click.style(f'{dropped} dropped', fg='yellow'))
    if skipped_targets > 0:
        parts.append(click.style(f'{skipped_targets} targets skipped', fg='yellow'))
    if workers > 0:
        parts.append(f"{workers} worker" + ("" if workers == 1 else "s"))

    if duration_seconds > 0:
        parts.append(f"in {duration_seconds:.2f}s")

    return " ".join(parts)


__all__ = ["log_progress", "format_summary"]
