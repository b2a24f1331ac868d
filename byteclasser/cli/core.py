"""Core CLI module - the ``byteclasser`` scoring command."""

from __future__ import annotations
import click
import logging

from ..config import load_typed_config
from ..errors import ConfigLoadError, InputReadError, OutputWriteError
from ..services.classify_service import run_classification
from ..utils.logging_helpers import format_summary
from ..utils.output import error, file_path
from ..version import __version__

logger = logging.getLogger(__name__)


@click.command(name="byteclasser")
@click.version_option(version=__version__, prog_name="byteclasser")
@click.argument("input_csv", type=click.Path(dir_okay=False))
@click.argument("targets_json", type=click.Path(dir_okay=False))
@click.argument("output_csv", type=click.Path(dir_okay=False))
@click.option('--workers', '-w', type=click.IntRange(min=0), default=None,
              help='Worker processes for scoring (0 = all cores, overrides config)')
@click.option('--progress/--no-progress', default=None, help='Enable/disable progress logging (overrides config)')
@click.option('--progress-interval', type=click.IntRange(min=1), default=None,
              help='Log progress every N rows (overrides config)')
@click.pass_context
def cli(
    ctx: click.Context,
    input_csv: str,
    targets_json: str,
    output_csv: str,
    workers: int | None,
    progress: bool | None,
    progress_interval: int | None,
):
    """Score every row of INPUT_CSV against the byte patterns in TARGETS_JSON.

    Each row's fields are joined with single spaces and matched byte-for-byte
    against every target; a label's score is the sum of occurrence count times
    target weight. Results are written to OUTPUT_CSV with one column per label.

    \b
    Example:
      byteclasser corpus.csv targets.json byteclasser_output.csv
      byteclasser -w 4 corpus.csv targets.json out.csv

    \b
    Settings can also come from the environment or a .env file:
      BYTECLASSER__SCORING__MAX_WORKERS=4
      BYTECLASSER__LOG_LEVEL=DEBUG
    """
    if isinstance(ctx.obj, dict):
        cfg = ctx.obj
    else:
        cfg = load_typed_config().to_dict()

    # Override settings from CLI flags
    if workers is not None:
        cfg.setdefault('scoring', {})['max_workers'] = workers
    if progress is not None:
        cfg.setdefault('logging', {})['progress_enabled'] = progress
    if progress_interval is not None:
        cfg.setdefault('logging', {})['progress_interval'] = progress_interval

    click.echo(click.style("=== Scoring rows against byte-pattern targets ===", fg='cyan', bold=True))

    try:
        result = run_classification(input_csv, targets_json, output_csv, config=cfg)
    except ConfigLoadError as e:
        click.echo(error(f"Targets error: {e}"), err=True)
        ctx.exit(1)
    except InputReadError as e:
        click.echo(error(f"Input error: {e}"), err=True)
        ctx.exit(1)
    except OutputWriteError as e:
        click.echo(error(f"Output error: {e}"), err=True)
        ctx.exit(1)

    click.echo(format_summary(
        scored=result.rows_scored,
        dropped=result.rows_dropped,
        skipped_targets=result.targets_skipped,
        labels=len(result.labels),
        workers=result.workers,
        duration_seconds=result.duration_seconds,
    ))
    click.echo(file_path(result.output_path, label="Output"))


__all__ = ["cli"]
