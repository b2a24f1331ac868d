"""Load the targets vocabulary from a JSON file."""

from __future__ import annotations
from pathlib import Path
import json
import logging

from ..errors import ConfigLoadError, ConfigMalformedError
from .models import Configuration

logger = logging.getLogger(__name__)


def load_targets(path: Path | str) -> Configuration:
    """Read, parse and validate a targets JSON file.

    Args:
        path: Path to the targets document

    Returns:
        Fully built, immutable Configuration

    Raises:
        ConfigLoadError: If the file cannot be read or is not valid JSON
        ConfigMalformedError: If the document structure is wrong
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"Cannot read targets file {path}: {exc}", path=str(path)) from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigLoadError(f"Targets file {path} is not valid JSON: {exc}", path=str(path)) from exc

    try:
        config = Configuration.from_dict(data)
    except ConfigMalformedError as exc:
        raise ConfigMalformedError(f"Malformed targets file {path}: {exc}", path=str(path)) from exc

    logger.debug(
        f"Loaded {len(config)} labels / {config.target_count()} targets from {path}"
    )
    return config


__all__ = ["load_targets"]
