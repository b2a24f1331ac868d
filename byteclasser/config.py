from __future__ import annotations
import os
import re
import logging
from typing import Any, Dict
from pathlib import Path
import copy

logger = logging.getLogger(__name__)

ENV_PREFIX = "BYTECLASSER__"

_DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "scoring": {
        "max_workers": 0,  # 0 = all CPU cores
        "chunk_size": 0,  # 0 = automatic
    },
    "logging": {
        "progress_enabled": True,
        "progress_interval": 1000,
    },
}

# KEY=value, KEY="value", KEY='value'; unquoted values may carry a trailing "# comment"
_DOTENV_LINE = re.compile(
    r'''^\s*(?P<key>[A-Za-z_][A-Za-z0-9_]*)\s*=\s*
        (?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<raw>[^#]*?))
        \s*(?:\#.*)?$''',
    re.VERBOSE,
)


def deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return a new dict with b merged over a, recursing into nested dicts."""
    merged = dict(a)
    for key, value in b.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_dotenv(path: Path) -> Dict[str, str]:
    """Return the BYTECLASSER__ entries of a .env file (missing file = none)."""
    if not path.exists():
        return {}
    values: Dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        match = _DOTENV_LINE.match(line)
        if not match or not match.group('key').startswith(ENV_PREFIX):
            continue
        value = next(v for v in (match.group('dq'), match.group('sq'), match.group('raw')) if v is not None)
        values[match.group('key')] = value
    return values


def _apply_env(cfg: Dict[str, Any], entries: Dict[str, str]) -> None:
    # BYTECLASSER__SCORING__MAX_WORKERS=4 -> cfg['scoring']['max_workers'] = 4
    for raw_key, value in entries.items():
        *sections, name = raw_key[len(ENV_PREFIX):].lower().split("__")
        cursor = cfg
        for section in sections:
            cursor = cursor.setdefault(section, {})
        cursor[name] = coerce_scalar(value)


def load_config(overrides: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Load settings merging defaults <- .env <- environment <- overrides.

    During test runs (detected via PYTEST_CURRENT_TEST) .env loading is skipped
    unless BYTECLASSER_ENABLE_DOTENV=1 is set to allow deterministic defaults.

    Args:
        overrides: Dict of values to deep-merge last (primarily for tests).

    Returns:
        dict: Settings dictionary (for typed access use load_typed_config()).
    """
    cfg: Dict[str, Any] = copy.deepcopy(_DEFAULTS)

    if os.environ.get('BYTECLASSER_ENABLE_DOTENV') or not os.environ.get('PYTEST_CURRENT_TEST'):
        _apply_env(cfg, _load_dotenv(Path('.env')))
    _apply_env(cfg, {k: v for k, v in os.environ.items() if k.startswith(ENV_PREFIX)})

    if overrides:
        cfg = deep_merge(cfg, overrides)

    _configure_logging(cfg.get('log_level', 'INFO'))
    return cfg


def load_typed_config(overrides: Dict[str, Any] | None = None):
    """Load settings as a typed AppConfig object."""
    from .config_types import AppConfig
    return AppConfig.from_dict(load_config(overrides))


def _configure_logging(level_name: str) -> None:
    """Point the root logger at stderr with bare messages at the configured level."""
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format='%(message)s', force=True)


def coerce_scalar(value: str) -> Any:
    """Turn an environment string into bool, int, float or str."""
    text = value.strip()
    if text.lower() in {"true", "yes", "on"}:
        return True
    if text.lower() in {"false", "no", "off"}:
        return False
    for cast in (int, float):
        try:
            return cast(text)
        except ValueError:
            continue
    return text


__all__ = ["load_config", "deep_merge", "load_typed_config", "coerce_scalar"]
