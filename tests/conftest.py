"""Pytest fixtures for test configuration.

Global test safety measures:
 - Keep settings deterministic: no .env auto-loading, serial scoring by default
"""
import json
import pytest
from pathlib import Path
from typing import Dict, Any, Callable


def pytest_sessionstart(session):  # type: ignore[no-untyped-def]
    import os
    os.environ.pop('BYTECLASSER_ENABLE_DOTENV', None)


@pytest.fixture
def test_config() -> Dict[str, Any]:
    """Provide a minimal settings dict.

    Tests should pass this to services or to the CLI via ``obj=`` rather than
    setting environment variables. Scoring runs serially unless a test
    overrides ``scoring.max_workers``.
    """
    return {
        'log_level': 'DEBUG',
        'scoring': {
            'max_workers': 1,
            'chunk_size': 0,
        },
        'logging': {
            'progress_enabled': False,
            'progress_interval': 1000,
        },
    }


def _make_target(pattern_hex: str, weight: float = 1.0, text: str = "", frequency: int = 1,
                uniqueness: float = 1.0) -> Dict[str, Any]:
    return {
        'text': text,
        'weight': weight,
        'frequency': frequency,
        'uniqueness': uniqueness,
        'bytes_pattern': pattern_hex,
    }


def _make_document(labels: Dict[str, list]) -> Dict[str, Any]:
    """Build a targets document from {label: [target dicts]}."""
    return {
        'metadata': {
            'min_frequency': 2,
            'min_uniqueness': 0.5,
            'ngram_range': [2, 4],
        },
        'targets': {
            name: {'label': name, 'targets': targets}
            for name, targets in labels.items()
        },
    }


@pytest.fixture
def write_targets(tmp_path: Path) -> Callable[..., Path]:
    """Write a targets JSON file and return its path."""
    def _write(labels: Dict[str, list] | None = None, document: Dict[str, Any] | None = None,
               name: str = 'targets.json') -> Path:
        path = tmp_path / name
        doc = document if document is not None else _make_document(labels or {})
        path.write_text(json.dumps(doc), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write raw CSV text (or bytes) and return its path."""
    def _write(content: str | bytes, name: str = 'corpus.csv') -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding='utf-8', newline='')
        return path
    return _write


@pytest.fixture
def make_target() -> Callable[..., Dict[str, Any]]:
    """Factory for a single target entry."""
    return _make_target


@pytest.fixture
def make_document() -> Callable[..., Dict[str, Any]]:
    """Factory for a full targets document."""
    return _make_document
