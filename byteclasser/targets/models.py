"""Immutable targets vocabulary: labels, their n-gram targets and metadata.

The model is built once from the parsed JSON document and then shared
read-only by every scoring worker. Hex patterns are decoded here, exactly
once per target, so the per-row hot path only touches raw bytes.

Document shape::

    {
      "metadata": {"min_frequency": 2, "min_uniqueness": 0.5, "ngram_range": [2, 4]},
      "targets": {
        "<label>": {
          "label": "<label>",
          "targets": [
            {"text": "ab", "weight": 2.0, "frequency": 10,
             "uniqueness": 0.9, "bytes_pattern": "6162"}
          ]
        }
      }
    }
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging
import math

from ..errors import ConfigMalformedError, PatternDecodeError
from ..match.patterns import decode_pattern

logger = logging.getLogger(__name__)


# --- Field validation ------------------------------------------------------

def _require(data: Any, key: str, where: str) -> Any:
    if not isinstance(data, Mapping):
        raise ConfigMalformedError(f"{where}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise ConfigMalformedError(f"{where}: missing required field '{key}'")
    return data[key]


def _as_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ConfigMalformedError(f"{where}: expected a string, got {type(value).__name__}")
    return value


def _as_count(value: Any, where: str) -> int:
    # bool is an int subclass; JSON true/false is never a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigMalformedError(f"{where}: expected an integer, got {type(value).__name__}")
    if value < 0:
        raise ConfigMalformedError(f"{where}: expected a non-negative integer, got {value}")
    return value


def _as_float(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigMalformedError(f"{where}: expected a number, got {type(value).__name__}")
    return float(value)


# --- Dataclasses -----------------------------------------------------------

@dataclass(frozen=True)
class Metadata:
    """Vocabulary-wide settings carried from the n-gram extraction step.

    Not consulted by the matcher; kept so the vocabulary round-trips intact.
    """
    min_frequency: int
    min_uniqueness: float
    ngram_range: Tuple[int, int]

    @classmethod
    def from_dict(cls, data: Any) -> Metadata:
        where = "metadata"
        raw_range = _require(data, "ngram_range", where)
        if not isinstance(raw_range, (list, tuple)) or len(raw_range) != 2:
            raise ConfigMalformedError(f"{where}.ngram_range: expected a two-element list")
        low = _as_count(raw_range[0], f"{where}.ngram_range[0]")
        high = _as_count(raw_range[1], f"{where}.ngram_range[1]")
        return cls(
            min_frequency=_as_count(_require(data, "min_frequency", where), f"{where}.min_frequency"),
            min_uniqueness=_as_float(_require(data, "min_uniqueness", where), f"{where}.min_uniqueness"),
            ngram_range=(low, high),
        )


@dataclass(frozen=True)
class NGramTarget:
    """One scoring rule: every occurrence of ``pattern`` adds ``weight``.

    ``pattern`` is None when ``bytes_pattern`` failed to decode; such a
    target stays in the vocabulary for diagnostics but never scores.
    """
    text: str
    weight: float
    frequency: int
    uniqueness: float
    bytes_pattern: str
    pattern: Optional[bytes] = None
    decode_error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.pattern is not None

    @classmethod
    def from_dict(cls, data: Any, where: str) -> NGramTarget:
        weight = _as_float(_require(data, "weight", where), f"{where}.weight")
        if not math.isfinite(weight):
            raise ConfigMalformedError(f"{where}.weight: expected a finite number, got {weight}")
        bytes_pattern = _as_str(_require(data, "bytes_pattern", where), f"{where}.bytes_pattern")

        pattern: Optional[bytes] = None
        decode_error: Optional[str] = None
        try:
            pattern = decode_pattern(bytes_pattern)
        except PatternDecodeError as exc:
            decode_error = exc.reason
            logger.debug(f"{where}: skipping target, {exc}")

        return cls(
            text=_as_str(_require(data, "text", where), f"{where}.text"),
            weight=weight,
            frequency=_as_count(_require(data, "frequency", where), f"{where}.frequency"),
            uniqueness=_as_float(_require(data, "uniqueness", where), f"{where}.uniqueness"),
            bytes_pattern=bytes_pattern,
            pattern=pattern,
            decode_error=decode_error,
        )


@dataclass(frozen=True)
class LabelTarget:
    """A label key, its display name and its ordered scoring rules."""
    name: str
    label: str
    targets: Tuple[NGramTarget, ...]

    @classmethod
    def from_dict(cls, name: str, data: Any) -> LabelTarget:
        where = f"targets.{name}"
        label = _as_str(_require(data, "label", where), f"{where}.label")
        if label != name:
            logger.warning(f"Label '{label}' does not match its key '{name}'; using the key for output")
        raw_targets = _require(data, "targets", where)
        if not isinstance(raw_targets, list):
            raise ConfigMalformedError(f"{where}.targets: expected a list, got {type(raw_targets).__name__}")
        targets = tuple(
            NGramTarget.from_dict(item, f"{where}.targets[{i}]")
            for i, item in enumerate(raw_targets)
        )
        return cls(name=name, label=label, targets=targets)


@dataclass(frozen=True)
class Configuration:
    """The full vocabulary, sorted by label name.

    Immutable after construction: labels and targets are tuples and every
    record is frozen, so one instance can be handed to all workers as-is.
    """
    metadata: Metadata
    labels: Tuple[LabelTarget, ...]
    _index: Dict[str, LabelTarget] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {lt.name: lt for lt in self.labels}
        if len(index) != len(self.labels):
            raise ConfigMalformedError("targets: duplicate label names")
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_dict(cls, data: Any) -> Configuration:
        """Build the vocabulary from an already-parsed JSON document.

        Raises:
            ConfigMalformedError: If a required field is missing or mistyped.
        """
        metadata = Metadata.from_dict(_require(data, "metadata", "document"))
        raw_targets = _require(data, "targets", "document")
        if not isinstance(raw_targets, Mapping):
            raise ConfigMalformedError(f"targets: expected an object, got {type(raw_targets).__name__}")
        labels = tuple(
            LabelTarget.from_dict(name, raw_targets[name])
            for name in sorted(raw_targets)
        )
        return cls(metadata=metadata, labels=labels)

    @property
    def label_names(self) -> List[str]:
        return [lt.name for lt in self.labels]

    def get(self, name: str) -> Optional[LabelTarget]:
        return self._index.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self.labels)

    def target_count(self) -> int:
        return sum(len(lt.targets) for lt in self.labels)

    def skipped_targets(self) -> List[Tuple[str, NGramTarget]]:
        """Return (label name, target) for every target whose pattern failed to decode."""
        return [
            (lt.name, target)
            for lt in self.labels
            for target in lt.targets
            if not target.is_valid
        ]


__all__ = ["Metadata", "NGramTarget", "LabelTarget", "Configuration"]
