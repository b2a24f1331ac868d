from __future__ import annotations
"""Per-row weighted scoring against the targets vocabulary.

Design goals:
- Weighted additive scoring: every occurrence adds the target's weight,
  negative weights act as penalties
- Every configured label gets a score, 0.0 when nothing matched
- Pure / side-effect free so rows can be scored in any order or process
"""

from dataclasses import dataclass, field
from typing import Dict, Sequence, TYPE_CHECKING

from .patterns import count_occurrences

if TYPE_CHECKING:
    from ..targets.models import Configuration, LabelTarget

# --- Dataclasses -----------------------------------------------------------

@dataclass
class RowResult:
    row_id: int
    text: str
    scores: Dict[str, float] = field(default_factory=dict)

# --- Core Scoring Logic ----------------------------------------------------

def derive_text(fields: Sequence[str]) -> str:
    """Join a row's fields with single spaces, keeping column order."""
    return " ".join(fields)


def score_label(label: LabelTarget, buffer: bytes) -> float:
    """Sum ``count * weight`` over the label's decodable targets."""
    score = 0.0
    for target in label.targets:
        if target.pattern is None:
            continue
        score += count_occurrences(target.pattern, buffer) * target.weight
    return score


def score_row(row_id: int, fields: Sequence[str], config: Configuration) -> RowResult:
    """Score one row against every label in the vocabulary.

    Matching runs on the UTF-8 bytes of the derived text.
    """
    text = derive_text(fields)
    buffer = text.encode("utf-8")
    scores = {label.name: score_label(label, buffer) for label in config.labels}
    return RowResult(row_id=row_id, text=text, scores=scores)


__all__ = ["RowResult", "derive_text", "score_label", "score_row"]
