"""Service layer orchestrating a full classification run."""

from .classify_service import ClassifyResult, run_classification

__all__ = ["ClassifyResult", "run_classification"]
