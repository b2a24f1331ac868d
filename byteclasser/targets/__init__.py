"""Targets vocabulary: immutable model and JSON loader."""

from .models import Metadata, NGramTarget, LabelTarget, Configuration
from .loader import load_targets

__all__ = ["Metadata", "NGramTarget", "LabelTarget", "Configuration", "load_targets"]
