"""Typed configuration dataclasses for byteclasser.

Provides strongly-typed settings objects for the scoring run. These are the
application settings (workers, logging); the targets vocabulary is modelled
separately in :mod:`byteclasser.targets.models`.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, Any


@dataclass
class ScoringConfig:
    """Parallel scoring configuration."""
    max_workers: int = 0  # 0 = one worker per CPU core
    chunk_size: int = 0  # 0 = derive from row count and worker count

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class LoggingConfig:
    """Progress logging configuration."""
    progress_enabled: bool = True
    progress_interval: int = 1000

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary.

        Returns:
            Nested dict structure matching config format
        """
        return {
            "log_level": self.log_level,
            "scoring": self.scoring.to_dict(),
            "logging": self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create typed config from dictionary.

        Args:
            data: Dictionary config (from load_config)

        Returns:
            Typed AppConfig instance
        """
        return cls(
            log_level=data.get("log_level", "INFO"),
            scoring=ScoringConfig(**data.get("scoring", {})),
            logging=LoggingConfig(**data.get("logging", {})),
        )


__all__ = [
    "AppConfig",
    "ScoringConfig",
    "LoggingConfig",
]
