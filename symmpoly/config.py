"""
Engine configuration shared by the CLI, relation enumeration and scripts.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .core import UsageError


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EngineConfig:
    """Configuration for basis construction and relation enumeration."""
    ordered: bool = True           # container for generator-space results
    workers: int = 1               # 1 = evaluate relations in-process
    use_processes: bool = True     # process pool when workers > 1, else threads
    verify: bool = True            # re-substitute every relation
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.workers < 1:
            raise UsageError(f"workers must be at least 1, got {self.workers}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise UsageError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}"
            )

    @property
    def parallel(self) -> bool:
        return self.workers > 1

    def configure_logging(self) -> None:
        """Install a root handler at this level (entry points only)."""
        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


__all__ = [
    'EngineConfig',
]
