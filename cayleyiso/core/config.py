"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass

from cayleyiso.core.permutations import MAX_CANONICAL_SIZE, MAX_SEARCH_SIZE


@dataclass
class EngineConfig:
    """Size ceilings and parallelism for the factorial-time operations."""

    max_canonical_size: int = MAX_CANONICAL_SIZE
    max_search_size: int = MAX_SEARCH_SIZE
    workers: int | None = None  # None or 1 = run in-process

    def __post_init__(self) -> None:
        if self.max_canonical_size < 1 or self.max_search_size < 1:
            raise ValueError("size ceilings must be positive")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
