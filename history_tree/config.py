"""Configuration for history-tree construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class HistoryTreeConfig:
    # Abort construction once this many nodes exist (None = unbounded)
    max_histories: Optional[int] = None
    # Emit a progress log line every this many nodes
    log_every: int = 100_000

    def __post_init__(self) -> None:
        if self.max_histories is not None and self.max_histories < 1:
            raise ValueError(f"max_histories must be positive, got {self.max_histories}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be positive, got {self.log_every}")
