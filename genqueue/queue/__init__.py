from __future__ import annotations

from ..config import OverflowPolicy, QueueConfig, QueueOrdering
from .generator_queue import GeneratorQueue
from .store import QueueStore

__all__ = [
    "GeneratorQueue",
    "OverflowPolicy",
    "QueueConfig",
    "QueueOrdering",
    "QueueStore",
]
