from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from genqueue.config import QueueConfig
from genqueue.queue import GeneratorQueue


@pytest.fixture
def queue_factory(
    queue_name_factory: Callable[[], str],
    mock_logger: MagicMock,
) -> Callable[..., GeneratorQueue[Any]]:
    """
    Factory fixture creating uniquely named queues wired to ``mock_logger``.

    Usage:
        queue = queue_factory(capacity=16)
        queue = queue_factory(["a"], overflow_policy="allow")
    """
    def _create(initial_state: Optional[list[Any]] = None, **config_kwargs: Any) -> GeneratorQueue[Any]:
        return GeneratorQueue(
            initial_state,
            QueueConfig(**config_kwargs),
            name=queue_name_factory(),
            logger=mock_logger,
        )

    return _create


@pytest.fixture
def queue(queue_factory: Callable[..., GeneratorQueue[Any]]) -> GeneratorQueue[Any]:
    """A queue with the default configuration (capacity 1024, ERROR policy)."""
    return queue_factory()
