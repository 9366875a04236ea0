from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def queue_name_factory(request: pytest.FixtureRequest) -> Callable[[], str]:
    """
    Factory fixture creating per-test unique queue names.

    Metric collectors are process-global, so unique names keep label values
    from leaking between tests.

    Usage:
        name = queue_name_factory()
    """
    def _create() -> str:
        base = f"test_queue_{request.node.name[:30]}"
        return f"{base}_{uuid.uuid4().hex[:10]}"

    return _create


@pytest.fixture
def queue_name(queue_name_factory: Callable[[], str]) -> str:
    return queue_name_factory()


@pytest.fixture
def mock_logger() -> MagicMock:
    """A logger double for asserting on emitted records."""
    return MagicMock(spec=logging.Logger)
