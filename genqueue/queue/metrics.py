from __future__ import annotations

from ..metrics.registry import (
    QUEUE_CAPACITY_EXCEEDED_TOTAL,
    QUEUE_CONSUME_BATCH_SIZE,
    QUEUE_ITEMS_CONSUMED_TOTAL,
    QUEUE_ITEMS_DISPATCHED_TOTAL,
    QUEUE_SIZE,
)


def observe_dispatch(queue: str, count: int) -> None:
    """Record a dispatch of ``count`` items."""
    QUEUE_ITEMS_DISPATCHED_TOTAL.labels(queue=queue).inc(count)


def observe_consume(queue: str, count: int) -> None:
    """Record a consumed batch of ``count`` items."""
    QUEUE_ITEMS_CONSUMED_TOTAL.labels(queue=queue).inc(count)
    QUEUE_CONSUME_BATCH_SIZE.labels(queue=queue).observe(count)


def observe_size(queue: str, size: int) -> None:
    QUEUE_SIZE.labels(queue=queue).set(size)


def observe_capacity_exceeded(queue: str, policy: str) -> None:
    QUEUE_CAPACITY_EXCEEDED_TOTAL.labels(queue=queue, policy=policy).inc()
