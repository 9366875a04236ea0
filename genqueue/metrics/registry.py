from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

QUEUE_ITEMS_DISPATCHED_TOTAL = Counter(
    "genqueue_items_dispatched_total",
    "Items appended to a generator queue by dispatch()",
    ["queue"],
)

QUEUE_ITEMS_CONSUMED_TOTAL = Counter(
    "genqueue_items_consumed_total",
    "Items removed from a generator queue by consume()",
    ["queue"],
)

QUEUE_CAPACITY_EXCEEDED_TOTAL = Counter(
    "genqueue_capacity_exceeded_total",
    "dispatch() calls that tripped the capacity check",
    ["queue", "policy"],
)

QUEUE_SIZE = Gauge(
    "genqueue_queue_size",
    "Items currently held by a generator queue",
    ["queue"],
)

QUEUE_CONSUME_BATCH_SIZE = Histogram(
    "genqueue_consume_batch_size",
    "Number of items in each batch yielded by consume()",
    ["queue"],
    buckets=(1, 2, 4, 8, 16, 32, 64, 128, 256, 512, 1024, 4096),
)
