from __future__ import annotations

import threading
from collections import Counter

import pytest

from genqueue.config import OverflowPolicy, QueueConfig
from genqueue.queue import GeneratorQueue

from ._harness import default_ops_per_thread, default_threads, run_workers


def _producer_worker(*, worker_id: int, queue: GeneratorQueue, ops: int) -> None:
    for seq in range(ops):
        queue.dispatch([(worker_id, seq)])


def _consumer_worker(
    *,
    worker_id: int,
    queue: GeneratorQueue,
    sink: list,
    sink_lock: threading.Lock,
) -> None:
    while True:
        batch = queue.take(3)
        if batch is None:
            return
        with sink_lock:
            sink.append(batch)


@pytest.mark.concurrency
def test_invariant_concurrent_dispatch_loses_nothing() -> None:
    threads = default_threads()
    ops = default_ops_per_thread()
    queue: GeneratorQueue = GeneratorQueue(
        config=QueueConfig(capacity=threads * ops, overflow_policy=OverflowPolicy.ERROR)
    )

    run_workers(threads=threads, worker_fn=_producer_worker, worker_kwargs={"queue": queue, "ops": ops})

    items = queue.take()
    assert items is not None
    assert len(items) == threads * ops
    # Per-producer order survives interleaving.
    for wid in range(threads):
        assert [seq for w, seq in items if w == wid] == list(range(ops))


@pytest.mark.concurrency
def test_invariant_concurrent_consume_never_duplicates() -> None:
    threads = default_threads()
    ops = default_ops_per_thread()
    total = threads * ops
    queue: GeneratorQueue = GeneratorQueue(
        list(range(total)), QueueConfig(capacity=total)
    )
    sink: list = []

    run_workers(
        threads=threads,
        worker_fn=_consumer_worker,
        worker_kwargs={"queue": queue, "sink": sink, "sink_lock": threading.Lock()},
    )

    consumed = [x for batch in sink for x in batch]
    assert Counter(consumed) == Counter(range(total))
    assert all(len(batch) <= 3 for batch in sink)
    assert len(queue) == 0
