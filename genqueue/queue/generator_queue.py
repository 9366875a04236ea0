from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Generic, Mapping, Optional, TypeVar

from ..config import InputCheck, OverflowPolicy, QueueConfig, validate_queue_args
from ..errors import (
    INVALID_CONSUME_ARGS,
    INVALID_HOOK_ARGS,
    MAX_SIZE_REACHED,
    CapacityExceededError,
    GeneratorQueueError,
    InvalidConfigurationError,
)
from .metrics import (
    observe_capacity_exceeded,
    observe_consume,
    observe_dispatch,
    observe_size,
)
from .store import QueueStore

T = TypeVar("T")

DEFAULT_QUEUE_NAME = "default"


class GeneratorQueue(Generic[T]):
    """
    Bounded FIFO buffer drained in batches.

    Producers append batches with dispatch(); consumers drain with consume(),
    which hands back a one-shot generator yielding at most one batch.

    Capacity is checked on write only:
    - ERROR: the batch is appended, then CapacityExceededError is raised if
      the queue grew past capacity. The appended items stay queued.
    - ALLOW: capacity is advisory; dispatch never fails.
    - REJECT: the batch is refused before anything is appended.

    A queue built with an initial state larger than its capacity is accepted
    as-is; the next dispatch reports the overflow.

    One instance owns its store for its whole lifetime. To reset, discard
    the instance and build a new one.

    Usage:
        queue = GeneratorQueue(config=QueueConfig(capacity=16))
        queue.dispatch(["a", "b"])
        for batch in queue.consume(limit=10):
            handle(batch)
    """

    def __init__(
        self,
        initial_state: Optional[Sequence[T]] = None,
        config: Optional[QueueConfig] = None,
        *,
        name: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Args:
            initial_state: Items the queue starts with, oldest first. Must be
                a list or tuple.
            config: Validated queue configuration; defaults to QueueConfig().
            name: Label used in log records and metrics. Unnamed queues share
                the "default" label and do not report the size gauge.
            logger: Logger receiving consume diagnostics.

        Raises:
            InvalidConfigurationError: If initial_state is not a list or tuple
        """
        if initial_state is None:
            initial_state = []
        validate_queue_args({"initial_state": initial_state})

        self.config = config if config is not None else QueueConfig()
        self.name = name if name is not None else DEFAULT_QUEUE_NAME
        self._reports_size = name is not None
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self._store: QueueStore[T] = QueueStore(initial_state)
        self._lock = threading.Lock()

        self._observe_size(len(self._store))

    @classmethod
    def from_options(
        cls,
        initial_state: Optional[Sequence[T]] = None,
        options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> GeneratorQueue[T]:
        """
        Validate loosely named options and the initial state in one pass, so
        ``input_errors`` lists every failing input.

        The initial state may also be passed as ``options["initial_state"]``.

        Raises:
            InvalidConfigurationError: If any option or the initial state is invalid
                or initial_state is given both ways
        """
        options = dict(options or {})
        if "initial_state" in options:
            if initial_state is not None:
                raise InvalidConfigurationError(
                    "initial_state given both as an argument and as an option",
                    {
                        "type": INVALID_HOOK_ARGS,
                        "input_errors": (InputCheck(input_name="initial_state", valid=False),),
                    },
                )
            initial_state = options.pop("initial_state")

        validate_queue_args(
            {**options, "initial_state": [] if initial_state is None else initial_state}
        )
        return cls(initial_state, QueueConfig.from_options(options), **kwargs)

    @property
    def size(self) -> int:
        return len(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def snapshot(self) -> list[T]:
        """Copy of the queued items, oldest first. Does not consume."""
        with self._lock:
            return self._store.snapshot()

    def dispatch(self, batch: Iterable[T]) -> int:
        """
        Append ``batch`` to the end of the queue, preserving its order.

        An empty batch is a no-op that still reports the current size.

        Returns:
            Number of items held after the append

        Raises:
            CapacityExceededError: Under ERROR when the queue now holds more than
                capacity (the items are kept); under REJECT when the append
                would exceed capacity (nothing is appended)
        """
        items = list(batch)
        capacity = self.config.capacity
        policy = self.config.overflow_policy

        with self._lock:
            if policy == OverflowPolicy.REJECT:
                projected = len(self._store) + len(items)
                if projected > capacity:
                    raise self._capacity_exceeded(projected, stored=False)
            size = self._store.extend(items)
            self._observe_size(size)

        self._emit(observe_dispatch, self.name, len(items))

        if size > capacity and policy == OverflowPolicy.ERROR:
            raise self._capacity_exceeded(size, stored=True)

        return size

    def consume(self, limit: Optional[int] = None) -> Iterator[list[T]]:
        """
        Drain the oldest items as a single batch.

        The returned generator touches the queue only when first advanced,
        yields at most one batch, and is then exhausted. An empty queue gives
        an empty generator. Every call starts an independent drain.

        Args:
            limit: Maximum items to take. None or 0 takes everything.

        Raises:
            GeneratorQueueError: If limit is not None or a non-negative integer
        """
        if limit is not None and (
            isinstance(limit, bool) or not isinstance(limit, int) or limit < 0
        ):
            raise GeneratorQueueError(
                "consume() limit must be a non-negative integer or None",
                {"type": INVALID_CONSUME_ARGS, "limit": limit},
            )
        return self._consume(limit or None)

    def take(self, limit: Optional[int] = None) -> Optional[list[T]]:
        """Eager form of consume(): the batch, or None when the queue is empty."""
        return next(self.consume(limit), None)

    def _consume(self, limit: Optional[int]) -> Iterator[list[T]]:
        with self._lock:
            if not self._store:
                return
            batch = self._store.take(limit)
            remaining = len(self._store)
            self._observe_size(remaining)

        self._log.debug(
            "CONSUMED_ELEMENTS amount=%d queue=%s",
            len(batch),
            self.name,
            extra={"event": "CONSUMED_ELEMENTS", "amount": len(batch), "queue": self.name},
        )
        self._emit(observe_consume, self.name, len(batch))

        yield batch

    def _capacity_exceeded(self, size: int, *, stored: bool) -> CapacityExceededError:
        policy = self.config.overflow_policy
        capacity = self.config.capacity

        self._log.warning(
            "Queue %s over capacity (%d > %d, policy=%s, stored=%s)",
            self.name,
            size,
            capacity,
            policy.value,
            stored,
        )
        self._emit(observe_capacity_exceeded, self.name, policy.value)

        return CapacityExceededError(
            f"Queue max size reached: {size} > {capacity}",
            {
                "type": MAX_SIZE_REACHED,
                "size": size,
                "capacity": capacity,
                "policy": policy.value,
                "stored": stored,
            },
        )

    def _observe_size(self, size: int) -> None:
        # A shared label would report whichever unnamed queue changed last.
        if self._reports_size:
            self._emit(observe_size, self.name, size)

    def _emit(self, observe: Callable[..., None], *args: Any) -> None:
        # Metric failures must not mask queue results.
        try:
            observe(*args)
        except Exception:
            self._log.debug("Failed to record queue metric", exc_info=True)
