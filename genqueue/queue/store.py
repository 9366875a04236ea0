from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class QueueStore(Generic[T]):
    """
    Ordered backing sequence owned by a single GeneratorQueue.

    The store copies its initial state so no outside reference can mutate it.
    It performs no locking; the owning queue serializes every call.
    """

    def __init__(self, initial_state: Optional[Iterable[T]] = None) -> None:
        self._items: list[T] = list(initial_state) if initial_state is not None else []

    def extend(self, batch: Iterable[T]) -> int:
        """Append ``batch`` in order and return the new size."""
        self._items.extend(batch)
        return len(self._items)

    def take(self, limit: Optional[int] = None) -> list[T]:
        """
        Remove and return the oldest ``limit`` items, or all of them when
        ``limit`` is None. Returns fewer items when the store holds less.
        """
        if limit is None:
            taken, self._items = self._items, []
            return taken

        taken = self._items[:limit]
        del self._items[:limit]
        return taken

    def snapshot(self) -> list[T]:
        """Return a copy of the current contents, oldest first."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
