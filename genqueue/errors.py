from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

INVALID_HOOK_ARGS = "INVALID_HOOK_ARGS"
INVALID_CONSUME_ARGS = "INVALID_CONSUME_ARGS"
MAX_SIZE_REACHED = "MAX_SIZE_REACHED"


class GenqueueError(Exception):
    """Base exception for genqueue errors."""


def map_error_details(
    user_message: str, details: Optional[Mapping[str, Any]] = None
) -> dict[str, Any]:
    """Merge caller details onto the base record; caller fields win."""
    return {
        "user_message": user_message,
        "original_error": None,
        **(details or {}),
    }


class GeneratorQueueError(GenqueueError):
    """
    Any failure reported by a GeneratorQueue.

    The ``details`` mapping is read-only once the error is built.
    """

    name = "GeneratorQueueError"

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self._details = MappingProxyType(map_error_details(message, details))

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild from a plain dict.
        return (self.__class__, (str(self), dict(self._details)))

    @property
    def details(self) -> Mapping[str, Any]:
        return self._details

    @property
    def user_message(self) -> str:
        return self._details["user_message"]

    @property
    def type(self) -> Optional[str]:
        return self._details.get("type")

    @property
    def input_errors(self) -> tuple:
        return tuple(self._details.get("input_errors", ()))

    @property
    def original_error(self) -> Optional[BaseException]:
        return self._details["original_error"]


class InvalidConfigurationError(GeneratorQueueError):
    """Configuration or initial state failed validation."""


class CapacityExceededError(GeneratorQueueError):
    """Dispatch pushed (or would push) the queue past its capacity."""

    @property
    def size(self) -> Optional[int]:
        return self._details.get("size")

    @property
    def capacity(self) -> Optional[int]:
        return self._details.get("capacity")
