from .config import (
    DEFAULT_CAPACITY,
    HARD_MAX_QUEUE_SIZE,
    InputCheck,
    OverflowPolicy,
    QueueConfig,
    QueueOrdering,
    validate_queue_args,
)
from .errors import (
    INVALID_CONSUME_ARGS,
    INVALID_HOOK_ARGS,
    MAX_SIZE_REACHED,
    CapacityExceededError,
    GeneratorQueueError,
    GenqueueError,
    InvalidConfigurationError,
)
from .queue import GeneratorQueue

__all__ = [
    "DEFAULT_CAPACITY",
    "HARD_MAX_QUEUE_SIZE",
    "INVALID_CONSUME_ARGS",
    "INVALID_HOOK_ARGS",
    "MAX_SIZE_REACHED",
    "CapacityExceededError",
    "GeneratorQueue",
    "GeneratorQueueError",
    "GenqueueError",
    "InputCheck",
    "InvalidConfigurationError",
    "OverflowPolicy",
    "QueueConfig",
    "QueueOrdering",
    "validate_queue_args",
]
