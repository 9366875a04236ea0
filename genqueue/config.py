from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from .errors import INVALID_HOOK_ARGS, InvalidConfigurationError

DEFAULT_CAPACITY = 1024

# Upper bound of an indexable sequence length (unsigned 32-bit), kept as the
# hard ceiling for capacity.
HARD_MAX_QUEUE_SIZE = 4294967295

DEFAULT_ENV_PREFIX = "GENQUEUE_"


class OverflowPolicy(str, Enum):
    ERROR = "error"
    ALLOW = "allow"
    REJECT = "reject"


class QueueOrdering(str, Enum):
    FIFO = "FIFO"


@dataclass(frozen=True)
class InputCheck:
    """Outcome of one configuration predicate."""
    input_name: str
    valid: bool


def _is_valid_capacity(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 < value < HARD_MAX_QUEUE_SIZE


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_overflow_policy(value: Any) -> bool:
    if isinstance(value, OverflowPolicy):
        return True
    return isinstance(value, str) and value in {p.value for p in OverflowPolicy}


def _is_fifo(value: Any) -> bool:
    return isinstance(value, str) and value == QueueOrdering.FIFO.value


def _is_ordered_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


# Aliases share a predicate; keys missing from this table are rejected.
QUEUE_ARG_VALIDATORS: Mapping[str, Callable[[Any], bool]] = {
    "capacity": _is_valid_capacity,
    "queue_max_size": _is_valid_capacity,
    "throw_error_on_max_size_reach": _is_bool,
    "overflow_policy": _is_overflow_policy,
    "ordering": _is_fifo,
    "kind": _is_fifo,
    "initial_state": _is_ordered_sequence,
}


def check_queue_args(inputs: Mapping[str, Any]) -> list[InputCheck]:
    """
    Evaluate every supplied input against its predicate.

    Raises:
        InvalidConfigurationError: If any key has no known predicate.
    """
    unknown = sorted(k for k in inputs if k not in QUEUE_ARG_VALIDATORS)
    if unknown:
        raise InvalidConfigurationError(
            "Unknown configuration key(s): " + ", ".join(unknown),
            {"type": INVALID_HOOK_ARGS, "unknown_keys": tuple(unknown)},
        )

    return [
        InputCheck(input_name=name, valid=QUEUE_ARG_VALIDATORS[name](value))
        for name, value in inputs.items()
    ]


def validate_queue_args(inputs: Mapping[str, Any]) -> None:
    """
    Raise InvalidConfigurationError listing every input that failed.

    All inputs are evaluated before raising; passing inputs are left out of
    ``input_errors``.
    """
    input_errors = tuple(c for c in check_queue_args(inputs) if not c.valid)
    if not input_errors:
        return

    raise InvalidConfigurationError(
        "Invalid arguments passed to GeneratorQueue()",
        {"input_errors": input_errors, "type": INVALID_HOOK_ARGS},
    )


# Option names that spell the same setting; supplying both is ambiguous.
_ALIASED_OPTIONS = (("capacity", "queue_max_size"), ("ordering", "kind"))


def _reject_option_conflicts(options: Mapping[str, Any]) -> None:
    if "initial_state" in options:
        raise InvalidConfigurationError(
            "initial_state is not a QueueConfig option; pass it to GeneratorQueue",
            {
                "type": INVALID_HOOK_ARGS,
                "input_errors": (InputCheck(input_name="initial_state", valid=False),),
            },
        )

    conflicts = [pair for pair in _ALIASED_OPTIONS if all(k in options for k in pair)]
    if conflicts:
        raise InvalidConfigurationError(
            "Conflicting configuration keys: "
            + "; ".join(" and ".join(pair) for pair in conflicts),
            {
                "type": INVALID_HOOK_ARGS,
                "input_errors": tuple(
                    InputCheck(input_name=name, valid=False)
                    for pair in conflicts
                    for name in pair
                ),
            },
        )


def _normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
    if "overflow_policy" in options:
        policy = options["overflow_policy"]
    elif "throw_error_on_max_size_reach" in options:
        policy = (
            OverflowPolicy.ERROR
            if options["throw_error_on_max_size_reach"]
            else OverflowPolicy.ALLOW
        )
    else:
        policy = OverflowPolicy.ERROR

    return {
        "capacity": options.get("capacity", options.get("queue_max_size", DEFAULT_CAPACITY)),
        "overflow_policy": policy,
        "ordering": options.get("ordering", options.get("kind", QueueOrdering.FIFO)),
    }


@dataclass(frozen=True)
class QueueConfig:
    capacity: int = DEFAULT_CAPACITY
    overflow_policy: OverflowPolicy = OverflowPolicy.ERROR
    ordering: QueueOrdering = QueueOrdering.FIFO

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        validate_queue_args(
            {
                "capacity": self.capacity,
                "overflow_policy": self.overflow_policy,
                "ordering": self.ordering,
            }
        )
        object.__setattr__(self, "overflow_policy", OverflowPolicy(self.overflow_policy))
        object.__setattr__(self, "ordering", QueueOrdering(self.ordering))

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> QueueConfig:
        """
        Build a config from loosely named options.

        Accepts ``queue_max_size`` for ``capacity``, ``kind`` for ``ordering``
        and ``throw_error_on_max_size_reach`` (True -> ERROR, False -> ALLOW)
        when ``overflow_policy`` is not given.

        Raises:
            InvalidConfigurationError: If an option is invalid, both names of
                an aliased option are given, or ``initial_state`` is supplied
        """
        options = dict(options or {})
        validate_queue_args(options)
        _reject_option_conflicts(options)
        return cls(**_normalize_options(options))

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = DEFAULT_ENV_PREFIX,
    ) -> QueueConfig:
        """
        Build a config from ``{prefix}CAPACITY``, ``{prefix}OVERFLOW_POLICY``
        and ``{prefix}ORDERING``. Unset or empty variables keep the defaults.
        """
        env = os.environ if environ is None else environ
        options: dict[str, Any] = {}

        raw_capacity = env.get(f"{prefix}CAPACITY")
        if raw_capacity:
            try:
                options["capacity"] = int(raw_capacity)
            except ValueError:
                # Left as a string so validation reports it as a capacity error.
                options["capacity"] = raw_capacity

        raw_policy = env.get(f"{prefix}OVERFLOW_POLICY")
        if raw_policy:
            options["overflow_policy"] = raw_policy.strip().lower()

        raw_ordering = env.get(f"{prefix}ORDERING")
        if raw_ordering:
            options["ordering"] = raw_ordering.strip().upper()

        return cls.from_options(options)
