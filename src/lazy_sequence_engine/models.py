"""Data models for pull results and generator lifecycle."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class GeneratorState(str, Enum):
    """Generator run state enumeration."""

    NOT_STARTED = "not_started"
    SUSPENDED = "suspended"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Value:
    """A value produced by one pull."""

    value: Any


@dataclass(frozen=True)
class End:
    """End-of-sequence marker."""

    def __repr__(self) -> str:
        return "END"


@dataclass(frozen=True)
class Error:
    """Failure carried by a pull instead of being raised."""

    exception: BaseException

    def __eq__(self, other) -> bool:
        return isinstance(other, Error) and other.exception is self.exception

    def __hash__(self) -> int:
        return id(self.exception)


END = End()

PulledValue = Union[Value, End, Error]


def is_value(pulled: PulledValue) -> bool:
    """Return True if the pull produced a value."""
    return isinstance(pulled, Value)


def is_terminal(pulled: PulledValue) -> bool:
    """Return True if the pull ended the sequence (End or Error)."""
    return not isinstance(pulled, Value)
