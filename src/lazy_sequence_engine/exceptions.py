"""Error taxonomy for the lazy sequence engine.

Producer failures travel through pipelines as ``Error`` pull results and are
only raised, as ``ProducerError``, by the materialization layer. Contract
violations (``MisuseError``) are raised immediately at the offending call.
Each exception carries a stable ``error_code``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class LazySequenceError(Exception):
    """Base class for lazy sequence engine errors."""

    message: str
    error_code: str

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class ProducerError(LazySequenceError):
    def __init__(self, original: BaseException, message: Optional[str] = None) -> None:
        super().__init__(
            message=message or f"Pipeline raised {type(original).__name__}: {original}",
            error_code="producer_failed",
        )
        self.original = original


class EmptyReduceError(LazySequenceError):
    def __init__(self, message: str = "reduce of empty sequence with no seed") -> None:
        super().__init__(message=message, error_code="empty_reduce")


class MisuseError(LazySequenceError):
    def __init__(self, message: str = "Generator used outside its single-consumer contract") -> None:
        super().__init__(message=message, error_code="misuse")
