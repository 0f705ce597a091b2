"""Protocol definitions for dependency inversion."""

from typing import Protocol

from .models import PulledValue


class PullSource(Protocol):
    """Anything exposing the pull contract: generators and combinators."""

    def next_value(self) -> PulledValue:
        """Advance once and return a Value, END or Error."""
        ...

    def rewind(self) -> None:
        """Restart the sequence from its beginning."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging."""

    def info(self, message: str) -> None:
        """Log info message."""
        ...

    def debug(self, message: str) -> None:
        """Log debug message."""
        ...

    def warning(self, message: str) -> None:
        """Log warning message."""
        ...

    def error(self, message: str) -> None:
        """Log error message."""
        ...
