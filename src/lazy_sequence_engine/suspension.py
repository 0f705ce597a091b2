"""Suspension points: run a production procedure one emitted value at a time."""

import logging
import queue
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator, Optional

from .models import END, Error, PulledValue, Value
from .protocols import LoggerProtocol

logger = logging.getLogger(__name__)

_RESUME = object()
_ABANDON = object()


class _Abandoned(BaseException):
    """Raised inside an abandoned producer to unwind it, like GeneratorExit."""


class _Raised:
    """Non-Exception BaseException carried from the worker to the consumer."""

    def __init__(self, exception: BaseException):
        self.exception = exception


class Yielder:
    """
    Handle passed to yielder-style production procedures.

    ``yielder.emit(value)`` and ``yielder << value`` hand a value to the
    consumer and block until it asks for the next one.
    """

    def __init__(self, emit: Callable[[Any], None]):
        self._emit = emit

    def emit(self, value: Any) -> None:
        """Emit one value and wait for the next pull."""
        self._emit(value)

    def __call__(self, value: Any) -> None:
        self._emit(value)

    def __lshift__(self, value: Any) -> "Yielder":
        self._emit(value)
        return self


class SuspensionPoint(ABC):
    """Abstract base class for cooperative producer scheduling."""

    @abstractmethod
    def resume(self) -> PulledValue:
        """Start or resume the procedure until it emits, returns or raises.

        Returns:
            Value for an emitted value, END on normal return, Error on failure

        Raises:
            BaseException: A non-Exception raised by the procedure (SystemExit,
                KeyboardInterrupt ...); the point is finished afterwards
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Abandon the procedure and release what it holds."""
        pass


class ThreadedSuspensionPoint(SuspensionPoint):
    """
    Runs a yielder-style procedure on a worker thread with a rendezvous handoff.

    The worker is only a resumable stack: every emit blocks the worker until
    the consumer resumes it, and every resume blocks the consumer until the
    worker emits, so exactly one side runs at a time.
    """

    def __init__(
        self,
        procedure: Callable[[Yielder], Any],
        thread_name: str = "lazyseq-producer",
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize suspension point.

        Args:
            procedure: Callable receiving a Yielder
            thread_name: Name for the worker thread
            logger: Logger instance (defaults to module logger)
        """
        self._procedure = procedure
        self._thread_name = thread_name
        self._logger = logger or logging.getLogger(__name__)
        self._to_producer: "queue.Queue[object]" = queue.Queue(maxsize=1)
        self._to_consumer: "queue.Queue[object]" = queue.Queue(maxsize=1)
        self._thread: Optional[threading.Thread] = None
        self._suspended = False
        self._finished = False
        self._abandoned = False

    def resume(self) -> PulledValue:
        if self._finished or self._abandoned:
            return END
        if self._thread is None:
            self._thread = threading.Thread(
                target=self._run, name=self._thread_name, daemon=True
            )
            self._logger.debug(f"Starting producer thread {self._thread_name}")
            self._thread.start()
        else:
            self._to_producer.put(_RESUME)

        pulled = self._to_consumer.get()
        self._suspended = isinstance(pulled, Value)
        if not self._suspended:
            self._finished = True
            self._thread.join()
        if isinstance(pulled, _Raised):
            raise pulled.exception
        return pulled

    def close(self) -> None:
        if self._abandoned:
            return
        self._abandoned = True
        if self._thread is None or not self._suspended:
            return
        self._suspended = False
        self._logger.debug(f"Abandoning suspended producer {self._thread_name}")
        self._to_producer.put(_ABANDON)
        if threading.current_thread() is not self._thread:
            self._thread.join()

    def _run(self) -> None:
        try:
            self._procedure(Yielder(self._emit))
        except _Abandoned:
            self._logger.debug(f"Producer {self._thread_name} unwound after abandon")
            return
        except Exception as exc:
            self._to_consumer.put(Error(exc))
            return
        except BaseException as exc:
            self._to_consumer.put(_Raised(exc))
            return
        self._to_consumer.put(END)

    def _emit(self, value: Any) -> None:
        if self._abandoned:
            raise _Abandoned()
        self._to_consumer.put(Value(value))
        if self._to_producer.get() is _ABANDON:
            raise _Abandoned()


class NativeSuspensionPoint(SuspensionPoint):
    """Drives a Python generator function; ``yield`` is the emit call."""

    def __init__(
        self,
        procedure: Callable[[], Iterator[Any]],
        logger: Optional[LoggerProtocol] = None,
    ):
        self._procedure = procedure
        self._logger = logger or logging.getLogger(__name__)
        self._iterator: Optional[Iterator[Any]] = None
        self._finished = False

    def resume(self) -> PulledValue:
        if self._finished:
            return END
        try:
            if self._iterator is None:
                self._iterator = iter(self._procedure())
            value = next(self._iterator)
        except StopIteration:
            self._finished = True
            return END
        except Exception as exc:
            self._finished = True
            return Error(exc)
        except BaseException:
            self._finished = True
            raise
        return Value(value)

    def close(self) -> None:
        self._finished = True
        close = getattr(self._iterator, "close", None)
        if close is not None:
            self._logger.debug("Closing native producer")
            close()
