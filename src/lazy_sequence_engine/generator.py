"""Restartable, pull-based generator over a production procedure."""

import inspect
import itertools
import logging
import weakref
from typing import Any, Callable, Optional

from .config import EngineConfig, get_engine_config
from .enumerable import Enumerable
from .exceptions import MisuseError
from .models import END, End, Error, GeneratorState, PulledValue, Value
from .protocols import LoggerProtocol
from .suspension import NativeSuspensionPoint, SuspensionPoint, ThreadedSuspensionPoint

_generator_ids = itertools.count(1)


class Generator(Enumerable):
    """
    Lazy sequence built from a production procedure.

    A procedure is either yielder style, ``procedure(yielder)`` calling
    ``yielder << value``, or a zero-argument generator function. Values are
    produced only when pulled with ``next_value()``; ``rewind()`` starts the
    procedure over. Instances are single-consumer and not reentrant: a pull
    or rewind issued while another pull on the same generator is running
    raises ``MisuseError``.
    """

    def __init__(
        self,
        procedure: Callable[..., Any],
        native: Optional[bool] = None,
        name: Optional[str] = None,
        config: Optional[EngineConfig] = None,
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize generator.

        Args:
            procedure: Production procedure
            native: Treat procedure as a generator function; auto-detected when None
            name: Name used in logs and for the producer thread
            config: Engine configuration; only read for the default name
            logger: Logger instance (defaults to module logger)
        """
        if not callable(procedure):
            raise TypeError("procedure must be callable")
        self._procedure = procedure
        self._native = inspect.isgeneratorfunction(procedure) if native is None else native
        self._logger = logger or logging.getLogger(__name__)
        if name is None:
            prefix = (config or get_engine_config()).thread_name_prefix
            name = f"{prefix}-{next(_generator_ids)}"
        self.name = name

        self._state = GeneratorState.NOT_STARTED
        self._suspension: Optional[SuspensionPoint] = None
        self._finalizer: Optional[weakref.finalize] = None
        self._last_value: Any = None
        self._failure: Optional[Error] = None
        self._peeked: Optional[PulledValue] = None

    @property
    def state(self) -> GeneratorState:
        return self._state

    @property
    def last_value(self) -> Any:
        """Most recently pulled value, None before the first one."""
        return self._last_value

    def next_value(self) -> PulledValue:
        self._check_not_running("next_value")
        if self._peeked is not None:
            pulled, self._peeked = self._peeked, None
            return pulled
        return self._advance()

    def peek(self) -> PulledValue:
        """Return the next pull result without consuming it."""
        self._check_not_running("peek")
        if self._peeked is None:
            self._peeked = self._advance()
        return self._peeked

    def rewind(self) -> None:
        self._check_not_running("rewind")
        self._release()
        self._state = GeneratorState.NOT_STARTED
        self._last_value = None
        self._failure = None
        self._peeked = None
        self._logger.debug(f"Generator {self.name} rewound")

    def close(self) -> None:
        """Release the running procedure.

        A suspended generator goes back to NOT_STARTED, so a later pull runs
        the procedure again from the beginning. Completed and failed
        generators keep their terminal result.
        """
        self._check_not_running("close")
        self._release()
        if self._state in (GeneratorState.SUSPENDED, GeneratorState.RUNNING):
            self._state = GeneratorState.NOT_STARTED
            self._peeked = None

    def _advance(self) -> PulledValue:
        if self._state is GeneratorState.COMPLETED:
            return END
        if self._state is GeneratorState.FAILED:
            return self._failure

        if self._suspension is None:
            self._suspension = self._make_suspension()
            self._logger.debug(f"Generator {self.name} started")

        self._state = GeneratorState.RUNNING
        try:
            pulled = self._suspension.resume()
        except BaseException as exc:
            # KeyboardInterrupt, SystemExit and friends propagate after failing
            self._fail(Error(exc))
            raise

        if isinstance(pulled, Value):
            self._state = GeneratorState.SUSPENDED
            self._last_value = pulled.value
        elif isinstance(pulled, End):
            self._state = GeneratorState.COMPLETED
            self._release()
            self._logger.debug(f"Generator {self.name} completed")
        else:
            self._fail(pulled)
            # A reentrant pull made from inside the procedure
            if isinstance(pulled.exception, MisuseError):
                raise pulled.exception
        return pulled

    def _fail(self, failure: Error) -> None:
        self._state = GeneratorState.FAILED
        self._failure = failure
        self._release()
        self._logger.warning(
            f"Generator {self.name} failed: {type(failure.exception).__name__}: {failure.exception}"
        )

    def _make_suspension(self) -> SuspensionPoint:
        if self._native:
            suspension: SuspensionPoint = NativeSuspensionPoint(self._procedure, logger=self._logger)
        else:
            suspension = ThreadedSuspensionPoint(
                self._procedure, thread_name=self.name, logger=self._logger
            )
        self._finalizer = weakref.finalize(self, suspension.close)
        return suspension

    def _release(self) -> None:
        if self._finalizer is not None:
            self._finalizer()
            self._finalizer = None
        self._suspension = None

    def _check_not_running(self, operation: str) -> None:
        if self._state is GeneratorState.RUNNING:
            raise MisuseError(f"{operation}() called on generator {self.name} while a pull is in progress")

    def __repr__(self) -> str:
        return f"Generator(name={self.name!r}, state={self._state.value})"
