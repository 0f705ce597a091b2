"""Lazy sequence combinators built on the pull contract."""

import logging
from abc import abstractmethod
from typing import Any, Callable, List, Optional

from .enumerable import Enumerable
from .exceptions import MisuseError
from .models import END, Error, PulledValue, Value
from .protocols import PullSource

logger = logging.getLogger(__name__)


class Combinator(Enumerable):
    """
    Base class for pipeline stages.

    A combinator exclusively owns its upstream and only ever pulls from it on
    demand. The first Error it sees (from upstream or from a user function)
    is latched and returned unchanged on every later pull.
    """

    def __init__(self, upstream: PullSource):
        self.upstream = upstream
        self._failure: Optional[Error] = None

    def next_value(self) -> PulledValue:
        if self._failure is not None:
            return self._failure
        try:
            pulled = self._pull()
        except MisuseError:
            raise
        except Exception as exc:
            logger.debug(f"{type(self).__name__} function raised {type(exc).__name__}: {exc}")
            pulled = Error(exc)
        if isinstance(pulled, Error):
            self._failure = pulled
        return pulled

    def rewind(self) -> None:
        self._failure = None
        self._reset()
        self.upstream.rewind()

    @abstractmethod
    def _pull(self) -> PulledValue:
        """Produce this stage's next result from the upstream."""
        pass

    def _reset(self) -> None:
        """Clear per-run cursor state."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.upstream!r})"


class Map(Combinator):
    """Applies a function to every value."""

    def __init__(self, upstream: PullSource, func: Callable[[Any], Any]):
        super().__init__(upstream)
        self.func = func

    def _pull(self) -> PulledValue:
        pulled = self.upstream.next_value()
        if isinstance(pulled, Value):
            return Value(self.func(pulled.value))
        return pulled


class Select(Combinator):
    """
    Keeps values satisfying a predicate.

    May pull any number of upstream values to find one that passes, but never
    pulls past it.
    """

    def __init__(self, upstream: PullSource, predicate: Callable[[Any], bool]):
        super().__init__(upstream)
        self.predicate = predicate

    def _pull(self) -> PulledValue:
        while True:
            pulled = self.upstream.next_value()
            if not isinstance(pulled, Value) or self.predicate(pulled.value):
                return pulled


class Take(Combinator):
    """Yields at most ``n`` values, then END without touching upstream again."""

    def __init__(self, upstream: PullSource, n: int):
        if n < 0:
            raise ValueError("n must be non-negative")
        super().__init__(upstream)
        self.n = n
        self._taken = 0

    def _pull(self) -> PulledValue:
        if self._taken >= self.n:
            return END
        pulled = self.upstream.next_value()
        if isinstance(pulled, Value):
            self._taken += 1
        return pulled

    def _reset(self) -> None:
        self._taken = 0


class Drop(Combinator):
    """Skips the first ``n`` values."""

    def __init__(self, upstream: PullSource, n: int):
        if n < 0:
            raise ValueError("n must be non-negative")
        super().__init__(upstream)
        self.n = n
        self._dropped = 0

    def _pull(self) -> PulledValue:
        while self._dropped < self.n:
            pulled = self.upstream.next_value()
            if not isinstance(pulled, Value):
                return pulled
            self._dropped += 1
        return self.upstream.next_value()

    def _reset(self) -> None:
        self._dropped = 0


class EachWithIndex(Combinator):
    """Pairs each value with an ordinal: ``(value, index)``."""

    def __init__(self, upstream: PullSource, offset: int = 0):
        super().__init__(upstream)
        self.offset = offset
        self._index = offset

    def _pull(self) -> PulledValue:
        pulled = self.upstream.next_value()
        if isinstance(pulled, Value):
            pulled = Value((pulled.value, self._index))
            self._index += 1
        return pulled

    def _reset(self) -> None:
        self._index = self.offset


class EachSlice(Combinator):
    """
    Groups consecutive values into lists of ``size``.

    The trailing partial group is emitted before END; an Error discards it.
    """

    def __init__(self, upstream: PullSource, size: int):
        if size <= 0:
            raise ValueError("size must be positive")
        super().__init__(upstream)
        self.size = size
        self._exhausted = False

    def _pull(self) -> PulledValue:
        if self._exhausted:
            return END
        batch: List[Any] = []
        while len(batch) < self.size:
            pulled = self.upstream.next_value()
            if isinstance(pulled, Error):
                return pulled
            if not isinstance(pulled, Value):
                self._exhausted = True
                break
            batch.append(pulled.value)

        # Yield remaining values
        if batch:
            return Value(batch)
        return END

    def _reset(self) -> None:
        self._exhausted = False
