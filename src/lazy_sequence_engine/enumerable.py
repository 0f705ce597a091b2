"""Chainable sequence surface shared by generators and combinators."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator, List, Optional

from .models import End, PulledValue, Value

_MISSING = object()


class Enumerable(ABC):
    """
    Base class for anything exposing the pull contract.

    Combinator methods (``map``, ``select``, ``take`` ...) are lazy and return
    a new Enumerable owning this one. Materialization methods (``to_list``,
    ``take_n``, ``inject`` ...) drive the pipeline. Every method except the
    bounded ones (``take_n``, ``first``) requires a finite sequence.
    """

    @abstractmethod
    def next_value(self) -> PulledValue:
        """Advance once and return a Value, END or Error."""
        pass

    @abstractmethod
    def rewind(self) -> None:
        """Restart the sequence from its beginning."""
        pass

    # Lazy combinators

    def map(self, func: Callable[[Any], Any]) -> "Enumerable":
        from .combinators import Map

        return Map(self, func)

    def select(self, predicate: Callable[[Any], bool]) -> "Enumerable":
        from .combinators import Select

        return Select(self, predicate)

    filter = select

    def take(self, n: int) -> "Enumerable":
        from .combinators import Take

        return Take(self, n)

    def drop(self, n: int) -> "Enumerable":
        from .combinators import Drop

        return Drop(self, n)

    def each_with_index(self, offset: int = 0) -> "Enumerable":
        from .combinators import EachWithIndex

        return EachWithIndex(self, offset)

    with_index = each_with_index

    def each_slice(self, size: int) -> "Enumerable":
        from .combinators import EachSlice

        return EachSlice(self, size)

    # Materialization

    def to_list(self) -> List[Any]:
        from .materialization import to_list

        return to_list(self)

    def take_n(self, n: int) -> List[Any]:
        from .materialization import take_n

        return take_n(self, n)

    def first(self, default: Any = None) -> Any:
        from .materialization import first

        return first(self, default)

    def inject(self, func: Callable[[Any, Any], Any], initial: Any = _MISSING) -> Any:
        from .materialization import inject

        if initial is _MISSING:
            return inject(self, func)
        return inject(self, func, initial)

    reduce = inject

    def each(self, block: Callable[[Any], Any]) -> int:
        from .materialization import each

        return each(self, block)

    def to_frame(self, limit: Optional[int] = None):
        from .tabular import to_frame

        return to_frame(self, limit)

    def to_arrow(self, limit: Optional[int] = None):
        from .tabular import to_arrow

        return to_arrow(self, limit)

    def frames(self, batch_size: Optional[int] = None) -> "Enumerable":
        from .tabular import frames

        return frames(self, batch_size)

    def __iter__(self) -> Iterator[Any]:
        from .materialization import raise_for_error

        while True:
            pulled = self.next_value()
            if isinstance(pulled, Value):
                yield pulled.value
            elif isinstance(pulled, End):
                return
            else:
                raise_for_error(pulled)
