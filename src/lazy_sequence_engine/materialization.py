"""Terminal operations that drive a pipeline to a concrete result.

Only ``take_n`` and ``first`` are bounded. Every other operation pulls until
END and therefore requires a source the caller knows to be finite; the
engine imposes no automatic bound.
"""

import logging
from typing import Any, Callable, List, NoReturn

from .combinators import Take
from .exceptions import EmptyReduceError, ProducerError
from .models import Error, PulledValue, Value
from .protocols import PullSource

logger = logging.getLogger(__name__)

_MISSING = object()


def raise_for_error(pulled: Error) -> NoReturn:
    """Surface an Error pull result to the caller as a ProducerError."""
    raise ProducerError(pulled.exception) from pulled.exception


def _values(source: PullSource):
    while True:
        pulled: PulledValue = source.next_value()
        if isinstance(pulled, Value):
            yield pulled.value
        elif isinstance(pulled, Error):
            raise_for_error(pulled)
        else:
            return


def to_list(source: PullSource) -> List[Any]:
    """Pull until END and collect the values. The source must be finite."""
    values = list(_values(source))
    logger.debug(f"Materialized {len(values)} values")
    return values


def take_n(source: PullSource, n: int) -> List[Any]:
    """Pull at most ``n`` values; safe on infinite sources."""
    return to_list(Take(source, n))


def first(source: PullSource, default: Any = None) -> Any:
    """Return the first value, or ``default`` if the sequence is empty."""
    values = to_list(Take(source, 1))
    return values[0] if values else default


def inject(source: PullSource, func: Callable[[Any, Any], Any], initial: Any = _MISSING) -> Any:
    """
    Fold the sequence with ``acc = func(acc, value)``. The source must be finite.

    Args:
        source: Pull source to consume
        func: Accumulator function
        initial: Seed; when omitted the first value seeds the fold

    Returns:
        The accumulated value

    Raises:
        EmptyReduceError: No seed was given and the sequence is empty
        ProducerError: The pipeline produced an Error
    """
    values = _values(source)
    if initial is _MISSING:
        try:
            accumulator = next(values)
        except StopIteration:
            raise EmptyReduceError() from None
    else:
        accumulator = initial

    for value in values:
        accumulator = func(accumulator, value)
    return accumulator


reduce = inject


def each(source: PullSource, block: Callable[[Any], Any]) -> int:
    """Call ``block`` with every value; returns how many values were seen."""
    count = 0
    for value in _values(source):
        block(value)
        count += 1
    return count
