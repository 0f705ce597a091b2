"""Stock production procedures and generator factories."""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence

from faker import Faker

from .config import get_engine_config
from .generator import Generator
from .suspension import Yielder

logger = logging.getLogger(__name__)

DEFAULT_RECORD_FIELDS = ("name", "email", "city", "country", "job", "company")


def naturals(start: int = 0) -> Generator:
    """Generator counting ``start, start + 1, ...`` forever."""

    def count(yielder: Yielder) -> None:
        x = start
        while True:
            yielder << x
            x += 1

    return Generator(count, name="naturals")


def fibonacci() -> Generator:
    """Generator producing Fibonacci numbers forever: 1, 1, 2, 3, 5, ..."""

    def fib(yielder: Yielder) -> None:
        a = b = 1
        while True:
            yielder << a
            a, b = b, a + b

    return Generator(fib, name="fibonacci")


def cycle(*states: Any) -> Generator:
    """Generator repeating ``states`` forever, e.g. a traffic light."""
    if not states:
        raise ValueError("cycle needs at least one state")

    def cycle_states():
        while True:
            yield from states

    return Generator(cycle_states, name="cycle")


def from_iterable(iterable: Iterable[Any]) -> Generator:
    """
    Generator over an existing collection.

    Rewinding re-iterates ``iterable``; a one-shot iterator cannot restart
    and simply continues where it left off.
    """

    def each():
        yield from iterable

    return Generator(each, name=f"from_{type(iterable).__name__}")


enum_for = from_iterable


def fake_records(
    seed: Optional[int] = None,
    fields: Sequence[str] = DEFAULT_RECORD_FIELDS,
) -> Generator:
    """
    Generator of fake records (dicts) produced with Faker, forever.

    Every run reseeds its own Faker instance, so a rewind replays the same
    records.

    Args:
        seed: Random seed for reproducibility (defaults to configuration)
        fields: Faker provider names to include as columns
    """
    if seed is None:
        seed = get_engine_config().faker_seed
    faker = Faker()
    missing = [name for name in fields if not callable(getattr(faker, name, None))]
    if missing:
        raise ValueError(f"Unknown Faker providers: {missing}")

    def records(yielder: Yielder) -> None:
        faker.seed_instance(seed)
        logger.debug(f"Generating fake records with seed {seed}")
        record_id = 0
        while True:
            record: Dict[str, Any] = {"id": record_id}
            for name in fields:
                record[name] = getattr(faker, name)()
            yielder << record
            record_id += 1

    return Generator(records, name="fake_records")
