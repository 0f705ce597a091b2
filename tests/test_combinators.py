"""Tests for combinators module."""

import pytest

from lazy_sequence_engine.combinators import Combinator, EachSlice, Map, Take
from lazy_sequence_engine.generator import Generator
from lazy_sequence_engine.models import END, Error, GeneratorState, Value
from lazy_sequence_engine.sources import from_iterable, naturals


def failing_after_one(runs=None):
    """Generator emitting 1, then raising on the next pull."""

    def procedure(yielder):
        if runs is not None:
            runs.append(1)
        yielder << 1
        raise RuntimeError("producer broke")

    return Generator(procedure)


def test_map_is_lazy_under_take():
    """Test that map(f).take(3) calls f exactly three times on an infinite source."""
    calls = []

    def expensive(x):
        calls.append(x)
        return x * x

    result = naturals().map(expensive).take(3).to_list()

    assert result == [0, 1, 4]
    assert calls == [0, 1, 2]


def test_take_zero_never_starts_upstream():
    """Test that take(0) returns END without starting the producer."""
    started = []

    def procedure(yielder):
        started.append(True)
        yielder << 1

    gen = Generator(procedure)

    assert gen.take(0).next_value() == END
    assert started == []
    assert gen.state is GeneratorState.NOT_STARTED


def test_take_stops_pulling_after_n():
    """Test that take does not pull upstream once n values were produced."""
    gen = naturals()
    taken = gen.take(2)

    assert taken.to_list() == [0, 1]
    assert taken.next_value() == END
    assert gen.last_value == 1


def test_select_matches_eager_reference():
    """Test that select then map preserves order like an eager list comprehension."""
    inputs = [5, 3, 8, 1, 9, 2, 7, 4, 6, 0]

    def pred(x):
        return x % 3 != 0

    def f(x):
        return f"<{x}>"

    result = from_iterable(inputs).select(pred).map(f).to_list()

    assert result == [f(x) for x in inputs if pred(x)]


def test_filtered_counter():
    """Test select(even).take(4) over an infinite counter."""
    assert naturals().select(lambda x: x % 2 == 0).take(4).to_list() == [0, 2, 4, 6]


def test_select_does_not_pull_past_match():
    """Test that select stops pulling at the first qualifying value."""
    produced = []

    def procedure(yielder):
        x = 0
        while True:
            produced.append(x)
            yielder << x
            x += 1

    selected = Generator(procedure).select(lambda x: x >= 3)

    assert selected.next_value() == Value(3)
    assert produced == [0, 1, 2, 3]


def test_filter_alias():
    """Test that filter is an alias of select."""
    assert from_iterable(range(6)).filter(lambda x: x > 3).to_list() == [4, 5]


def test_error_propagates_through_map():
    """Test that an error passes through map and stays latched."""
    runs = []
    doubled = failing_after_one(runs).map(lambda x: x * 2)

    assert doubled.next_value() == Value(2)

    error = doubled.next_value()
    assert isinstance(error, Error)
    assert isinstance(error.exception, RuntimeError)

    assert doubled.next_value() is error
    assert doubled.next_value() is error
    assert runs == [1]


def test_map_function_error_becomes_error_result():
    """Test that an exception from the map function is returned as Error."""
    gen = naturals()
    mapped = gen.map(lambda x: 10 // (x - 1))

    assert mapped.next_value() == Value(-10)
    error = mapped.next_value()
    assert isinstance(error, Error)
    assert isinstance(error.exception, ZeroDivisionError)

    assert mapped.next_value() is error
    assert gen.last_value == 1


def test_take_passes_error_through():
    """Test that take forwards upstream errors."""
    taken = failing_after_one().take(5)

    assert taken.next_value() == Value(1)
    assert isinstance(taken.next_value(), Error)


def test_drop_then_map_then_first():
    """Test drop(2).map(upcase).first() over a three-element enumeration."""
    assert from_iterable(["x", "y", "z"]).drop(2).map(str.upper).first() == "Z"


def test_drop_more_than_available():
    """Test that dropping past the end yields END."""
    assert from_iterable([1, 2]).drop(5).to_list() == []


def test_each_with_index():
    """Test pairing values with a zero-based index."""
    countries = ["India", "Canada", "America", "Iraq"]

    result = from_iterable(countries).each_with_index().to_list()

    assert result == [("India", 0), ("Canada", 1), ("America", 2), ("Iraq", 3)]


def test_each_with_index_offset_and_map():
    """Test with_index(offset) composed with map."""
    result = (
        from_iterable(["a", "b"])
        .with_index(1)
        .map(lambda pair: f"{pair[1]}:{pair[0]}")
        .to_list()
    )

    assert result == ["1:a", "2:b"]


def test_each_slice():
    """Test grouping values into fixed-size lists with a trailing partial list."""
    assert from_iterable(range(7)).each_slice(3).to_list() == [[0, 1, 2], [3, 4, 5], [6]]


def test_each_slice_on_infinite_source():
    """Test that each_slice is lazy over an infinite source."""
    assert naturals().each_slice(2).take_n(2) == [[0, 1], [2, 3]]


def test_each_slice_error_discards_partial_batch():
    """Test that an error in the middle of a batch is returned as Error."""
    sliced = failing_after_one().each_slice(3)

    assert isinstance(sliced.next_value(), Error)


def test_composition_take_map_order_equivalence():
    """Test that take-then-map and map-then-take agree on output."""

    def f(x):
        return x + 100

    assert naturals().map(f).take(5).to_list() == naturals().take(5).map(f).to_list()


def test_pipeline_rewind():
    """Test that rewinding a pipeline resets every stage and the root generator."""
    pipeline = naturals().map(lambda x: x * 10).each_with_index().take(2)

    assert pipeline.to_list() == [(0, 0), (10, 1)]

    pipeline.rewind()

    assert pipeline.to_list() == [(0, 0), (10, 1)]


def test_combinators_compose_directly():
    """Test building a pipeline from combinator classes."""
    pipeline = Take(Map(EachSlice(from_iterable(range(10)), 4), sum), 2)

    assert pipeline.to_list() == [6, 22]


@pytest.mark.parametrize(
    "build",
    [
        lambda source: source.take(-1),
        lambda source: source.drop(-1),
        lambda source: source.each_slice(0),
    ],
)
def test_invalid_counts_rejected(build):
    """Test that negative counts and empty slices are rejected."""
    with pytest.raises(ValueError):
        build(naturals())


def test_combinator_requires_pull():
    """Test that a combinator subclass must implement _pull."""

    class Incomplete(Combinator):
        pass

    with pytest.raises(TypeError):
        Incomplete(naturals())
