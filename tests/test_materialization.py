"""Tests for materialization module."""

from itertools import islice

import pytest

from lazy_sequence_engine.exceptions import EmptyReduceError, ProducerError
from lazy_sequence_engine.generator import Generator
from lazy_sequence_engine.materialization import each, first, inject, take_n, to_list
from lazy_sequence_engine.sources import from_iterable, naturals


def empty():
    """Generator whose first pull is END."""
    return Generator(lambda yielder: None)


def broken():
    boom = KeyError("missing")

    def procedure(yielder):
        yielder << 1
        raise boom

    return Generator(procedure), boom


def test_to_list_finite():
    """Test collecting a finite sequence."""
    assert to_list(from_iterable([3, 1, 2])) == [3, 1, 2]


def test_to_list_raises_producer_error():
    """Test that an Error result surfaces as ProducerError chained to the original."""
    gen, boom = broken()

    with pytest.raises(ProducerError, match="producer_failed") as excinfo:
        to_list(gen.map(lambda x: x + 1))

    assert excinfo.value.original is boom
    assert excinfo.value.__cause__ is boom
    assert excinfo.value.error_code == "producer_failed"


def test_take_n_on_infinite_source():
    """Test that take_n is bounded on an infinite generator."""
    assert take_n(naturals(), 4) == [0, 1, 2, 3]


def test_take_n_shorter_sequence():
    """Test that take_n returns everything available before END."""
    assert take_n(from_iterable("ab"), 10) == ["a", "b"]


def test_first():
    """Test first on infinite and empty sequences."""
    assert first(naturals(start=7)) == 7
    assert first(empty()) is None
    assert first(empty(), default="nothing") == "nothing"


def test_inject_with_seed():
    """Test folding with an initial value."""
    assert inject(from_iterable([1, 2, 3, 4, 5]), lambda total, x: total + x, 0) == 15
    assert from_iterable([1, 2, 3]).inject(lambda acc, x: acc * x, 10) == 60


def test_inject_without_seed():
    """Test that the first value seeds the fold when no initial value is given."""
    assert from_iterable(["a", "b", "c"]).reduce(lambda acc, x: acc + x) == "abc"


def test_inject_empty_without_seed():
    """Test that reducing an empty sequence with no seed raises EmptyReduceError."""
    with pytest.raises(EmptyReduceError, match="no seed") as excinfo:
        inject(empty(), lambda acc, x: acc + x)

    assert excinfo.value.error_code == "empty_reduce"


def test_inject_empty_with_seed():
    """Test that the seed is returned for an empty sequence."""
    assert empty().inject(lambda acc, x: acc + x, 0) == 0


def test_inject_propagates_producer_error():
    """Test that inject surfaces producer failures."""
    gen, _ = broken()

    with pytest.raises(ProducerError):
        gen.inject(lambda acc, x: acc + x, 0)


def test_each_calls_block():
    """Test that each calls the block per value and returns the count."""
    seen = []

    count = each(from_iterable(["India", "Canada"]), seen.append)

    assert count == 2
    assert seen == ["India", "Canada"]


def test_iteration_protocol():
    """Test that pipelines work with for loops and itertools."""
    assert list(islice(naturals(), 5)) == [0, 1, 2, 3, 4]

    collected = []
    for value in from_iterable([1, 2, 3]).map(str):
        collected.append(value)
    assert collected == ["1", "2", "3"]


def test_iteration_raises_producer_error():
    """Test that iterating over a failing pipeline raises ProducerError."""
    gen, boom = broken()

    with pytest.raises(ProducerError) as excinfo:
        for _ in gen:
            pass

    assert excinfo.value.original is boom


def test_map_function_failure_message():
    """Test that a failing map function is reported as a pipeline failure."""
    with pytest.raises(ProducerError, match="Pipeline raised ZeroDivisionError"):
        from_iterable([1, 0]).map(lambda x: 1 // x).to_list()
