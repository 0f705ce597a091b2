"""Lazy Sequence Engine - restartable, pull-based generators and lazy combinators."""

__version__ = "0.1.0"

from .combinators import Combinator, Drop, EachSlice, EachWithIndex, Map, Select, Take
from .config import EngineConfig, get_engine_config, setup_logging
from .enumerable import Enumerable
from .exceptions import EmptyReduceError, LazySequenceError, MisuseError, ProducerError
from .generator import Generator
from .materialization import each, first, inject, reduce, take_n, to_list
from .models import END, End, Error, GeneratorState, PulledValue, Value
from .protocols import LoggerProtocol, PullSource
from .sources import cycle, enum_for, fake_records, fibonacci, from_iterable, naturals
from .suspension import NativeSuspensionPoint, SuspensionPoint, ThreadedSuspensionPoint, Yielder
from .tabular import frames, to_arrow, to_frame

__all__ = [
    # Models
    "Value",
    "End",
    "END",
    "Error",
    "PulledValue",
    "GeneratorState",
    # Errors
    "LazySequenceError",
    "ProducerError",
    "EmptyReduceError",
    "MisuseError",
    # Protocols
    "PullSource",
    "LoggerProtocol",
    # Suspension
    "Yielder",
    "SuspensionPoint",
    "ThreadedSuspensionPoint",
    "NativeSuspensionPoint",
    # Generator
    "Enumerable",
    "Generator",
    # Combinators
    "Combinator",
    "Map",
    "Select",
    "Take",
    "Drop",
    "EachWithIndex",
    "EachSlice",
    # Materialization
    "to_list",
    "take_n",
    "first",
    "inject",
    "reduce",
    "each",
    "to_frame",
    "to_arrow",
    "frames",
    # Sources
    "naturals",
    "fibonacci",
    "cycle",
    "from_iterable",
    "enum_for",
    "fake_records",
    # Config
    "EngineConfig",
    "get_engine_config",
    "setup_logging",
]
