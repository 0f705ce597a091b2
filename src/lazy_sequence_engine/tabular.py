"""Materialize pipelines into pandas DataFrames and PyArrow tables."""

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

import pandas as pd
import pyarrow as pa

from .combinators import EachSlice, Map, Take
from .config import get_engine_config
from .enumerable import Enumerable
from .materialization import to_list
from .protocols import PullSource

logger = logging.getLogger(__name__)


def _as_row(value: Any) -> Dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return {"value": value}


def rows_to_frame(values: List[Any]) -> pd.DataFrame:
    """Convert pulled values to a DataFrame, one row per value."""
    return pd.DataFrame([_as_row(value) for value in values])


def to_frame(source: PullSource, limit: Optional[int] = None) -> pd.DataFrame:
    """
    Materialize values into a pandas DataFrame.

    Args:
        source: Pull source to consume
        limit: Maximum number of rows; None pulls until END (finite sources only)

    Returns:
        DataFrame with one row per value
    """
    if limit is not None:
        source = Take(source, limit)
    df = rows_to_frame(to_list(source))
    logger.info(f"Created DataFrame with {len(df):,} rows and {len(df.columns)} columns")
    return df


def to_arrow(source: PullSource, limit: Optional[int] = None) -> pa.Table:
    """Materialize values into a PyArrow table (see ``to_frame``)."""
    table = pa.Table.from_pandas(to_frame(source, limit), preserve_index=False)
    logger.debug(f"Created PyArrow table with {table.num_rows:,} rows and {table.num_columns} columns")
    return table


class _BatchFrames:
    """Numbers each batch as it is converted."""

    def __init__(self):
        self.batch_number = 0

    def __call__(self, batch: List[Any]) -> pd.DataFrame:
        self.batch_number += 1
        df = rows_to_frame(batch)
        df["batch_number"] = self.batch_number
        logger.info(f"Created DataFrame batch {self.batch_number} with {len(df)} records")
        return df


class _FrameMap(Map):
    def _reset(self) -> None:
        self.func.batch_number = 0


def frames(source: PullSource, batch_size: Optional[int] = None) -> Enumerable:
    """
    Lazily group values into DataFrames of ``batch_size`` rows.

    Safe on infinite sources as long as the result is bounded downstream,
    e.g. ``frames(source, 100).take(3)``.
    """
    if batch_size is None:
        batch_size = get_engine_config().frame_batch_size
    return _FrameMap(EachSlice(source, batch_size), _BatchFrames())
