"""
Turn loosely-typed candle records into canonical ``Candle`` objects.

Upstream producers disagree on field names and on types (exchange APIs
commonly send prices as strings), so every numeric field goes through a
permissive string-to-float parse: a leading number is taken if present,
anything else becomes NaN.  Nothing here raises on bad values.
"""
from __future__ import annotations

import math
import numbers
import re
from collections.abc import Iterable, Mapping
from typing import Any, List

import pandas as pd

from .config import SignalOptions
from .models import Candle

_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")

CANDLE_COLUMNS = ["open", "close", "low", "high", "timestamp"]


def parse_float(value: Any) -> float:
    """
    Parse the leading decimal number of ``str(value)``.

    ``"12.5abc"`` -> 12.5, ``"1e3"`` -> 1000.0, ``"-Infinity"`` -> -inf,
    ``"abc"``, ``None`` and ``True`` -> nan.
    """
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return float(value)
    m = _LEADING_FLOAT.match(str(value))
    if m is None:
        return math.nan
    text = m.group(1)
    if text.endswith("Infinity"):
        return -math.inf if text.startswith("-") else math.inf
    return float(text)


def _field(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _records(records: Any) -> Iterable[Any]:
    if isinstance(records, pd.DataFrame):
        frame = records if isinstance(records.index, pd.RangeIndex) else records.reset_index()
        return frame.to_dict("records")
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise TypeError(f"candles must be a sequence of records, got {type(records).__name__}")
    return records


def normalize_candles(records: Any, options: SignalOptions) -> List[Candle]:
    """
    Map ``records`` onto canonical candles and sort them by timestamp.

    The sort compares timestamps as plain strings (ISO-8601 sorts
    chronologically that way) and is stable, so records sharing a
    timestamp keep their input order.
    """
    candles = [
        Candle(
            open=parse_float(_field(r, options.open_key)),
            close=parse_float(_field(r, options.close_key)),
            low=parse_float(_field(r, options.low_key)),
            high=parse_float(_field(r, options.high_key)),
            timestamp=str(_field(r, options.timestamp_key)),
        )
        for r in _records(records)
    ]
    return sorted(candles, key=lambda c: c.timestamp)


def candles_to_frame(candles: List[Candle]) -> pd.DataFrame:
    """Return the candles as a DataFrame indexed by their sorted position."""
    frame = pd.DataFrame(
        {
            "open": [c.open for c in candles],
            "close": [c.close for c in candles],
            "low": [c.low for c in candles],
            "high": [c.high for c in candles],
            "timestamp": [c.timestamp for c in candles],
        },
        columns=CANDLE_COLUMNS,
    )
    for col in ("open", "close", "low", "high"):
        frame[col] = frame[col].astype(float)
    return frame
