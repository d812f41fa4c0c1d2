"""
Right-anchored alignment of the candle and indicator series.

Each indicator needs a different number of warm-up bars, so the valid
parts of the series have different lengths.  All of them end on the
last candle, so keeping the trailing ``min_length`` rows of each puts
row ``k`` of every series on the same candle.  Rows are matched by
position, not by timestamp.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from .log import logger


@dataclass(frozen=True)
class AlignedSeries:
    candles: pd.DataFrame
    ema: pd.Series
    macd: pd.DataFrame
    williams_r: pd.Series
    positions: np.ndarray  # sorted-candle position of each aligned row

    def __len__(self) -> int:
        return len(self.candles)


def _tail(obj, length: int):
    return obj.iloc[len(obj) - length:]


def align_series(
    candles: pd.DataFrame,
    ema: pd.Series,
    macd: pd.DataFrame,
    williams_r: pd.Series,
) -> AlignedSeries:
    """
    Truncate the four inputs to their common trailing length and
    re-index them 0..min_length-1.  The MACD frame gets a fresh
    zero-based ``index`` column after truncation.
    """
    min_length = min(len(candles), len(ema), len(macd), len(williams_r))
    candles = _tail(candles, min_length)
    ema = _tail(ema, min_length)
    macd = _tail(macd, min_length)
    williams_r = _tail(williams_r, min_length)

    for name, series in (("ema", ema), ("macd", macd), ("williams_r", williams_r)):
        if not series.index.equals(candles.index):
            logger.warning(
                "%s rows do not sit on the same candle positions as the candles; "
                "alignment stays positional", name,
            )

    positions = candles.index.to_numpy()
    macd = macd.reset_index(drop=True)
    macd["index"] = np.arange(min_length)
    return AlignedSeries(
        candles=candles.reset_index(drop=True),
        ema=ema.reset_index(drop=True),
        macd=macd,
        williams_r=williams_r.reset_index(drop=True),
        positions=positions,
    )
