"""
End-to-end signal generation.

Runs the five stages in order: normalise and sort the candles, compute
EMA / MACD / Williams %R on the closes, align the valid tails of all
series, detect MACD/signal crossings and classify each crossing.  The
whole pipeline is pure: same candles and options, same output.
"""
from __future__ import annotations

from typing import Any, List, Optional

import pandas as pd

from .aligner import align_series
from .config import SignalOptions, resolve_options
from .indicators import (
    compute_ema,
    compute_macd,
    compute_williams_r,
    ema_warmup,
    macd_warmup,
    williams_r_warmup,
)
from .intersections import detect_intersections
from .log import logger
from .models import SignalAction, SignalOutput
from .normalizer import candles_to_frame, normalize_candles
from .rules import classify_crossings, ema_bands

SIGNAL_COLUMNS = [
    "open",
    "close",
    "low",
    "high",
    "timestamp",
    "ema",
    "ema_buy",
    "ema_sell",
    "macd",
    "macd_signal",
    "macd_histogram",
    "williams_r",
    "is_intersecting",
    "signal",
]


def build_signal_frame(
    candles: Any, options: Optional[SignalOptions] = None, **overrides: Any
) -> pd.DataFrame:
    """
    Run the pipeline and return one row per aligned bar, oldest first,
    with the columns listed in ``SIGNAL_COLUMNS``.  Too few candles for
    the longest warm-up gives an empty frame.
    """
    opts = resolve_options(options, **overrides)
    df = candles_to_frame(normalize_candles(candles, opts))
    close = df["close"]

    ema = compute_ema(close, opts.ema_period).iloc[ema_warmup(opts.ema_period):]
    macd = compute_macd(
        close, opts.macd_fast_period, opts.macd_slow_period, opts.macd_signal_period
    ).iloc[macd_warmup(opts.macd_fast_period, opts.macd_slow_period, opts.macd_signal_period):]
    williams_r = compute_williams_r(
        df["high"], df["low"], close, opts.williams_r_period
    ).iloc[williams_r_warmup(opts.williams_r_period):]
    logger.debug(
        "series lengths: candles=%d ema=%d macd=%d williams_r=%d",
        len(df), len(ema), len(macd), len(williams_r),
    )

    aligned = align_series(df, ema, macd, williams_r)
    if len(aligned) == 0 and len(df) > 0:
        logger.info("%d candles are not enough for the configured periods; no signals", len(df))

    is_intersecting = detect_intersections(aligned.macd)
    bands = ema_bands(aligned.ema, opts.ema_buy_ratio, opts.ema_sell_ratio)
    signal = classify_crossings(
        aligned.candles["close"],
        bands["ema_buy"],
        bands["ema_sell"],
        aligned.williams_r,
        is_intersecting,
    )

    out = aligned.candles.copy()
    out["ema"] = aligned.ema
    out["ema_buy"] = bands["ema_buy"]
    out["ema_sell"] = bands["ema_sell"]
    out["macd"] = aligned.macd["macd"]
    out["macd_signal"] = aligned.macd["macd_signal"]
    out["macd_histogram"] = aligned.macd["macd_histogram"]
    out["williams_r"] = aligned.williams_r
    out["is_intersecting"] = is_intersecting
    out["signal"] = signal
    logger.debug(
        "%d bars, %d crossings, %d buy, %d sell",
        len(out),
        int(is_intersecting.sum()),
        int((signal == SignalAction.BUY).sum()),
        int((signal == SignalAction.SELL).sum()),
    )
    return out[SIGNAL_COLUMNS]


def generate_signals(
    candles: Any, options: Optional[SignalOptions] = None, **overrides: Any
) -> List[SignalOutput]:
    """
    Compute buy/sell/hold decisions for a batch of candles.

    ``candles`` is any sequence of records exposing the configured
    open/close/low/high/timestamp fields (as keys or attributes), or a
    DataFrame.  ``options`` may be a ``SignalOptions`` or a mapping;
    keyword overrides such as ``ema_period=50`` or
    ``timestampISO8601Key="openTimeInISO"`` are applied on top.
    """
    frame = build_signal_frame(candles, options, **overrides)
    return [
        SignalOutput(
            open=float(row.open),
            close=float(row.close),
            low=float(row.low),
            high=float(row.high),
            timestamp=row.timestamp,
            ema=float(row.ema),
            ema_buy=float(row.ema_buy),
            ema_sell=float(row.ema_sell),
            macd=float(row.macd),
            macd_signal=float(row.macd_signal),
            macd_histogram=float(row.macd_histogram),
            williams_r=float(row.williams_r),
            is_intersecting=bool(row.is_intersecting),
            signal=SignalAction(row.signal),
        )
        for row in frame.itertuples(index=False)
    ]
