"""Trading signals from OHLC candles.

This package turns an unordered batch of candles into a time-ordered
list of buy/sell/hold decisions.  Decisions are taken on MACD/signal
line crossings, filtered by an EMA band and Williams %R.  All functions
are side‑effect free and deterministic when given the same inputs.
"""

from .config import SignalOptions, resolve_options
from .models import Candle, SignalAction, SignalOutput
from .normalizer import candles_to_frame, normalize_candles, parse_float
from .indicators import (
    compute_sma,
    compute_ema,
    compute_macd,
    compute_williams_r,
    ema_warmup,
    macd_warmup,
    williams_r_warmup,
)
from .aligner import AlignedSeries, align_series
from .intersections import detect_intersections, interior_crossing
from .rules import classify_crossings, ema_bands
from .pipeline import build_signal_frame, generate_signals

__all__ = [
    "SignalOptions",
    "resolve_options",
    "Candle",
    "SignalAction",
    "SignalOutput",
    "candles_to_frame",
    "normalize_candles",
    "parse_float",
    "compute_sma",
    "compute_ema",
    "compute_macd",
    "compute_williams_r",
    "ema_warmup",
    "macd_warmup",
    "williams_r_warmup",
    "AlignedSeries",
    "align_series",
    "detect_intersections",
    "interior_crossing",
    "classify_crossings",
    "ema_bands",
    "build_signal_frame",
    "generate_signals",
]
