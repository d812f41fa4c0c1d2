"""Technical indicators over the sorted candle series.

EMA, MACD and Williams %R are implemented directly with pandas/numpy.
Every function returns a Series/DataFrame on the same index as its
input with NaN during the warm-up bars; the ``*_warmup`` helpers say how
many leading bars that is, so callers can cut the valid tail by
position.  NaN produced by malformed prices is left in place and
propagates through the arithmetic instead of being dropped.
"""

from __future__ import annotations
import pandas as pd
import numpy as np


def _check_window(window: int, name: str = "window") -> None:
    if window < 1:
        raise ValueError(f"{name} must be a positive integer, got {window}")


def ema_warmup(window: int) -> int:
    return window - 1


def macd_warmup(fast: int, slow: int, signal: int) -> int:
    """Bars before the first row that has both a MACD and a signal value."""
    return max(fast, slow) - 1 + signal - 1


def williams_r_warmup(period: int) -> int:
    return period - 1


def compute_sma(close: pd.Series, window: int) -> pd.Series:
    """
    Compute the simple moving average (SMA) over the given window.
    Missing values in the initial window remain NaN to avoid look‑ahead.
    """
    _check_window(window)
    return close.rolling(window=window, min_periods=window).mean()


def _ema_recurrence(values: np.ndarray, window: int, start: int, seed: float) -> np.ndarray:
    # ewm() would skip NaN inputs; the recurrence here lets them propagate.
    alpha = 2.0 / (window + 1)
    out = np.full(len(values), np.nan)
    if start >= len(values):
        return out
    prev = seed
    out[start] = prev
    for i in range(start + 1, len(values)):
        prev = (values[i] - prev) * alpha + prev
        out[i] = prev
    return out


def compute_ema(close: pd.Series, window: int, seed: str = "sma") -> pd.Series:
    """
    Compute the exponential moving average (EMA) with smoothing factor
    ``2 / (window + 1)``.

    ``seed="sma"`` starts the recurrence at bar ``window - 1`` from the
    simple average of the first ``window`` values.  ``seed="first"``
    starts it from the very first value (the un-smoothed initialisation
    used for MACD) and masks the first ``window - 1`` outputs as warm-up.
    Both variants produce their first value at bar ``window - 1``.
    """
    _check_window(window)
    values = close.to_numpy(dtype=float)
    if seed == "sma":
        if len(values) < window:
            out = np.full(len(values), np.nan)
        else:
            start = ema_warmup(window)
            out = _ema_recurrence(values, window, start, compute_sma(close, window).iloc[start])
    elif seed == "first":
        if len(values) == 0:
            out = values.copy()
        else:
            out = _ema_recurrence(values, window, 0, values[0])
        out[:ema_warmup(window)] = np.nan
    else:
        raise ValueError("seed must be 'sma' or 'first'")
    return pd.Series(out, index=close.index)


def compute_macd(
    close: pd.Series, fast: int = 5, slow: int = 10, signal: int = 7
) -> pd.DataFrame:
    """
    Compute the Moving Average Convergence Divergence (MACD).
    Returns a DataFrame with columns macd, macd_signal and macd_histogram.

    Both the oscillator EMAs and the signal EMA are seeded from their
    first input rather than from an SMA.  The signal line starts at the
    first bar where the MACD line exists.
    """
    for name, window in (("fast", fast), ("slow", slow), ("signal", signal)):
        _check_window(window, name)
    ema_fast = compute_ema(close, fast, seed="first")
    ema_slow = compute_ema(close, slow, seed="first")
    macd_line = ema_fast - ema_slow
    first = max(fast, slow) - 1
    signal_line = compute_ema(macd_line.iloc[first:], signal, seed="first").reindex(macd_line.index)
    macd_histogram = macd_line - signal_line
    return pd.DataFrame(
        {"macd": macd_line, "macd_signal": signal_line, "macd_histogram": macd_histogram}
    )


def compute_williams_r(
    high: pd.Series, low: pd.Series, close: pd.Series, period: int = 20
) -> pd.Series:
    """
    Compute Williams %R over a rolling window of ``period`` bars:
    ``(highest high - close) / (highest high - lowest low) * -100``.
    Ranges from -100 (close at the low) to 0 (close at the high).  A flat
    window divides by zero and yields NaN or -inf rather than raising.
    """
    _check_window(period, "period")
    highest = high.rolling(window=period, min_periods=period).max()
    lowest = low.rolling(window=period, min_periods=period).min()
    return (highest - close) / (highest - lowest) * -100
