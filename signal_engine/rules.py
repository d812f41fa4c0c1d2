"""
Classify MACD crossings into buy/sell decisions.

A crossing is only acted on when the close has left the EMA band and
Williams %R confirms the move:

* sell: %R at or above the overbought level and close at or above the
  upper band
* buy: %R at or below the oversold level and close at or below the
  lower band

Sell is checked first and wins if both hold.  Every other bar is hold.
"""
from __future__ import annotations

import pandas as pd

from .models import SignalAction

WILLIAMS_R_OVERBOUGHT = -20.0
WILLIAMS_R_OVERSOLD = -80.0


def ema_bands(ema: pd.Series, buy_ratio: float = 0.005, sell_ratio: float = 0.005) -> pd.DataFrame:
    """Buy band ``ratio`` below the EMA and sell band ``ratio`` above it."""
    return pd.DataFrame(
        {"ema_buy": ema - ema * buy_ratio, "ema_sell": ema + ema * sell_ratio}
    )


def classify_crossings(
    close: pd.Series,
    ema_buy: pd.Series,
    ema_sell: pd.Series,
    williams_r: pd.Series,
    is_intersecting: pd.Series,
    overbought: float = WILLIAMS_R_OVERBOUGHT,
    oversold: float = WILLIAMS_R_OVERSOLD,
) -> pd.Series:
    sell = is_intersecting & (williams_r >= overbought) & (close >= ema_sell)
    buy = is_intersecting & ~sell & (williams_r <= oversold) & (close <= ema_buy)
    s = pd.Series(SignalAction.HOLD, index=close.index, dtype=object, name="signal")
    s.loc[buy] = SignalAction.BUY
    s.loc[sell] = SignalAction.SELL
    return s
