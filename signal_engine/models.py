"""Record types shared by every pipeline stage."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class SignalAction(str, Enum):
    """Trading decision attached to an aligned bar."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


@dataclass(frozen=True)
class Candle:
    open: float
    close: float
    low: float
    high: float
    timestamp: str


@dataclass(frozen=True)
class SignalOutput:
    """
    One aligned bar: the raw candle, the indicator values that were used
    to classify it, and the resulting decision.
    """
    open: float
    close: float
    low: float
    high: float
    timestamp: str
    ema: float
    ema_buy: float
    ema_sell: float
    macd: float
    macd_signal: float
    macd_histogram: float
    williams_r: float
    is_intersecting: bool
    signal: SignalAction

    def to_dict(self) -> Dict[str, Any]:
        """Serialise using the camelCase keys consumers of the signal feed expect."""
        return {
            "open": self.open,
            "close": self.close,
            "low": self.low,
            "high": self.high,
            "timestamp": self.timestamp,
            "ema": self.ema,
            "emaBuy": self.ema_buy,
            "emaSell": self.ema_sell,
            "macd": self.macd,
            "macdSignal": self.macd_signal,
            "macdHistogram": self.macd_histogram,
            "williamsR": self.williams_r,
            "isIntersecting": self.is_intersecting,
            "signal": SignalAction(self.signal).value,
        }
