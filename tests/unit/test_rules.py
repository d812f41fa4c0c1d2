import numpy as np
import pandas as pd
import pytest

from signal_engine.models import SignalAction
from signal_engine.rules import classify_crossings, ema_bands


def test_ema_bands():
    bands = ema_bands(pd.Series([100.0, 200.0]), 0.005, 0.01)
    assert bands["ema_buy"].tolist() == pytest.approx([99.5, 199.0])
    assert bands["ema_sell"].tolist() == pytest.approx([101.0, 202.0])


def test_classify_crossings():
    close = pd.Series([200.0, 101.0, 99.0, 100.0, 101.0])
    ema_buy = pd.Series([99.5] * 5)
    ema_sell = pd.Series([100.5] * 5)
    wr = pd.Series([-10.0, -10.0, -90.0, -50.0, np.nan])
    crossing = pd.Series([False, True, True, True, True])

    out = classify_crossings(close, ema_buy, ema_sell, wr, crossing)

    assert out.tolist() == ["hold", "sell", "buy", "hold", "hold"]
    assert out.iloc[1] == SignalAction.SELL


def test_thresholds_are_inclusive():
    close = pd.Series([100.5, 99.5])
    out = classify_crossings(
        close,
        pd.Series([99.5, 99.5]),
        pd.Series([100.5, 100.5]),
        pd.Series([-20.0, -80.0]),
        pd.Series([True, True]),
    )
    assert out.tolist() == ["sell", "buy"]


def test_sell_takes_priority_over_buy():
    out = classify_crossings(
        pd.Series([100.0]),
        pd.Series([100.0]),
        pd.Series([100.0]),
        pd.Series([-50.0]),
        pd.Series([True]),
        overbought=-50.0,
        oversold=-50.0,
    )
    assert out.tolist() == ["sell"]


def test_non_crossings_hold():
    out = classify_crossings(
        pd.Series([1000.0, 1.0]),
        pd.Series([99.5, 99.5]),
        pd.Series([100.5, 100.5]),
        pd.Series([0.0, -100.0]),
        pd.Series([False, False]),
    )
    assert out.tolist() == ["hold", "hold"]
