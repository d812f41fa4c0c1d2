import logging

import pandas as pd

from signal_engine.aligner import align_series


def _candles(n):
    return pd.DataFrame(
        {
            "open": [float(i) for i in range(n)],
            "close": [float(i) for i in range(n)],
            "low": [float(i) for i in range(n)],
            "high": [float(i) for i in range(n)],
            "timestamp": [f"t{i:02d}" for i in range(n)],
        }
    )


def _macd(index):
    return pd.DataFrame(
        {"macd": [float(i) for i in index], "macd_signal": 0.0, "macd_histogram": 0.0},
        index=index,
    )


def test_align_keeps_trailing_rows():
    candles = _candles(10)
    ema = pd.Series([float(i) for i in range(3, 10)], index=range(3, 10))
    macd = _macd(range(5, 10))
    wr = pd.Series([-50.0] * 8, index=range(2, 10))

    aligned = align_series(candles, ema, macd, wr)

    assert len(aligned) == 5
    assert aligned.candles["timestamp"].tolist() == ["t05", "t06", "t07", "t08", "t09"]
    assert aligned.ema.tolist() == [5.0, 6.0, 7.0, 8.0, 9.0]
    assert aligned.macd["macd"].tolist() == [5.0, 6.0, 7.0, 8.0, 9.0]
    assert aligned.macd["index"].tolist() == [0, 1, 2, 3, 4]
    assert aligned.positions.tolist() == [5, 6, 7, 8, 9]
    for part in (aligned.candles, aligned.ema, aligned.macd, aligned.williams_r):
        assert list(part.index) == [0, 1, 2, 3, 4]


def test_align_empty_when_any_series_is_empty():
    candles = _candles(4)
    ema = pd.Series([], dtype=float)
    aligned = align_series(candles, ema, _macd(range(2, 4)), pd.Series([1.0], index=[3]))
    assert len(aligned) == 0
    assert aligned.macd["index"].tolist() == []
    assert aligned.positions.tolist() == []


def test_align_does_not_touch_inputs():
    candles = _candles(6)
    macd = _macd(range(2, 6))
    align_series(candles, pd.Series([1.0] * 6), macd, pd.Series([1.0] * 6))
    assert "index" not in macd.columns
    assert list(candles.index) == list(range(6))


def test_align_warns_when_positions_differ(caplog):
    candles = _candles(5)
    # ema rows labelled with positions that are not the trailing candles
    ema = pd.Series([1.0, 2.0, 3.0], index=[0, 1, 2])
    with caplog.at_level(logging.WARNING, logger="signal_engine"):
        aligned = align_series(candles, ema, _macd(range(2, 5)), pd.Series([1.0] * 3, index=range(2, 5)))
    assert len(aligned) == 3
    # alignment stays positional
    assert aligned.ema.tolist() == [1.0, 2.0, 3.0]
    assert "ema rows do not sit" in caplog.text
