import numpy as np
import pandas as pd

from signal_engine.intersections import detect_intersections, interior_crossing


def test_crossing_segments():
    assert interior_crossing((0, 0), (1, 1), (0, 1), (1, 0))


def test_touch_at_end_is_not_a_crossing():
    assert not interior_crossing((0, 0), (1, 1), (0, 1), (1, 1))


def test_touch_at_start_is_not_a_crossing():
    assert not interior_crossing((0, 0), (1, 1), (0, 0), (1, 2))


def test_parallel_and_coincident_segments():
    assert not interior_crossing((0, 0), (1, 1), (0, 1), (1, 2))
    assert not interior_crossing((0, 0), (1, 1), (0, 0), (1, 1))


def test_nan_is_not_a_crossing():
    assert not interior_crossing((0, np.nan), (1, 1), (0, 1), (1, 0))


def test_vectorised_inputs():
    x0 = np.array([0.0, 1.0])
    x1 = np.array([1.0, 2.0])
    res = interior_crossing(
        (x0, np.array([-1.0, 1.0])), (x1, np.array([1.0, 2.0])),
        (x0, np.array([0.0, 0.0])), (x1, np.array([0.0, 0.0])),
    )
    assert res.tolist() == [True, False]


def _macd_frame(macd, signal):
    return pd.DataFrame(
        {"macd": macd, "macd_signal": signal, "index": range(len(macd))}
    )


def test_detect_marks_later_bar():
    frame = _macd_frame([-1.0, 1.0, 2.0, -1.0, -2.0], [0.0] * 5)
    assert detect_intersections(frame).tolist() == [False, True, False, True, False]


def test_detect_ignores_touches_on_a_bar():
    frame = _macd_frame([-1.0, 0.0, 1.0], [0.0, 0.0, 0.0])
    assert not detect_intersections(frame).any()


def test_detect_flat_lines_never_cross():
    frame = _macd_frame([0.0] * 4, [0.0] * 4)
    assert not detect_intersections(frame).any()


def test_detect_short_frames():
    assert detect_intersections(_macd_frame([1.0], [0.0])).tolist() == [False]
    assert detect_intersections(_macd_frame([], [])).tolist() == []
