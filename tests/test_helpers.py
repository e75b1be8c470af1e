import math

import pytest

from utils.helpers import clamp, distance, format_time, pulse_visible, wrap_angle


def test_format_time() -> None:
    assert format_time(None) == "--:--"
    assert format_time(0.0) == "00:00.00"
    assert format_time(65.25) == "01:05.25"
    assert format_time(125.5) == "02:05.50"


def test_wrap_angle() -> None:
    assert wrap_angle(-0.5) == pytest.approx(2 * math.pi - 0.5)
    assert wrap_angle(2 * math.pi) == 0.0
    assert wrap_angle(7.0) == pytest.approx(7.0 - 2 * math.pi)
    for angle in (-100.0, -1e-12, 0.0, 3.0, 50.0):
        assert 0.0 <= wrap_angle(angle) < 2 * math.pi


def test_pulse_visible() -> None:
    assert pulse_visible(0.1, 0.8, 0.625)
    assert not pulse_visible(0.6, 0.8, 0.625)
    assert pulse_visible(0.9, 0.8, 0.625)


def test_small_math_helpers() -> None:
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert distance(0, 0, 3, 4) == pytest.approx(5.0)
