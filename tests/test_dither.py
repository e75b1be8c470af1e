import random

import numpy as np
import pytest

from dither import DitherSampler


@pytest.fixture(scope="module")
def sampler():
    return DitherSampler()


def test_sample_is_bounded(sampler) -> None:
    rng = random.Random(0)
    for _ in range(300):
        uv = (rng.uniform(-50.0, 50.0), rng.uniform(-50.0, 50.0))
        level = rng.randrange(4)
        dot_count = rng.randrange(0, 300)
        value = sampler.sample(uv, level, dot_count)
        assert 0.0 <= value <= 1.0


def test_sample_peaks_on_dot_centre(sampler) -> None:
    assert sampler.sample((0.0, 0.0), 0, 4) == pytest.approx(1.0)
    assert sampler.sample((0.5, 0.5), 1, 16) == pytest.approx(1.0)
    assert sampler.sample((0.25, 0.0), 3, 256) == pytest.approx(1.0)


def test_sample_falls_off_between_dots(sampler) -> None:
    centre = sampler.sample((0.0, 0.0), 0, 1)
    between = sampler.sample((0.5, 0.5), 0, 1)
    assert between < centre


def test_sample_tiles_seamlessly(sampler) -> None:
    for uv in [(0.1, 0.7), (0.33, 0.91), (0.9, 0.05)]:
        shifted = (uv[0] + 3.0, uv[1] - 2.0)
        assert sampler.sample(shifted, 2, 40) == pytest.approx(sampler.sample(uv, 2, 40))


def test_zero_dots_sample_to_zero(sampler) -> None:
    assert sampler.sample((0.0, 0.0), 2, 0) == 0.0


def test_sample_rejects_bad_level(sampler) -> None:
    with pytest.raises(ValueError):
        sampler.sample((0.0, 0.0), 4, 10)


def test_select_level_boundaries(sampler) -> None:
    assert sampler.select_level(0.0) == (3, 0.0)
    assert sampler.select_level(1.0) == (0, 0.0)
    level, interp = sampler.select_level(0.5)
    assert level == 1
    assert interp == pytest.approx(0.5)


def test_select_level_stays_in_range(sampler) -> None:
    for nd in np.linspace(-0.5, 1.5, 201):
        level, interp = sampler.select_level(nd)
        assert 0 <= level <= 3
        assert 0.0 <= interp < 1.0


def test_dot_count_follows_brightness(sampler) -> None:
    assert sampler.dot_count_for(0, 0.0) == 1
    assert sampler.dot_count_for(1, 0.5) == 8
    assert sampler.dot_count_for(3, 1.0) == 256
    assert sampler.dot_count_for(3, 2.0) == 256


def test_dither_is_bounded(sampler) -> None:
    rng = random.Random(1)
    for _ in range(300):
        value = sampler.dither(rng.random(), (rng.uniform(-5, 5), rng.uniform(-5, 5)), rng.random())
        assert 0.0 <= value <= 1.0


def test_dither_without_blend_equals_plain_sample(sampler) -> None:
    uv = (0.37, 0.62)
    brightness = 0.4
    expected = sampler.sample(uv, 3, sampler.dot_count_for(3, brightness))
    assert sampler.dither(0.0, uv, brightness) == pytest.approx(expected)


def test_dither_blends_towards_finer_level(sampler) -> None:
    uv = (0.13, 0.71)
    brightness = 0.6
    # normalized distance 0.5 -> level 1, halfway to level 2
    coarse = sampler.sample(uv, 1, sampler.dot_count_for(1, brightness))
    fine = sampler.sample(uv, 2, sampler.dot_count_for(2, brightness))
    assert sampler.dither(0.5, uv, brightness) == pytest.approx(0.5 * coarse + 0.5 * fine)
