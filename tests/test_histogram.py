import numpy as np
import pytest

from claheq.errors import ErrorKind, InvalidHistogramSizeError
from claheq.histogram import (
    GrayLevel,
    build_histogram,
    classify_gray_level,
    clip_histogram,
    clipped_excess,
    histogram_entropy,
    histogram_for_region,
    image_entropy,
    new_histogram,
)
from claheq.tiles import Tile


# ------------------------------- builder ------------------------------------ #

def test_build_counts_every_pixel(noisy_odd):
    h = build_histogram(noisy_odd)
    assert h.shape == (256,)
    assert h.sum() == noisy_odd.size
    assert h[noisy_odd[0, 0]] >= 1
    assert h[17] == np.count_nonzero(noisy_odd == 17)


def test_build_independent_of_traversal_order(noisy_odd):
    a = build_histogram(noisy_odd)
    b = build_histogram(noisy_odd.T.copy())
    c = build_histogram(noisy_odd[::-1, ::-1])
    np.testing.assert_array_equal(a, b)
    np.testing.assert_array_equal(a, c)


def test_build_accumulates_into_out():
    img = np.full((4, 4), 9, dtype=np.uint8)
    out = new_histogram()
    res = build_histogram(img, out=out)
    assert res is out
    build_histogram(img, out=out)
    assert out[9] == 32


def test_build_rejects_wrong_size_buffer_without_writing():
    img = np.zeros((3, 3), dtype=np.uint8)
    bad = np.zeros(255, dtype=np.int64)
    with pytest.raises(InvalidHistogramSizeError) as exc:
        build_histogram(img, out=bad)
    assert exc.value.kind is ErrorKind.INVALID_HISTOGRAM_SIZE
    assert not bad.any()


def test_build_rejects_non_uint8():
    with pytest.raises(TypeError):
        build_histogram(np.zeros((2, 2), dtype=np.uint16))


def test_histogram_for_region_matches_slice(noisy_odd):
    t = Tile(col=1, row=2, x=10, y=20, width=7, height=5)
    np.testing.assert_array_equal(
        histogram_for_region(noisy_odd, t),
        build_histogram(noisy_odd[20:25, 10:17]),
    )


def test_histogram_for_region_out_of_bounds(noisy_odd):
    t = Tile(col=0, row=0, x=80, y=0, width=10, height=1)
    with pytest.raises(ValueError):
        histogram_for_region(noisy_odd, t)


# ------------------------------- clipper ------------------------------------ #

def _random_hist(rng, total=5000):
    return np.bincount(rng.integers(0, 256, size=total) ** 2 % 256, minlength=256).astype(np.int64)


@pytest.mark.parametrize("limit", [0.5, 1, 3.7, 10, 25, 40.0, 100])
def test_clip_conserves_sum(rng, limit):
    h = _random_hist(rng)
    clipped = clip_histogram(h, limit)
    assert clipped.sum() == h.sum()


def test_clip_is_noop_when_limit_at_or_above_max(rng):
    h = _random_hist(rng)
    np.testing.assert_array_equal(clip_histogram(h, h.max()), h)
    np.testing.assert_array_equal(clip_histogram(h, h.max() + 0.5), h)


@pytest.mark.parametrize("limit", [0, -3.0])
def test_clip_disabled_for_non_positive_limit(rng, limit):
    h = _random_hist(rng)
    np.testing.assert_array_equal(clip_histogram(h, limit), h)
    assert clipped_excess(h, limit) == 0


def test_clip_does_not_modify_input(rng):
    h = _random_hist(rng)
    before = h.copy()
    clip_histogram(h, 5)
    np.testing.assert_array_equal(h, before)


def test_clip_spread_residual_goes_to_low_bins():
    h = np.zeros(256, dtype=np.int64)
    h[200] = 40 + 256 * 2 + 10      # excess = 522 -> 2 per bin, 10 residual
    clipped = clip_histogram(h, 40, residual="spread")
    assert clipped[200] == 40 + 2
    assert np.all(clipped[:10] == 3)
    assert np.all(clipped[10:200] == 2)
    assert clipped.sum() == h.sum()


def test_clip_drop_residual_loses_remainder():
    h = np.zeros(256, dtype=np.int64)
    h[200] = 40 + 256 * 2 + 10
    clipped = clip_histogram(h, 40, residual="drop")
    assert clipped.sum() == h.sum() - 10
    assert np.all(clipped[:200] == 2)


def test_clip_single_pass_may_exceed_limit_again():
    h = np.zeros(256, dtype=np.int64)
    h[0] = 10 + 256 * 5
    clipped = clip_histogram(h, 10)
    assert clipped[0] == 15


def test_clipped_excess_counts_above_cap():
    h = np.zeros(256, dtype=np.int64)
    h[[3, 4, 5]] = [12, 10, 7]
    assert clipped_excess(h, 10) == 2
    assert clipped_excess(h, 6.9) == 6 + 4 + 1


def test_clip_rejects_bad_policy_and_size():
    with pytest.raises(ValueError):
        clip_histogram(np.zeros(256, dtype=np.int64), 4, residual="wrap")
    with pytest.raises(InvalidHistogramSizeError):
        clip_histogram(np.zeros(128, dtype=np.int64), 4)


# -------------------------------- stats ------------------------------------- #

def test_entropy_of_uniform_and_constant():
    assert histogram_entropy(np.ones(256, dtype=np.int64)) == pytest.approx(8.0)
    h = np.zeros(256, dtype=np.int64)
    h[42] = 100
    assert histogram_entropy(h) == 0.0
    assert histogram_entropy(np.zeros(256, dtype=np.int64)) == 0.0


def test_image_entropy_two_levels():
    img = np.zeros((4, 4), dtype=np.uint8)
    img[:2] = 255
    assert image_entropy(img) == pytest.approx(1.0)


def test_classify_gray_level():
    h = np.zeros(256, dtype=np.int64)
    h[10] = 5
    assert classify_gray_level(h) is GrayLevel.LOW
    h[120] = 6
    assert classify_gray_level(h) is GrayLevel.MIDDLE
    h[250] = 7
    assert classify_gray_level(h) is GrayLevel.HIGH


def test_classify_gray_level_tie_prefers_darker():
    h = np.zeros(256, dtype=np.int64)
    h[0] = 3
    h[255] = 3
    assert classify_gray_level(h) is GrayLevel.LOW
