import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def gradient_256():
    """256x256 image whose value is x + y scaled into [0, 255]."""
    yy, xx = np.mgrid[0:256, 0:256]
    return ((xx + yy) // 2).astype(np.uint8)


@pytest.fixture
def noisy_odd(rng):
    """Random image with dimensions not divisible by the default grid."""
    return rng.integers(0, 256, size=(61, 83), dtype=np.uint8)
