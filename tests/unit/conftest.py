from __future__ import annotations

from typing import Callable

import numpy as np
import pytest

from needlematch.io import encode_image

NoiseFactory = Callable[..., np.ndarray]


def _noise_image(height: int, width: int, seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


@pytest.fixture
def make_noise() -> NoiseFactory:
    return _noise_image


@pytest.fixture
def haystack() -> np.ndarray:
    return _noise_image(80, 120, seed=0)


@pytest.fixture
def haystack_png(haystack: np.ndarray) -> bytes:
    return encode_image(haystack)
