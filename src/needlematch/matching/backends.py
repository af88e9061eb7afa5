"""
Capability interfaces for the image operations a match delegates, with the
OpenCV implementations used in production.
"""

from __future__ import annotations

from typing import Protocol, Tuple, Union

import cv2
import numpy as np

from ..errors import DecodeError, InternalFailure

Buffer = Union[bytes, bytearray, memoryview, np.ndarray]
Size = Tuple[int, int]
Peak = Tuple[float, Tuple[int, int]]


class ImageCodec(Protocol):
    def decode(self, data: Buffer, label: str) -> np.ndarray:
        """Decode ``data`` into a non-empty image; ``label`` names it in errors."""
        ...


class Resizer(Protocol):
    def resize(self, image: np.ndarray, size: Size) -> np.ndarray:
        """Resize ``image`` to ``size`` given as (width, height)."""
        ...


class Correlator(Protocol):
    def correlate(self, haystack: np.ndarray, needle: np.ndarray) -> np.ndarray:
        """Return the normalized correlation surface of ``needle`` over ``haystack``."""
        ...

    def peak(self, surface: np.ndarray) -> Peak:
        """Return the maximum value of ``surface`` and its (x, y) location."""
        ...


class OpenCVImageCodec:
    """
    Decodes encoded buffers (PNG, JPEG, ...) into 3-channel BGR arrays.
    """

    def __init__(self, flags: int = cv2.IMREAD_COLOR) -> None:
        self.flags = flags

    def decode(self, data: Buffer, label: str) -> np.ndarray:
        buffer = np.frombuffer(data, dtype=np.uint8) if not isinstance(data, np.ndarray) else data.ravel()
        if buffer.size == 0:
            raise DecodeError(f"failed to decode {label} image: buffer is empty")
        try:
            image = cv2.imdecode(buffer, self.flags)
        except cv2.error as exc:
            raise DecodeError(f"failed to decode {label} image: {exc}") from exc
        if image is None or image.size == 0:
            raise DecodeError(f"failed to decode {label} image: unsupported or corrupt data")
        return image


class OpenCVResizer:
    """
    Resizes with bilinear interpolation.
    """

    def __init__(self, interpolation: int = cv2.INTER_LINEAR) -> None:
        self.interpolation = interpolation

    def resize(self, image: np.ndarray, size: Size) -> np.ndarray:
        try:
            return cv2.resize(image, size, interpolation=self.interpolation)
        except cv2.error as exc:
            raise InternalFailure(f"failed to resize needle to {size[0]}x{size[1]}: {exc}") from exc


class OpenCVCorrelator:
    """
    Thin wrapper around OpenCV's matchTemplate and minMaxLoc.

    A needle of a single flat color has no variance, so normalized
    correlation is undefined for it and OpenCV scores every window 1.0.
    Such needles are scored as ``1 - 2 * mean squared difference / peak**2``
    instead, which is 1.0 for an identical window and falls to -1.0 for
    the opposite extreme color.
    """

    def __init__(self, method: int = cv2.TM_CCOEFF_NORMED) -> None:
        if method not in (cv2.TM_CCOEFF_NORMED, cv2.TM_CCORR_NORMED):
            raise ValueError("method must be a correlation method where higher scores are better")
        self.method = method

    def correlate(self, haystack: np.ndarray, needle: np.ndarray) -> np.ndarray:
        if haystack.ndim != needle.ndim:
            raise InternalFailure("haystack and needle dimensionality must match")
        try:
            if _is_flat(needle):
                return self._flat_similarity(haystack, needle)
            return cv2.matchTemplate(haystack, needle, self.method)
        except cv2.error as exc:
            raise InternalFailure(f"template matching failed: {exc}") from exc

    def peak(self, surface: np.ndarray) -> Peak:
        try:
            _, max_val, _, max_loc = cv2.minMaxLoc(surface)
        except cv2.error as exc:
            raise InternalFailure(f"failed to locate correlation maximum: {exc}") from exc
        return float(max_val), (int(max_loc[0]), int(max_loc[1]))

    @staticmethod
    def _flat_similarity(haystack: np.ndarray, needle: np.ndarray) -> np.ndarray:
        squared_diff = cv2.matchTemplate(haystack, needle, cv2.TM_SQDIFF)
        peak = float(np.iinfo(needle.dtype).max) if np.issubdtype(needle.dtype, np.integer) else 1.0
        mean_squared_diff = squared_diff / (needle.size * peak * peak)
        return (1.0 - 2.0 * mean_squared_diff).astype(np.float32)


def _is_flat(image: np.ndarray) -> bool:
    _, stddev = cv2.meanStdDev(image)
    return bool(np.all(stddev < 1e-6))
