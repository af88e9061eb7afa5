from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from ..errors import InvalidArgument
from .backends import (
    Buffer,
    Correlator,
    ImageCodec,
    OpenCVCorrelator,
    OpenCVImageCodec,
    OpenCVResizer,
    Resizer,
)
from .options import MatchOptions, OptionsLike
from .result import MatchResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TemplateMatcher:
    """
    Finds the best location of a needle image inside a haystack image.

    Decoding, resizing and correlation go through the injected backends; the
    defaults use OpenCV with ``TM_CCOEFF_NORMED``.
    """

    codec: ImageCodec = field(default_factory=OpenCVImageCodec)
    resizer: Resizer = field(default_factory=OpenCVResizer)
    correlator: Correlator = field(default_factory=OpenCVCorrelator)

    def match(self, haystack: Buffer, needle: Buffer, options: OptionsLike = None) -> MatchResult:
        """
        Locate ``needle`` inside ``haystack``, both given as encoded images.

        Raises DecodeError for unreadable input, InvalidArgument when the
        scaled needle does not fit and InternalFailure for backend errors.
        """
        resolved = MatchOptions.from_mapping(options)

        haystack_image = self.codec.decode(haystack, "haystack")
        needle_image = self.codec.decode(needle, "needle")
        logger.debug("decoded haystack %s and needle %s", haystack_image.shape, needle_image.shape)

        needle_image = self._rescale(needle_image, resolved.scale)

        haystack_height, haystack_width = haystack_image.shape[:2]
        needle_height, needle_width = needle_image.shape[:2]
        if needle_width > haystack_width or needle_height > haystack_height:
            raise InvalidArgument(
                f"needle ({needle_width}x{needle_height}) is larger than "
                f"haystack ({haystack_width}x{haystack_height})"
            )

        surface = self.correlator.correlate(haystack_image, needle_image)
        max_val, (x, y) = self.correlator.peak(surface)
        confidence = float(np.clip(max_val, -1.0, 1.0))

        if confidence >= resolved.threshold:
            logger.debug("match at (%d, %d) confidence=%.4f", x, y, confidence)
            return MatchResult.hit(x, y, confidence)

        logger.debug("no match: confidence=%.4f below threshold=%.4f", confidence, resolved.threshold)
        return MatchResult.miss(confidence)

    def _rescale(self, needle: np.ndarray, scale: float) -> np.ndarray:
        height, width = needle.shape[:2]
        new_width, new_height = scaled_size(width, height, scale)
        if (new_width, new_height) == (width, height):
            return needle
        logger.debug("resizing needle from %dx%d to %dx%d", width, height, new_width, new_height)
        return self.resizer.resize(needle, (new_width, new_height))


def scaled_size(width: int, height: int, scale: float) -> Tuple[int, int]:
    """
    Scale (width, height), truncating toward zero.
    """
    new_width = int(width * scale)
    new_height = int(height * scale)
    if new_width < 1 or new_height < 1:
        raise InvalidArgument(
            f"scale {scale} shrinks the {width}x{height} needle to {new_width}x{new_height}"
        )
    return new_width, new_height


_default_matcher = TemplateMatcher()


def template_match(haystack: Buffer, needle: Buffer, options: OptionsLike = None) -> MatchResult:
    """
    Match using the default OpenCV backends.
    """
    return _default_matcher.match(haystack, needle, options)
