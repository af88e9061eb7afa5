"""
Matching subpackage exposes the template matching API and its backends.
"""

from .backends import (
    Correlator,
    ImageCodec,
    OpenCVCorrelator,
    OpenCVImageCodec,
    OpenCVResizer,
    Resizer,
)
from .engine import TemplateMatcher, scaled_size, template_match
from .options import DEFAULT_SCALE, DEFAULT_THRESHOLD, MatchOptions
from .result import MatchResult

__all__ = [
    "Correlator",
    "DEFAULT_SCALE",
    "DEFAULT_THRESHOLD",
    "ImageCodec",
    "MatchOptions",
    "MatchResult",
    "OpenCVCorrelator",
    "OpenCVImageCodec",
    "OpenCVResizer",
    "Resizer",
    "TemplateMatcher",
    "scaled_size",
    "template_match",
]
