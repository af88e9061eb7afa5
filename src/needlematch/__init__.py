"""
Locate a needle image inside a haystack image with normalized cross-correlation.
"""

from .errors import DecodeError, InternalFailure, InvalidArgument, NeedleMatchError
from .matching.engine import TemplateMatcher, template_match
from .matching.options import MatchOptions
from .matching.result import MatchResult

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "InternalFailure",
    "InvalidArgument",
    "MatchOptions",
    "MatchResult",
    "NeedleMatchError",
    "TemplateMatcher",
    "template_match",
]
