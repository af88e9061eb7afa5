"""
Error types raised by the matching routines.
"""

from __future__ import annotations


class NeedleMatchError(Exception):
    """
    Base class for every failure surfaced by a match call.
    """


class DecodeError(NeedleMatchError, ValueError):
    """
    An input buffer could not be decoded into a non-empty image.
    """


class InvalidArgument(NeedleMatchError, ValueError):
    """
    Options or image sizes that make matching impossible.

    Raised when the scaled needle is larger than the haystack, and also when
    ``scale`` would shrink a side of the needle below one pixel, which is
    rejected up front instead of failing inside the resize.
    """


class InternalFailure(NeedleMatchError, RuntimeError):
    """
    The image-processing backend failed while resizing or correlating.
    """


__all__ = ["DecodeError", "InternalFailure", "InvalidArgument", "NeedleMatchError"]
