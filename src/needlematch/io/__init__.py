"""
IO helpers for reading and producing the encoded buffers consumed by matching routines.
"""

from .image_loader import encode_image, read_image_bytes

__all__ = ["encode_image", "read_image_bytes"]
