from __future__ import annotations

from pathlib import Path
from typing import Union

import cv2
import numpy as np

PathLike = Union[str, Path]


def read_image_bytes(path: PathLike) -> bytes:
    """
    Read an encoded image file without decoding it.
    """
    image_path = Path(path)
    if not image_path.is_file():
        raise FileNotFoundError(f"Unable to load image at {path}")
    return image_path.read_bytes()


def encode_image(image: np.ndarray, ext: str = ".png") -> bytes:
    """
    Encode an array into an image buffer of the format implied by ``ext``.
    """
    ok, buffer = cv2.imencode(ext, image)
    if not ok:
        raise ValueError(f"Unable to encode image as {ext}")
    return buffer.tobytes()
