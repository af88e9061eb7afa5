from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Union

from ..errors import InvalidArgument

DEFAULT_THRESHOLD = 0.8
DEFAULT_SCALE = 1.0


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """
    Per-call matching configuration.

    ``threshold`` is the minimum correlation score reported as a match and
    ``scale`` multiplies the needle's width and height before matching.
    """

    threshold: float = DEFAULT_THRESHOLD
    scale: float = DEFAULT_SCALE

    def __post_init__(self) -> None:
        threshold = _as_float("threshold", self.threshold)
        scale = _as_float("scale", self.scale)
        if math.isnan(threshold):
            raise InvalidArgument("threshold must be a number")
        if not math.isfinite(scale) or scale <= 0:
            raise InvalidArgument(f"scale must be a positive finite number, got {scale!r}")
        object.__setattr__(self, "threshold", threshold)
        object.__setattr__(self, "scale", scale)

    @classmethod
    def from_mapping(cls, options: "OptionsLike") -> "MatchOptions":
        """
        Resolve ``None``, an existing instance or a plain mapping into options.

        Missing keys and ``None`` values fall back to the defaults; other keys
        are ignored.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise InvalidArgument(f"options must be a mapping or MatchOptions, got {type(options).__name__}")

        threshold = options.get("threshold")
        scale = options.get("scale")
        return cls(
            threshold=DEFAULT_THRESHOLD if threshold is None else threshold,
            scale=DEFAULT_SCALE if scale is None else scale,
        )


OptionsLike = Union[MatchOptions, Mapping[str, Any], None]


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be a number, got a boolean")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name} must be a number, got {value!r}") from exc
