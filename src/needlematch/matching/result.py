from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class MatchResult:
    """
    Outcome of a single match call.

    ``x`` and ``y`` are the top-left corner of the best match in haystack
    pixels and are only set when ``found`` is true. ``confidence`` is always
    the best correlation score, so near misses can be inspected.
    """

    found: bool
    confidence: float
    x: Optional[int] = None
    y: Optional[int] = None

    def __post_init__(self) -> None:
        has_location = self.x is not None and self.y is not None
        if self.found != has_location:
            raise ValueError("x and y must be set exactly when found is true")

    @classmethod
    def hit(cls, x: int, y: int, confidence: float) -> "MatchResult":
        return cls(found=True, confidence=float(confidence), x=int(x), y=int(y))

    @classmethod
    def miss(cls, confidence: float) -> "MatchResult":
        return cls(found=False, confidence=float(confidence))

    @property
    def location(self) -> Optional[Tuple[int, int]]:
        if not self.found:
            return None
        return self.x, self.y  # type: ignore[return-value]

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"found": self.found}
        if self.found:
            payload["x"] = self.x
            payload["y"] = self.y
        payload["confidence"] = self.confidence
        return payload
