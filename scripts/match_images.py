from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

import cv2
import numpy as np

from needlematch import MatchOptions, MatchResult, NeedleMatchError, TemplateMatcher
from needlematch.io import read_image_bytes
from needlematch.matching import scaled_size
from needlematch.matching.options import DEFAULT_SCALE, DEFAULT_THRESHOLD

logger = logging.getLogger("match_images")

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Locate a needle image inside a haystack image.")
    parser.add_argument("haystack", type=Path, help="Image file to search in.")
    parser.add_argument("needle", type=Path, help="Reference image to search for.")
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help="Minimum correlation score reported as a match.",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=DEFAULT_SCALE,
        help="Multiplier applied to the needle's width and height before matching.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the haystack with the matched region outlined to this path.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def render_visualization(haystack: np.ndarray, result: MatchResult, size: tuple[int, int]) -> np.ndarray:
    """
    Outline the matched region and annotate it with the confidence."""
    annotated = haystack.copy()
    x, y = result.location  # type: ignore[misc]
    width, height = size
    cv2.rectangle(annotated, (x, y), (x + width - 1, y + height - 1), (0, 0, 255), 2)
    cv2.putText(
        annotated,
        f"conf={result.confidence:.3f}",
        (x, max(12, y - 6)),
        cv2.FONT_HERSHEY_SIMPLEX,
        0.5,
        (0, 0, 255),
        1,
        lineType=cv2.LINE_AA,
    )
    return annotated


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    matcher = TemplateMatcher()
    try:
        options = MatchOptions(threshold=args.threshold, scale=args.scale)
        haystack_bytes = read_image_bytes(args.haystack)
        needle_bytes = read_image_bytes(args.needle)
        result = matcher.match(haystack_bytes, needle_bytes, options)
    except (NeedleMatchError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return EXIT_ERROR

    print(json.dumps(result.to_dict()))

    if args.output is not None and result.found:
        haystack = matcher.codec.decode(haystack_bytes, "haystack")
        needle = matcher.codec.decode(needle_bytes, "needle")
        size = scaled_size(needle.shape[1], needle.shape[0], options.scale)
        args.output.parent.mkdir(parents=True, exist_ok=True)
        cv2.imwrite(str(args.output), render_visualization(haystack, result, size))
        logger.info("wrote visualization to %s", args.output)

    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(run())
