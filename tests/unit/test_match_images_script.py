from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import cv2
import numpy as np
import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "match_images.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("match_images", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[union-attr]
    return module


def _write(path: Path, image: np.ndarray) -> Path:
    cv2.imwrite(str(path), image)
    return path


def test_script_prints_match_and_writes_visualization(
    script, tmp_path: Path, haystack: np.ndarray, capsys: pytest.CaptureFixture[str]
) -> None:
    haystack_path = _write(tmp_path / "haystack.png", haystack)
    needle_path = _write(tmp_path / "needle.png", haystack[40:60, 10:30])
    output = tmp_path / "viz" / "match.png"

    code = script.run([str(haystack_path), str(needle_path), "--output", str(output)])

    payload = json.loads(capsys.readouterr().out)
    assert code == script.EXIT_FOUND
    assert payload["found"] is True
    assert (payload["x"], payload["y"]) == (10, 40)
    assert output.exists()


def test_script_reports_miss(
    script, tmp_path: Path, haystack: np.ndarray, make_noise, capsys: pytest.CaptureFixture[str]
) -> None:
    haystack_path = _write(tmp_path / "haystack.png", haystack)
    needle_path = _write(tmp_path / "needle.png", make_noise(16, 16, seed=11))

    code = script.run([str(haystack_path), str(needle_path), "--threshold", "0.9"])

    payload = json.loads(capsys.readouterr().out)
    assert code == script.EXIT_NOT_FOUND
    assert payload["found"] is False
    assert "x" not in payload


def test_script_exits_with_error_on_bad_input(script, tmp_path: Path, haystack: np.ndarray) -> None:
    haystack_path = _write(tmp_path / "haystack.png", haystack)
    corrupt = tmp_path / "needle.png"
    corrupt.write_bytes(b"garbage")

    assert script.run([str(haystack_path), str(corrupt)]) == script.EXIT_ERROR
    assert script.run([str(haystack_path), str(tmp_path / "absent.png")]) == script.EXIT_ERROR
    assert script.run([str(haystack_path), str(haystack_path), "--scale", "-1"]) == script.EXIT_ERROR
