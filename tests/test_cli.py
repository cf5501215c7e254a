"""CLI wiring: argument parsing, printed report, JSON output, exit codes."""
from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from conftest import FakeCapture, bgr_frames
from video_picker_scoring.cli import build_parser, main

FRAME_SOURCE = "video_picker_scoring.media.frame_source"


@pytest.fixture(autouse=True)
def _reset_app_logger():
    """main() installs a stderr handler bound to the captured stream; drop it after each test."""
    yield
    logger = logging.getLogger("video_picker_scoring")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_parser_defaults():
    args = build_parser().parse_args(["clip.mp4"])
    assert args.video == "clip.mp4"
    assert args.profile == "desktop"
    assert args.max_frames is None
    assert args.sampling_fps is None
    assert args.weights == "default"
    assert args.detect_people is False


@patch(f"{FRAME_SOURCE}.cv2.VideoCapture")
def test_prints_mean_and_worst(mock_cap, capsys):
    mock_cap.return_value = FakeCapture(bgr_frames(10), fps=5.0)
    rc = main(["clip.mp4", "--max-frames", "3", "--short-side", "0"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Mean results:" in out
    assert "Worst results:" in out
    assert "  sharpness score=" in out
    assert "  person_blur score=" in out
    assert "Weighted score (default):" in out


@patch(f"{FRAME_SOURCE}.cv2.VideoCapture")
def test_writes_json(mock_cap, tmp_path):
    mock_cap.return_value = FakeCapture(bgr_frames(10), fps=5.0)
    out = tmp_path / "reports" / "clip.json"
    rc = main(["clip.mp4", "--profile", "mobile", "--json", str(out), "--weights", "scenery"])
    assert rc == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["video"] == "clip.mp4"
    assert data["profile"] == "mobile"
    assert data["item_count"] == 5
    assert [m["name"] for m in data["worst"]] == [
        "sharpness", "exposure", "motion_blur", "noise", "person_blur",
    ]
    assert 0.0 <= data["weighted_score"] <= 1.0


@patch(f"{FRAME_SOURCE}.cv2.VideoCapture")
def test_decode_failure_exits_1(mock_cap, capsys):
    mock_cap.return_value = FakeCapture([], opened=False)
    assert main(["missing.mp4"]) == 1
    assert "Mean results:" not in capsys.readouterr().out


def test_invalid_config_exits_2(capsys):
    assert main(["clip.mp4", "--fps", "0"]) == 2
    assert "sampling_fps" in capsys.readouterr().err
