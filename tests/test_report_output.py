from __future__ import annotations

import json

from conftest import uniform_inputs
from video_picker_scoring.output.report import write_report
from video_picker_scoring.pipeline.analyzer import FrameAnalyzer


def test_write_report_roundtrip(tmp_path):
    report = FrameAnalyzer().analyze_frames(uniform_inputs(2))
    path = tmp_path / "nested" / "report.json"

    write_report(path, report, extra={"video": "a.mp4"})

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["video"] == "a.mp4"
    assert data["item_count"] == 5
    assert data["mean"][1]["name"] == "exposure"
    assert data["mean"][1]["score"] == 1.0


def test_write_report_without_extra(tmp_path):
    report = FrameAnalyzer().analyze_frames(uniform_inputs(1))
    path = tmp_path / "r.json"
    write_report(path, report)
    assert set(json.loads(path.read_text(encoding="utf-8"))) == {"item_count", "mean", "worst"}
