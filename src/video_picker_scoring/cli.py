from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from video_picker_scoring.config import Config
from video_picker_scoring.detection.person_detector import HogPersonDetector
from video_picker_scoring.errors import ScoringError
from video_picker_scoring.logging_utils import setup_logging
from video_picker_scoring.output.report import write_report
from video_picker_scoring.pipeline.analyzer import FrameAnalyzer
from video_picker_scoring.scoring.models import AggregateReport
from video_picker_scoring.scoring.weights import WEIGHT_PRESETS, weighted_score


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="video-picker-scoring",
        description="Score sharpness, exposure, motion blur and noise of a video's sampled frames.",
    )
    p.add_argument("video", help="Path to the video file")

    # Profile & sampling
    p.add_argument("--profile", choices=["desktop", "mobile"], default="desktop")
    p.add_argument("--max-frames", type=int, default=None)
    p.add_argument("--fps", dest="sampling_fps", type=float, default=None)
    p.add_argument("--start-time", dest="start_time_s", type=float, default=0.0)
    p.add_argument("--short-side", dest="target_short_side", type=int, default=360)

    # Subject blur
    p.add_argument("--detect-people", action="store_true")

    # Output
    p.add_argument("--json", dest="json_path", default=None)
    p.add_argument("--weights", choices=sorted(WEIGHT_PRESETS), default="default")
    p.add_argument("--log-frame-details", action="store_true")
    p.add_argument("-v", "--verbose", action="store_true")

    return p


def print_report(report: AggregateReport, weights_name: str = "default") -> None:
    print("Mean results:")
    for item in report.mean:
        print(f"  {item.name} score={item.score:.3f} raw={item.raw:.5f}")
    print("Worst results:")
    for item in report.worst:
        print(f"  {item.name} score={item.score:.3f} raw={item.raw:.5f}")
    overall = weighted_score(report, WEIGHT_PRESETS[weights_name])
    if overall is not None:
        print(f"Weighted score ({weights_name}): {overall:.3f}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    verbose = args.verbose or args.log_frame_details
    log = setup_logging(logging.DEBUG if verbose else logging.INFO)

    overrides = dict(
        start_time_s=args.start_time_s,
        target_short_side=args.target_short_side,
        log_frame_details=args.log_frame_details,
    )
    if args.max_frames is not None:
        overrides["max_frames"] = args.max_frames
    if args.sampling_fps is not None:
        overrides["sampling_fps"] = args.sampling_fps

    try:
        cfg = Config.for_profile(args.profile, **overrides)
    except ScoringError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    detector = HogPersonDetector() if args.detect_people else None
    analyzer = FrameAnalyzer(cfg, detector=detector)

    try:
        report = analyzer.analyze_video_file(args.video)
    except ScoringError as exc:
        log.error("Analyze failed (code %d): %s", exc.code, exc)
        return 1

    print_report(report, args.weights)

    if args.json_path:
        out = Path(args.json_path)
        write_report(
            out,
            report,
            extra={
                "video": str(args.video),
                "profile": args.profile,
                "weighted_score": weighted_score(report, WEIGHT_PRESETS[args.weights]),
            },
        )
        log.info("Report written to %s", out)

    return 0


if __name__ == "__main__":
    sys.exit(main())
