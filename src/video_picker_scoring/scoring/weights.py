from __future__ import annotations

from typing import Mapping, Optional

from video_picker_scoring.scoring.models import AggregateReport

DEFAULT_WEIGHTS: Mapping[str, float] = {
    "sharpness": 0.25,
    "exposure": 0.25,
    "motion_blur": 0.2,
    "noise": 0.15,
    "person_blur": 0.15,
}

# Clips of people: camera shake matters more than fine detail.
PERSON_WEIGHTS: Mapping[str, float] = {
    "sharpness": 0.15,
    "motion_blur": 0.45,
    "exposure": 0.30,
    "noise": 0.10,
}

SCENERY_WEIGHTS: Mapping[str, float] = {
    "sharpness": 0.35,
    "motion_blur": 0.20,
    "exposure": 0.30,
    "noise": 0.15,
}

WEIGHT_PRESETS: Mapping[str, Mapping[str, float]] = {
    "default": DEFAULT_WEIGHTS,
    "person": PERSON_WEIGHTS,
    "scenery": SCENERY_WEIGHTS,
}


def weighted_score(
    report: AggregateReport, weights: Mapping[str, float] = DEFAULT_WEIGHTS,
) -> Optional[float]:
    """Weighted mean of the report's mean scores, or None if nothing is weighted."""
    weighted_sum = 0.0
    weight_sum = 0.0
    for item in report.mean:
        weight = weights.get(item.name)
        if weight is None:
            continue
        weighted_sum += max(0.0, min(1.0, item.score)) * weight
        weight_sum += weight
    if weight_sum <= 0.0:
        return None
    return weighted_sum / weight_sum
