from __future__ import annotations

from dataclasses import dataclass

from video_picker_scoring.errors import InvalidArgumentError


@dataclass
class MetricAggregate:
    """Running mean and worst (lowest score) observation for one metric."""

    sum_raw: float = 0.0
    sum_score: float = 0.0
    min_score: float = 1.0
    raw_at_min_score: float = 0.0
    observed_count: int = 0

    def update(self, raw: float, score: float) -> None:
        self.sum_raw += raw
        self.sum_score += score
        # strict "<" keeps the earliest frame among equal worst scores
        if self.observed_count == 0 or score < self.min_score:
            self.min_score = score
            self.raw_at_min_score = raw
        self.observed_count += 1

    def _require_observations(self) -> None:
        if self.observed_count == 0:
            raise InvalidArgumentError("aggregate has no observations")

    @property
    def mean_raw(self) -> float:
        self._require_observations()
        return self.sum_raw / self.observed_count

    @property
    def mean_score(self) -> float:
        self._require_observations()
        return self.sum_score / self.observed_count

    @property
    def worst_score(self) -> float:
        self._require_observations()
        return self.min_score

    @property
    def worst_raw(self) -> float:
        self._require_observations()
        return self.raw_at_min_score
