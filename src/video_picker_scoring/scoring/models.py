from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional, Tuple

Section = Literal["mean", "worst"]


@dataclass(frozen=True)
class MetricResult:
    metric_id: int
    name: str
    score: float
    raw: float


@dataclass(frozen=True)
class AggregateReport:
    item_count: int
    mean: Tuple[MetricResult, ...]
    worst: Tuple[MetricResult, ...]

    def by_name(self, name: str, section: Section = "mean") -> Optional[MetricResult]:
        """Return the *section* entry for metric *name*, if reported."""
        for item in getattr(self, section):
            if item.name == name:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_count": self.item_count,
            "mean": [asdict(m) for m in self.mean],
            "worst": [asdict(m) for m in self.worst],
        }
