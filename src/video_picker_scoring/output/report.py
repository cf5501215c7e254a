from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from video_picker_scoring.scoring.models import AggregateReport


def write_report(path: Path, report: AggregateReport, extra: Optional[Dict[str, Any]] = None) -> None:
    """Serialise *report* (plus *extra* top-level keys) as pretty-printed JSON to *path*."""
    payload: Dict[str, Any] = dict(extra or {})
    payload.update(report.to_dict())
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
