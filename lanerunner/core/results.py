from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from lanerunner.core.contracts import SimSummary

SCHEMA_VERSION = 1


def save_summary(path: Path, summary: SimSummary, *, include_runs: bool = False, **extra: Any) -> Path:
    """Write a simulation summary as versioned JSON; per-run frames are dropped."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(summary)
    runs = payload.pop("runs")
    payload["distances"] = [r["distance"] for r in runs]
    payload["coins"] = [r["coins"] for r in runs]
    if include_runs:
        payload["runs"] = [{k: v for k, v in r.items() if k != "frames"} for r in runs]
    data = {"schema_version": SCHEMA_VERSION, **extra, **payload}
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path


def load_summary(path: Path) -> dict[str, Any]:
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, dict) and "schema_version" not in data:
        data = {"schema_version": 0, **data}
    return data
