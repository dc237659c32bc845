from __future__ import annotations

import importlib.util
from dataclasses import dataclass

from lanerunner.config.schema import Settings
from lanerunner.engine.scores import HighScore, JsonFileStore


@dataclass(frozen=True)
class Check:
    name: str
    ok: bool
    detail: str


def _has_module(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


def run_doctor(settings: Settings) -> list[Check]:
    checks: list[Check] = []
    checks.append(Check("pygame", _has_module("pygame"), "required for the play window"))
    checks.append(Check("numpy", _has_module("numpy"), "required for simulation summaries"))

    paths = settings.paths
    checks.append(Check("data_dir", paths.data_dir.exists(), str(paths.data_dir)))
    try:
        raw = JsonFileStore(paths.high_scores).get(settings.session.high_score_key)
    except (OSError, ValueError) as exc:
        checks.append(Check("high_scores", False, f"{paths.high_scores}: {exc}"))
    else:
        best = HighScore.from_json(raw)
        detail = f"{paths.high_scores} (best {best.distance}m / {best.coins} coins)"
        checks.append(Check("high_scores", True, detail))
    return checks
