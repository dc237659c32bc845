from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from .defaults import default_settings
from .schema import Settings


def load_settings(*, data_dir: str | Path | None = None, **overrides) -> Settings:
    """Load runtime settings, defaulting to the constants in defaults.py.

    ``overrides`` replace whole settings groups (``speed=...``, ``spawn=...``).
    """
    settings = default_settings()
    if data_dir is not None:
        data_dir = Path(data_dir)
        paths = settings.paths
        settings = settings.with_overrides(paths=replace(
            paths,
            data_dir=data_dir,
            high_scores=data_dir / paths.high_scores.name,
            results=data_dir / paths.results.name,
        ))
    if overrides:
        settings = settings.with_overrides(**overrides)
    settings.paths.ensure_dirs()
    return settings
