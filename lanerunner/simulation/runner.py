from __future__ import annotations

"""Parallel batch runner for headless sessions."""

import multiprocessing
import random
import time
from itertools import islice
from pathlib import Path
from typing import Any

import numpy as np

from lanerunner.config.schema import Settings
from lanerunner.core.contracts import SimSummary
from lanerunner.core.results import save_summary
from lanerunner.simulation.autopilot import LaneAutopilot, StayPolicy, simulate

POLICIES = {
    "autopilot": LaneAutopilot,
    "stay": StayPolicy,
}


def available_policies() -> list[str]:
    return sorted(POLICIES)


def _make_policy(name: str):
    try:
        return POLICIES[name]()
    except KeyError as exc:
        raise ValueError(f"Unknown policy: {name!r}. Expected one of {available_policies()}") from exc


def _run_seed_batch(args):
    """Worker function: run one batch of seeds with a fresh policy per run."""
    settings, policy_name, seeds = args
    runs = []
    for seed in seeds:
        run = simulate(seed, _make_policy(policy_name), settings)
        run.pop("frames")
        runs.append(run)
    return runs


def _chunked(items, chunk_size):
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    it = iter(items)
    while True:
        chunk = list(islice(it, chunk_size))
        if not chunk:
            return
        yield chunk


def summarize(runs: list[dict[str, Any]]) -> SimSummary:
    if not runs:
        raise ValueError("no runs to summarize")
    distances = np.array([r["distance"] for r in runs])
    coins = np.array([r["coins"] for r in runs])
    ticks = np.array([r["ticks"] for r in runs])
    return SimSummary(
        n_sims=len(runs),
        avg_distance=float(np.mean(distances)),
        std_distance=float(np.std(distances)),
        min_distance=int(np.min(distances)),
        max_distance=int(np.max(distances)),
        avg_coins=float(np.mean(coins)),
        std_coins=float(np.std(coins)),
        avg_ticks=float(np.mean(ticks)),
        runs=runs,
    )


def run_simulations(
    settings: Settings,
    n_sims: int,
    *,
    policy: str = "autopilot",
    workers: int = 1,
    seed: int | None = None,
) -> SimSummary:
    """Run ``n_sims`` headless sessions and aggregate distance/coin metrics."""
    if n_sims < 1:
        raise ValueError(f"n_sims must be >= 1, got {n_sims}")
    _make_policy(policy)
    seeds = random.Random(seed).sample(range(100_000), n_sims)

    if workers <= 1:
        runs = _run_seed_batch((settings, policy, seeds))
    else:
        worker_count = min(workers, n_sims)
        per_worker = max(1, (n_sims + worker_count - 1) // worker_count)
        args_list = [(settings, policy, chunk) for chunk in _chunked(seeds, per_worker)]
        with multiprocessing.Pool(processes=worker_count) as pool:
            batches = pool.map(_run_seed_batch, args_list)
        runs = [run for batch in batches for run in batch]

    return summarize(runs)


def run_and_report(settings: Settings, n_sims: int, *, policy: str = "autopilot", workers: int = 1,
                   seed: int | None = None, out: Path | None = None) -> SimSummary:
    print("\n" + "=" * 50)
    print(f"SIMULATION: {n_sims} runs, policy={policy}, workers={workers}")
    print("=" * 50)
    start = time.time()
    summary = run_simulations(settings, n_sims, policy=policy, workers=workers, seed=seed)
    fps = settings.session.fps
    print(f"  Distance: avg = {summary.avg_distance:.0f}m (+/- {summary.std_distance:.0f}), "
          f"min = {summary.min_distance}m, max = {summary.max_distance}m")
    print(f"  Coins:    avg = {summary.avg_coins:.1f} (+/- {summary.std_coins:.1f})")
    print(f"  Survival: avg = {summary.avg_ticks:.0f} ticks ({summary.avg_ticks / fps:.1f}s)")
    print(f"  Time: {time.time() - start:.1f}s")
    if out is not None:
        path = save_summary(out, summary, policy=policy)
        print(f"[simulate] Saved summary to {path}")
    return summary
