from __future__ import annotations

from pathlib import Path

from lanerunner.config.loader import load_settings
from lanerunner.core.doctor import run_doctor
from lanerunner.core.results import load_summary
from lanerunner.engine.scores import HighScore, JsonFileStore
from lanerunner.simulation.runner import run_and_report


def cmd_play(args):
    from lanerunner.ui.play.app import run

    settings = load_settings(data_dir=args.data_dir)
    run(settings, seed=args.seed)


def cmd_simulate(args):
    settings = load_settings(data_dir=args.data_dir)
    out = None if args.no_save else Path(args.out or settings.paths.results)
    return run_and_report(settings, args.sims, policy=args.policy, workers=args.workers,
                          seed=args.seed, out=out)


def cmd_scores(args):
    settings = load_settings(data_dir=args.data_dir)
    store = JsonFileStore(settings.paths.high_scores)
    best = HighScore.from_json(store.get(settings.session.high_score_key))
    print(f"[scores] Best Distance: {best.distance}m")
    print(f"[scores] Most Coins: {best.coins}")
    return best


def cmd_reset_scores(args):
    settings = load_settings(data_dir=args.data_dir)
    store = JsonFileStore(settings.paths.high_scores)
    store.set(settings.session.high_score_key, HighScore().to_json())
    print(f"[scores] Reset high score in {settings.paths.high_scores}")


def cmd_report(args):
    settings = load_settings(data_dir=args.data_dir)
    path = Path(settings.paths.results)
    if not path.exists():
        print(f"[report] Missing results: {path}")
        return None
    data = load_summary(path)
    print(f"\nSIMULATION ({path})")
    print(f"  schema_version: {data.get('schema_version', 'n/a')}")
    print(f"  policy: {data.get('policy', 'n/a')}")
    for key in ("n_sims", "avg_distance", "std_distance", "min_distance", "max_distance",
                "avg_coins", "std_coins", "avg_ticks"):
        if key in data:
            print(f"  {key}: {data[key]}")
    return data


def cmd_doctor(args):
    settings = load_settings(data_dir=args.data_dir)
    checks = run_doctor(settings)
    ok_count = 0
    for chk in checks:
        mark = "OK" if chk.ok else "FAIL"
        print(f"[{mark}] {chk.name}: {chk.detail}")
        ok_count += int(chk.ok)
    print(f"\n{ok_count}/{len(checks)} checks passing")
    return checks
