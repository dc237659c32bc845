from __future__ import annotations

import argparse

from lanerunner.simulation.runner import available_policies
from lanerunner.ui.cli import commands


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lane Runner")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common_parent = argparse.ArgumentParser(add_help=False)
    common_parent.add_argument("--data-dir", default=None, help="Where high scores and results are kept")

    sub = subparsers.add_parser("play", parents=[common_parent], help="Open the game window")
    sub.add_argument("--seed", type=int, default=None)
    sub.set_defaults(func=commands.cmd_play)

    sub = subparsers.add_parser("simulate", parents=[common_parent], help="Run headless sessions")
    sub.add_argument("--sims", type=_positive_int, default=20)
    sub.add_argument("--workers", type=_positive_int, default=1)
    sub.add_argument("--seed", type=int, default=None)
    sub.add_argument("--policy", choices=available_policies(), default="autopilot")
    sub.add_argument("--out", default=None, help="Write a JSON summary (default: data dir)")
    sub.add_argument("--no-save", action="store_true")
    sub.set_defaults(func=commands.cmd_simulate)

    sub = subparsers.add_parser("scores", parents=[common_parent], help="Print the stored high score")
    sub.set_defaults(func=commands.cmd_scores)

    sub = subparsers.add_parser("reset-scores", parents=[common_parent], help="Zero the stored high score")
    sub.set_defaults(func=commands.cmd_reset_scores)

    sub = subparsers.add_parser("report", parents=[common_parent], help="Print the saved simulation summary")
    sub.set_defaults(func=commands.cmd_report)

    sub = subparsers.add_parser("doctor", parents=[common_parent], help="Check environment/dependencies")
    sub.set_defaults(func=commands.cmd_doctor)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
