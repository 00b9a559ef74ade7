"""Command-line entry point: sample metrics periodically and post them."""

from __future__ import annotations

import argparse
import itertools
import os
import time
from typing import Sequence

import psutil

from metricsagent.collector import collect
from metricsagent.config import config_path, load_user_id, prompt_and_save_user_id
from metricsagent.sender import send_metrics

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_INTERVAL = 10.0
URL_ENV = "METRICS_AGENT_URL"


def run(
    user_id: str,
    base_url: str,
    interval: float = DEFAULT_INTERVAL,
    iterations: int | None = None,
) -> int:
    """Collect and send metrics every ``interval`` seconds; return how many were accepted."""
    sent = 0
    rounds = itertools.count() if iterations is None else range(iterations)
    for index in rounds:
        if index:
            time.sleep(interval)
        try:
            metrics = collect(user_id)
        except (OSError, psutil.Error) as exc:
            print("❌ Failed to collect metrics:", exc)
            continue
        if send_metrics(metrics, base_url):
            sent += 1
    return sent


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metricsagent", description="Report host metrics to an HTTP API."
    )
    parser.add_argument("--config", help="path of the config file")
    parser.add_argument(
        "--url",
        default=os.environ.get(URL_ENV, DEFAULT_BASE_URL),
        help="base URL of the metrics API",
    )
    parser.add_argument(
        "--interval", type=float, default=DEFAULT_INTERVAL, help="seconds between samples"
    )
    parser.add_argument(
        "--iterations", type=int, default=None, help="stop after this many samples"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Load or ask for the user id, then report metrics."""
    args = _parser().parse_args(argv)
    path = args.config if args.config else config_path()

    try:
        user_id = load_user_id(path)
    except (OSError, ValueError):
        user_id = ""
    if not user_id:
        user_id = prompt_and_save_user_id(path)

    try:
        run(user_id, args.url, args.interval, args.iterations)
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())