"""System load averages, estimated from CPU samples on Windows."""

from __future__ import annotations

import sys
import time
from typing import Iterable

import psutil

from metricsagent.collector import _host_info, round_down
from metricsagent.models import LoadAverageMetrics

WINDOWS_SAMPLES = 3
SAMPLE_SECONDS = 2.0
PAUSE_SECONDS = 1.0


def average(values: Iterable[float]) -> float:
    """Truncated mean, or 0 for no values."""
    items = list(values)
    if not items:
        return 0.0
    return round_down(sum(items) / len(items))


def minimum(values: Iterable[float]) -> float:
    """Truncated minimum, or 0 for no values."""
    items = list(values)
    return round_down(min(items)) if items else 0.0


def maximum(values: Iterable[float]) -> float:
    """Truncated maximum, or 0 for no values."""
    items = list(values)
    return round_down(max(items)) if items else 0.0


def _sample_window() -> list[float]:
    samples = []
    for _ in range(WINDOWS_SAMPLES):
        samples.append(psutil.cpu_percent(interval=SAMPLE_SECONDS))
        time.sleep(PAUSE_SECONDS)
    return samples


def get_load_average(user_id: str) -> LoadAverageMetrics:
    """Return load averages; on Windows, CPU-usage samples stand in for them."""
    host = _host_info()

    if sys.platform.startswith("win"):
        one, five, fifteen = _sample_window(), _sample_window(), _sample_window()
        return LoadAverageMetrics(
            user_id=user_id,
            hostname=host.hostname,
            load_1m=average(one),
            load_1m_min=minimum(one),
            load_1m_max=maximum(one),
            load_5m=average(five),
            load_5m_min=minimum(five),
            load_5m_max=maximum(five),
            load_15m=average(fifteen),
            load_15m_min=minimum(fifteen),
            load_15m_max=maximum(fifteen),
        )

    try:
        load1, load5, load15 = psutil.getloadavg()
    except (OSError, AttributeError) as exc:
        raise RuntimeError(f"failed to get load average: {exc}") from exc

    one, five, fifteen = round_down(load1), round_down(load5), round_down(load15)
    return LoadAverageMetrics(
        user_id=user_id,
        hostname=host.hostname,
        load_1m=one,
        load_1m_min=one,
        load_1m_max=one,
        load_5m=five,
        load_5m_min=five,
        load_5m_max=five,
        load_15m=fifteen,
        load_15m_min=fifteen,
        load_15m_max=fifteen,
    )