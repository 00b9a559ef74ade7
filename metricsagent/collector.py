"""Basic resource-usage sampling."""

from __future__ import annotations

import socket
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timezone

import psutil

from metricsagent.models import Metrics


@dataclass(frozen=True)
class _HostInfo:
    hostname: str
    uptime: int
    boot_time: int


def root_path(platform: str | None = None) -> str:
    """Return the filesystem root whose usage is reported."""
    platform = sys.platform if platform is None else platform
    return "C:\\" if platform.startswith("win") else "/"


def round_down(value: float) -> float:
    """Truncate to one decimal place (71.79 -> 71.7)."""
    return float(int(value * 10)) / 10


def _host_info() -> _HostInfo:
    boot = psutil.boot_time()
    uptime = max(0, int(time.time() - boot))
    return _HostInfo(hostname=socket.gethostname(), uptime=uptime, boot_time=int(boot))


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def collect(user_id: str) -> Metrics:
    """Take one sample of CPU, memory, disk and uptime."""
    vm = psutil.virtual_memory()
    cpu = psutil.cpu_percent(interval=None)
    disk = psutil.disk_usage(root_path())
    host = _host_info()
    return Metrics(
        user_id=user_id,
        hostname=host.hostname,
        cpu_percent=cpu,
        memory_used=vm.used,
        memory_total=vm.total,
        disk_used=disk.used,
        disk_total=disk.total,
        uptime=host.uptime,
        metric_get_time=_utc_timestamp(),
    )