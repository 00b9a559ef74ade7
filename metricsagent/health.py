"""Availability and SLA tracking across repeated health checks."""

from __future__ import annotations

from typing import Callable, TypeVar

import psutil

from metricsagent.collector import _host_info, root_path, round_down
from metricsagent.models import HealthReport

THRESHOLD = 95.0
MIN_UPTIME_SECONDS = 24 * 60 * 60

_T = TypeVar("_T")


class HealthTracker:
    """Counts checks and downtimes to derive availability and SLA."""

    def __init__(self) -> None:
        self.total_checks = 0
        self.total_downtimes = 0
        self.sla_success = 0

    def record(
        self,
        cpu_percent: float,
        memory_percent: float,
        disk_percent: float,
        uptime_seconds: float,
    ) -> bool:
        """Count one check and return whether it counts as downtime."""
        self.total_checks += 1
        downtime = (
            max(cpu_percent, memory_percent, disk_percent) >= THRESHOLD
            or uptime_seconds < MIN_UPTIME_SECONDS
        )
        if downtime:
            self.total_downtimes += 1
        else:
            self.sla_success += 1
        return downtime

    def availability(self) -> float:
        """Percentage of checks that were not downtime."""
        if not self.total_checks:
            return 0.0
        return (self.total_checks - self.total_downtimes) / self.total_checks * 100

    def sla(self) -> float:
        """Percentage of checks that met the SLA."""
        if not self.total_checks:
            return 0.0
        return self.sla_success / self.total_checks * 100

    def _read(self, label: str, reader: Callable[[], _T]) -> _T:
        try:
            return reader()
        except (OSError, psutil.Error) as exc:
            self.total_checks += 1
            raise RuntimeError(f"failed to get {label}: {exc}") from exc

    def generate(self, user_id: str) -> HealthReport:
        """Sample the host, record the check and build a report."""
        cpu = self._read("CPU usage", lambda: psutil.cpu_percent(interval=None))
        vm = self._read("memory usage", psutil.virtual_memory)
        disk = self._read("disk usage", lambda: psutil.disk_usage(root_path()))
        host = self._read("host info", _host_info)

        self.record(cpu, vm.percent, disk.percent, host.uptime)

        return HealthReport(
            user_id=user_id,
            hostname=host.hostname,
            availability=f"{self.availability():.1f} %",
            cpu_percent=round_down(cpu),
            memory_percent=round_down(vm.percent),
            disk_percent=round_down(disk.percent),
            downtimes=self.total_downtimes,
            sla=f"{self.sla():.2f} %",
        )


_TRACKER = HealthTracker()


def generate_health_report(user_id: str) -> HealthReport:
    """Generate a report using the process-wide tracker."""
    return _TRACKER.generate(user_id)