import socket
import time
from types import SimpleNamespace

import psutil
import pytest

from metricsagent.health import HealthTracker, generate_health_report


def test_healthy_checks_give_full_availability():
    t = HealthTracker()
    assert t.record(10.0, 20.0, 30.0, 100_000) is False
    assert t.record(10.0, 20.0, 30.0, 100_000) is False
    assert t.availability() == 100.0
    assert t.sla() == 100.0


@pytest.mark.parametrize(
    "cpu, mem, disk",
    [(95.0, 0.0, 0.0), (0.0, 95.0, 0.0), (0.0, 0.0, 99.9)],
)
def test_threshold_breach_is_downtime(cpu, mem, disk):
    t = HealthTracker()
    assert t.record(cpu, mem, disk, 100_000) is True
    assert t.total_downtimes == 1
    assert t.sla_success == 0


def test_short_uptime_is_downtime():
    t = HealthTracker()
    assert t.record(1.0, 1.0, 1.0, 24 * 3600 - 1) is True
    assert t.record(1.0, 1.0, 1.0, 24 * 3600) is False


def test_mixed_checks():
    t = HealthTracker()
    t.record(1.0, 1.0, 1.0, 100_000)
    t.record(99.0, 1.0, 1.0, 100_000)
    assert t.total_checks == 2
    assert t.total_downtimes == 1
    assert t.availability() == t.sla()
    assert t.availability() == 50.0


def test_empty_tracker_reports_zero():
    t = HealthTracker()
    assert t.availability() == 0.0


@pytest.fixture
def fake_host(monkeypatch):
    monkeypatch.setattr(psutil, "cpu_percent", lambda *a, **k: 71.79)
    monkeypatch.setattr(
        psutil, "virtual_memory", lambda: SimpleNamespace(used=1, total=2, percent=50.0)
    )
    monkeypatch.setattr(
        psutil, "disk_usage", lambda path: SimpleNamespace(used=1, total=4, percent=25.0)
    )
    monkeypatch.setattr(psutil, "boot_time", lambda: time.time() - 200_000)
    monkeypatch.setattr(socket, "gethostname", lambda: "host-b")


def test_generate_builds_report(fake_host):
    t = HealthTracker()
    report = t.generate("u1")
    assert report.user_id == "u1"
    assert report.hostname == "host-b"
    assert report.cpu_percent == 71.7
    assert report.memory_percent == 50.0
    assert report.disk_percent == 25.0
    assert report.downtimes == 0
    assert report.availability == "100.0 %"
    assert report.sla == "100.00 %"
    assert t.total_checks == 1


def test_generate_failure_counts_check_and_raises(monkeypatch):
    def broken(*a, **k):
        raise OSError("no cpu")

    monkeypatch.setattr(psutil, "cpu_percent", broken)
    t = HealthTracker()
    with pytest.raises(RuntimeError, match="failed to get CPU usage"):
        t.generate("u1")
    assert t.total_checks == 1
    assert t.total_downtimes == 0


def test_generate_health_report_uses_shared_tracker(fake_host):
    first = generate_health_report("u2")
    second = generate_health_report("u2")
    assert first.user_id == second.user_id == "u2"
    assert second.downtimes >= first.downtimes