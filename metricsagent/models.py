"""Records reported by the agent, with their wire (JSON) field names."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any


def _wire(default: Any, key: str) -> Any:
    """Declare a field whose JSON key differs from its attribute name."""
    return field(default=default, metadata={"json": key})


def _as_wire_dict(record: Any) -> dict[str, Any]:
    """Return a dataclass's fields keyed by their wire names, in declaration order."""
    return {f.metadata.get("json", f.name): getattr(record, f.name) for f in fields(record)}


@dataclass
class Config:
    """The agent's stored configuration."""

    user_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the fields keyed by their wire names."""
        return _as_wire_dict(self)


@dataclass
class Metrics:
    """A single resource-usage sample."""

    user_id: str = ""
    hostname: str = ""
    cpu_percent: float = 0.0
    memory_used: int = 0
    memory_total: int = 0
    disk_used: int = 0
    disk_total: int = 0
    uptime: int = _wire(0, "uptime_seconds")
    metric_get_time: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the fields keyed by their wire names."""
        return _as_wire_dict(self)


@dataclass
class HealthReport:
    """Availability and SLA figures for the host."""

    user_id: str = ""
    hostname: str = ""
    availability: str = ""
    cpu_percent: float = _wire(0.0, "cpu")
    memory_percent: float = _wire(0.0, "memory")
    disk_percent: float = _wire(0.0, "disk")
    downtimes: int = 0
    sla: str = _wire("", "sla_achieved")

    def to_dict(self) -> dict[str, Any]:
        """Return the fields keyed by their wire names."""
        return _as_wire_dict(self)


@dataclass
class SystemSummary:
    """Static and slowly changing facts about the host."""

    user_id: str = ""
    hostname: str = ""
    ip_address: str = ""
    os: str = ""
    cpu_model: str = ""
    cpu_cores: int = 0
    ram_mb: float = 0.0
    disk_count: int = 0
    sys_logs_error_count: int = _wire(0, "sys_logs_errors")
    uptime: str = ""
    boot_time: int = 0
    total_processes: int = 0
    nic_count: int = 0
    login_count: int = 0
    open_port_count: int = 0
    current_user: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the fields keyed by their wire names."""
        return _as_wire_dict(self)


@dataclass
class LoadAverageMetrics:
    """System load averages with their observed minimum and maximum."""

    user_id: str = ""
    hostname: str = ""
    load_1m: float = 0.0
    load_5m: float = 0.0
    load_15m: float = 0.0
    load_1m_min: float = _wire(0.0, "Load1mMin")
    load_1m_max: float = _wire(0.0, "Load1mMax")
    load_5m_min: float = _wire(0.0, "Load5mMin")
    load_5m_max: float = _wire(0.0, "Load5mMax")
    load_15m_min: float = _wire(0.0, "Load15mMin")
    load_15m_max: float = _wire(0.0, "Load15mMax")

    def to_dict(self) -> dict[str, Any]:
        """Return the fields keyed by their wire names."""
        return _as_wire_dict(self)