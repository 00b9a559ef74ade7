"""Host summary: identity, OS, hardware counts, logins, ports and log errors."""

from __future__ import annotations

import getpass
import ipaddress
import os
import platform as _platform
import socket
import subprocess
import sys
from pathlib import Path
from typing import Iterable, Sequence

import psutil

from metricsagent.collector import _host_info
from metricsagent.models import SystemSummary

SYSLOG_FILES = ("/var/log/syslog", "/var/log/messages")
NOT_AVAILABLE = "N/A"

_MAC_LOG_COMMAND = (
    "log", "show", "--predicate", "eventMessage contains 'error'",
    "--style", "syslog", "--last", "1h",
)
_WINDOWS_ERROR_COMMAND = (
    "powershell", "-Command",
    "(Get-WinEvent -LogName System | Where-Object { $_.LevelDisplayName -eq 'Error' }"
    " | Measure-Object).Count",
)
_WINDOWS_LOGIN_COMMAND = (
    "powershell", "-NoProfile", "-Command",
    "Try { $events = Get-WinEvent -FilterHashtable @{LogName='Security'; Id=4624}; "
    "$events.Count } Catch { Write-Error $_.Exception.Message; Exit 1 }",
)


def format_duration(seconds: int) -> str:
    """Render seconds as days, hours, minutes and seconds."""
    minutes, secs = divmod(int(seconds), 60)
    hours, mins = divmod(minutes, 60)
    days, hrs = divmod(hours, 24)
    return f"{days} day(s) {hrs} hr(s) {mins} min(s) {secs} sec(s)"


def count_error_lines(lines: Iterable[str]) -> int:
    """Count lines mentioning 'error' in any letter case."""
    return sum(1 for line in lines if "error" in line.lower())


def count_listening(text: str, marker: str) -> int:
    """Count lines of ``text`` that contain ``marker``."""
    return sum(1 for line in text.split("\n") if marker in line)


def parse_count(text: str) -> int:
    """Parse a count printed by a command; blank text counts as 0."""
    stripped = text.strip()
    return int(stripped) if stripped else 0


def _run(args: Sequence[str]) -> str:
    """Run a command and return its standard output as text."""
    completed = subprocess.run(
        list(args), capture_output=True, text=True, errors="replace", check=True
    )
    return completed.stdout


def _parse_ip(address: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    try:
        return ipaddress.ip_address(address.split("%", 1)[0])
    except ValueError:
        return None


def get_ip() -> str:
    """Return a non-loopback address of an interface that is up, or 'N/A'."""
    stats = psutil.net_if_stats()
    found: list[str] = []
    for name, addrs in psutil.net_if_addrs().items():
        state = stats.get(name)
        if state is None or not state.isup:
            continue
        ips = [
            ip
            for ip in (
                _parse_ip(a.address)
                for a in addrs
                if a.family in (socket.AF_INET, socket.AF_INET6)
            )
            if ip is not None
        ]
        if any(ip.is_loopback for ip in ips):
            continue
        found.extend(str(ip) for ip in ips)
    if not found:
        return NOT_AVAILABLE
    return found[1] if len(found) > 1 else found[0]


def _syslog_error_count(paths: Iterable[str | os.PathLike[str]] = SYSLOG_FILES) -> int:
    """Count error lines in the first syslog file that exists."""
    for candidate in map(Path, paths):
        if candidate.exists():
            with candidate.open(encoding="utf-8", errors="replace") as handle:
                return count_error_lines(handle)
    raise RuntimeError("no syslog file found")


def get_system_error_log_count() -> int:
    """Count recent system-log errors using the platform's own log source."""
    platform = sys.platform
    if platform.startswith("linux"):
        return _syslog_error_count()
    if platform == "darwin":
        try:
            output = _run(_MAC_LOG_COMMAND)
        except (OSError, subprocess.SubprocessError) as exc:
            raise RuntimeError(str(exc)) from exc
        return len(output.split("\n")) - 1
    if platform.startswith("win"):
        try:
            output = _run(_WINDOWS_ERROR_COMMAND)
        except (OSError, subprocess.SubprocessError) as exc:
            raise RuntimeError(f"failed to execute command: {exc}") from exc
        try:
            return int(output.strip())
        except ValueError as exc:
            raise RuntimeError(f"failed to parse count: {exc}") from exc
    raise RuntimeError(f"unsupported OS: {platform}")


def get_login_count() -> int:
    """Count logged-in sessions (Unix) or successful logon events (Windows)."""
    platform = sys.platform
    if platform.startswith("linux") or platform == "darwin":
        try:
            output = _run(["who"])
        except (OSError, subprocess.SubprocessError) as exc:
            raise RuntimeError(str(exc)) from exc
        return len(output.strip().split("\n"))
    if platform.startswith("win"):
        try:
            completed = subprocess.run(
                list(_WINDOWS_LOGIN_COMMAND),
                capture_output=True, text=True, errors="replace",
            )
        except OSError as exc:
            raise RuntimeError(f"PowerShell error: {exc}") from exc
        if completed.returncode != 0:
            raise RuntimeError(f"PowerShell error: {completed.stderr}")
        return parse_count(completed.stdout)
    raise RuntimeError("unsupported OS")


def get_open_port_count() -> int:
    """Count listening sockets reported by ss, netstat as fallback."""
    platform = sys.platform
    if platform.startswith("linux") or platform == "darwin":
        try:
            output = _run(["ss", "-tuln"])
        except (OSError, subprocess.SubprocessError):
            try:
                output = _run(["netstat", "-tuln"])
            except (OSError, subprocess.SubprocessError) as exc:
                raise RuntimeError(str(exc)) from exc
        return count_listening(output, "LISTEN")
    if platform.startswith("win"):
        try:
            output = _run(["netstat", "-an"])
        except (OSError, subprocess.SubprocessError) as exc:
            raise RuntimeError(str(exc)) from exc
        return count_listening(output, "LISTENING")
    raise RuntimeError("unsupported OS")


def _cpu_model() -> str:
    if sys.platform.startswith("linux"):
        try:
            with open("/proc/cpuinfo", encoding="utf-8", errors="replace") as handle:
                for line in handle:
                    key, _, value = line.partition(":")
                    if key.strip() == "model name":
                        return value.strip()
        except OSError:
            pass
    return _platform.processor() or _platform.machine()


def _os_description() -> str:
    platform = sys.platform
    if platform.startswith("linux"):
        try:
            release = _platform.freedesktop_os_release()
            name, version = release.get("ID", "linux"), release.get("VERSION_ID", "")
        except OSError:
            name, version = "linux", _platform.release()
    elif platform == "darwin":
        name, version = "darwin", _platform.mac_ver()[0]
    elif platform.startswith("win"):
        name, version = "Microsoft Windows", _platform.version()
    else:
        name, version = _platform.system().lower(), _platform.release()
    return f"{name} {version} ({_platform.machine()})"


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return ""


def get_system_summary(user_id: str) -> SystemSummary:
    """Gather a summary of the host; raises RuntimeError if log errors can't be counted."""
    host = _host_info()
    memory = psutil.virtual_memory()
    partitions = psutil.disk_partitions(all=True)
    interfaces = psutil.net_if_addrs()
    processes = psutil.pids()

    try:
        error_count = get_system_error_log_count()
    except RuntimeError as exc:
        raise RuntimeError(f"failed to get system error log count: {exc}") from exc

    login_count = 0
    try:
        login_count = get_login_count()
        print("Login Count:", login_count)
    except RuntimeError as exc:
        print("Error getting login count:", exc)

    port_count = 0
    try:
        port_count = get_open_port_count()
        print("Open Port Count:", port_count)
    except RuntimeError as exc:
        print("Error getting open port count:", exc)

    return SystemSummary(
        user_id=user_id,
        hostname=host.hostname,
        ip_address=get_ip() or NOT_AVAILABLE,
        os=_os_description(),
        cpu_model=_cpu_model(),
        cpu_cores=os.cpu_count() or 0,
        ram_mb=memory.total / (1024 * 1024),
        disk_count=len(partitions),
        sys_logs_error_count=error_count,
        uptime=format_duration(host.uptime),
        boot_time=host.boot_time,
        total_processes=len(processes),
        nic_count=len(interfaces),
        login_count=login_count,
        open_port_count=port_count,
        current_user=_current_user(),
    )