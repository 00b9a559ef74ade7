"""Posting metrics and health reports to the HTTP API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import requests

from metricsagent.models import HealthReport, Metrics

TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class _Messages:
    error: str
    sent: str
    failed: str


_METRICS = _Messages(
    error="❌ Error sending data:",
    sent="✅ Metrics sent! Status:",
    failed="❌ Failed to send metrics.",
)
_HEALTH = _Messages(
    error="❌ Error sending healthReport:",
    sent="✅ healthReport sent! Status:",
    failed="❌ Failed to send healthReport.",
)


def _post(document: dict[str, Any], url: str, messages: _Messages) -> bool:
    payload = json.dumps(document, indent=2, ensure_ascii=False)
    print("📤 Sending payload:\n", payload)
    try:
        response = requests.post(
            url,
            data=payload.encode("utf-8"),
            headers={"Content-Type": "application/json"},
            timeout=TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        print(messages.error, exc)
        return False

    status = f"{response.status_code} {response.reason}"
    if 200 <= response.status_code < 300:
        print(messages.sent, status)
        return True
    print(f"{messages.failed}\nStatus: {status}\nResponse: {response.text}")
    return False


def send_metrics(metrics: Metrics, base_url: str) -> bool:
    """POST a metrics sample to ``base_url + '/metrics'``; True on 2xx."""
    return _post(metrics.to_dict(), base_url + "/metrics", _METRICS)


def send_health_report(report: HealthReport, base_url: str) -> bool:
    """POST a health report to ``base_url + '/healthReport'``; True on 2xx."""
    return _post(report.to_dict(), base_url + "/healthReport", _HEALTH)