import json

import requests
import responses

from metricsagent.models import HealthReport, Metrics
from metricsagent.sender import send_health_report, send_metrics

BASE = "http://api.example.com"


def _metrics():
    return Metrics(user_id="u1", hostname="h1", cpu_percent=1.5, uptime=10)


def test_send_metrics_success(capsys):
    m = _metrics()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/metrics", status=200)
        assert send_metrics(m, BASE) is True
        sent = rsps.calls[0].request
        assert json.loads(sent.body) == m.to_dict()
        assert sent.headers["Content-Type"] == "application/json"
    out = capsys.readouterr().out
    assert "✅ Metrics sent! Status: 200 OK" in out
    assert '"user_id": "u1"' in out


def test_send_metrics_server_error(capsys):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/metrics", status=500, body="boom")
        assert send_metrics(_metrics(), BASE) is False
    out = capsys.readouterr().out
    assert "❌ Failed to send metrics." in out
    assert "Status: 500 Internal Server Error" in out
    assert "Response: boom" in out


def test_send_metrics_connection_error(capsys):
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST, BASE + "/metrics", body=requests.ConnectionError("refused")
        )
        assert send_metrics(_metrics(), BASE) is False
    assert "❌ Error sending data:" in capsys.readouterr().out


def test_send_health_report_posts_to_health_endpoint(capsys):
    report = HealthReport(user_id="u2", hostname="h2", availability="100.0 %", sla="100.00 %")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/healthReport", status=201)
        assert send_health_report(report, BASE) is True
        body = json.loads(rsps.calls[0].request.body)
    assert body["sla_achieved"] == "100.00 %"
    assert body["user_id"] == "u2"
    assert "✅ healthReport sent! Status: 201 Created" in capsys.readouterr().out


def test_send_health_report_failure(capsys):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/healthReport", status=404, body="missing")
        assert send_health_report(HealthReport(user_id="u3"), BASE) is False
    out = capsys.readouterr().out
    assert "❌ Failed to send healthReport." in out
    assert "Response: missing" in out


def test_send_health_report_connection_error(capsys):
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST, BASE + "/healthReport", body=requests.ConnectionError("down")
        )
        assert send_health_report(HealthReport(), BASE) is False
    assert "❌ Error sending healthReport:" in capsys.readouterr().out