# metricsagent

`metricsagent` is a lightweight host monitoring agent. It samples CPU,
memory, disk and uptime figures from the machine it runs on and posts them
as JSON to an HTTP API at a fixed interval. It also offers library functions
for health reports, load averages and a host summary.

## Installation

```
pip install .
```

The test dependencies are available through the `test` extra:

```
pip install ".[test]"
```

## Running the agent

```
metricsagent [--config PATH] [--url URL] [--interval SECONDS] [--iterations N]
```

- `--config`: path of the config file. By default this is
  `%APPDATA%\metrics-agent\config.json` on Windows and
  `/etc/metrics-agent/config.json` everywhere else.
- `--url`: base URL of the metrics API. Defaults to the `METRICS_AGENT_URL`
  environment variable, or `http://localhost:8080` if it is not set.
- `--interval`: seconds between samples (default 10).
- `--iterations`: stop after this many samples; without it the agent runs
  until interrupted.

On start the agent reads the user ID (or device key) from the config file.
If the file is missing, unreadable or holds no user ID, it prompts for one
on standard input and tries to save it as `{"user_id": "..."}` (directory
mode `0700`, file mode `0600`); a failure to save is ignored. It then
collects a metrics sample, prints the JSON payload and posts it to
`<url>/metrics`, waiting `--interval` seconds between rounds. Ctrl-C stops
it with exit status 130.

## What is collected

- **Metrics** (`metricsagent.collector.collect`): hostname, CPU percent,
  memory used/total, disk used/total of the filesystem root (`C:\` on
  Windows, `/` elsewhere), uptime in seconds and the UTC collection time in
  the form `2025-01-01T12:00:00Z`.
- **Health report** (`metricsagent.health`): CPU, memory and disk
  percentages truncated to one decimal place, a running count of downtimes,
  and availability (`"xx.x %"`) and SLA (`"xx.xx %"`) strings. A check is
  downtime when CPU, memory or disk usage reaches 95 % or the host has been
  up for less than 24 hours. `HealthTracker` keeps the counts;
  `HealthTracker.record` counts one check from given figures and returns
  whether it was downtime, and `generate_health_report` uses one tracker
  shared by the whole process.
- **Load average** (`metricsagent.load.get_load_average`): 1, 5 and
  15 minute load with min and max, truncated to one decimal place. On Unix
  the operating system's load average is used and min and max equal it; on
  Windows each figure is estimated from three 2-second CPU samples, so the
  call takes about half a minute. `average`, `minimum` and `maximum` are
  the truncating helpers used for this.
- **System summary** (`metricsagent.system.get_system_summary`): IP
  address, OS and architecture, CPU model and core count, RAM in MB, disk
  partition and network interface counts, system log error count, logged-in
  session count, listening port count, formatted uptime, boot time, process
  count and the current user. Log errors come from `/var/log/syslog` or
  `/var/log/messages` on Linux, `log show` on macOS and PowerShell on
  Windows; logins from `who` or PowerShell; listening ports from `ss`
  (falling back to `netstat`) or `netstat -an`. If the log error count
  cannot be obtained the call raises `RuntimeError`; login and port count
  failures are printed and reported as 0.

Records are dataclasses in `metricsagent.models` (`Metrics`,
`HealthReport`, `SystemSummary`, `LoadAverageMetrics`, `Config`); each has
`to_dict()` returning its fields under their JSON key names.

## Using it as a library

```python
from metricsagent.collector import collect
from metricsagent.health import HealthTracker
from metricsagent.sender import send_metrics, send_health_report

metrics = collect("device-1")
print(metrics.to_dict())

tracker = HealthTracker()
report = tracker.generate("device-1")
print(report.availability, report.sla)

send_metrics(metrics, "https://metrics.example.com")
send_health_report(report, "https://metrics.example.com")
```

`send_metrics` posts to `<base_url>/metrics` and `send_health_report` to
`<base_url>/healthReport`, each with an indented JSON body; both print the
payload and the outcome and return `True` only for a 2xx response.

## What it does not do

- The `metricsagent` command sends only metrics samples. Health reports,
  load averages and system summaries are produced by library functions but
  are not sent by the command.
- There is no sender for load averages or system summaries, and no writer
  for any time-series database; the only transport is the HTTP POST in
  `metricsagent.sender`.