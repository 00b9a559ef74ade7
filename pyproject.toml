[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "metricsagent"
version = "0.1.0"
description = "A small agent that samples host metrics and posts them as JSON to an HTTP API"
requires-python = ">=3.10"
keywords = ["metrics", "monitoring", "agent", "health", "load-average", "system-summary"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]
dependencies = [
    "psutil",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
metricsagent = "metricsagent.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["metricsagent"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
