"""Location, loading and interactive creation of the agent's config file."""

from __future__ import annotations

import json
import os
import sys
from contextlib import suppress
from pathlib import Path
from typing import Mapping, TextIO

from metricsagent.models import Config

PROMPT = "Enter your User ID (or Device Key): "
STORED_MESSAGE = "✔ User ID stored successfully"


def config_path(platform: str | None = None, environ: Mapping[str, str] | None = None) -> Path:
    """Return the config file path for the given platform."""
    platform = sys.platform if platform is None else platform
    environ = os.environ if environ is None else environ
    if platform.startswith("win"):
        base = environ.get("APPDATA", "")
    else:
        base = "/etc"
    return Path(base) / "metrics-agent" / "config.json"


def load_user_id(path: str | os.PathLike[str] | None = None) -> str:
    """Read the stored user id; raises OSError or ValueError on failure."""
    target = config_path() if path is None else Path(path)
    data = json.loads(target.read_text(encoding="utf-8"))
    if data is None:
        return ""
    if not isinstance(data, dict):
        raise ValueError(f"{target}: config must be a JSON object")
    user_id = data.get("user_id")
    if user_id is None:
        return ""
    if not isinstance(user_id, str):
        raise ValueError(f"{target}: user_id must be a string")
    return user_id


def prompt_and_save_user_id(
    path: str | os.PathLike[str] | None = None,
    input_stream: TextIO | None = None,
    output_stream: TextIO | None = None,
) -> str:
    """Ask for a user id, store it (best effort) and return it."""
    target = config_path() if path is None else Path(path)
    source = sys.stdin if input_stream is None else input_stream
    out = sys.stdout if output_stream is None else output_stream

    out.write(PROMPT)
    out.flush()
    user_id = source.readline().strip()

    text = json.dumps(Config(user_id=user_id).to_dict(), indent=2, ensure_ascii=False)
    with suppress(OSError):
        target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    with suppress(OSError):
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)

    print(STORED_MESSAGE, file=out)
    return user_id