import io
import stat
from pathlib import Path

import pytest

from metricsagent.config import config_path, load_user_id, prompt_and_save_user_id


def test_config_path_unix_uses_etc():
    assert config_path("linux", {}) == Path("/etc/metrics-agent/config.json")


def test_config_path_darwin_uses_etc():
    assert config_path("darwin", {"HOME": "/home/x"}) == Path("/etc/metrics-agent/config.json")


def test_config_path_windows_uses_appdata():
    assert config_path("win32", {"APPDATA": "appdata"}) == Path(
        "appdata", "metrics-agent", "config.json"
    )


def test_config_path_windows_without_appdata_is_relative():
    result = config_path("win32", {})
    assert result == Path("metrics-agent", "config.json")
    assert not result.is_absolute()


def test_prompt_saves_and_load_reads_back(tmp_path):
    target = tmp_path / "nested" / "config.json"
    out = io.StringIO()
    user_id = prompt_and_save_user_id(target, io.StringIO("  device-1 \n"), out)
    assert user_id == "device-1"
    assert load_user_id(target) == "device-1"
    assert out.getvalue().startswith("Enter your User ID (or Device Key): ")
    assert "✔ User ID stored successfully" in out.getvalue()


def test_saved_file_is_indented_json(tmp_path):
    target = tmp_path / "config.json"
    prompt_and_save_user_id(target, io.StringIO("abc\n"), io.StringIO())
    assert target.read_text(encoding="utf-8") == '{\n  "user_id": "abc"\n}'


def test_saved_file_is_private(tmp_path):
    target = tmp_path / "config.json"
    prompt_and_save_user_id(target, io.StringIO("abc\n"), io.StringIO())
    assert stat.S_IMODE(target.stat().st_mode) == 0o600


def test_prompt_returns_id_even_when_save_fails(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    target = blocker / "config.json"
    assert prompt_and_save_user_id(target, io.StringIO("zz\n"), io.StringIO()) == "zz"
    assert not target.exists()


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_user_id(tmp_path / "absent.json")


def test_load_invalid_json_raises(tmp_path):
    target = tmp_path / "config.json"
    target.write_text("{not json")
    with pytest.raises(ValueError):
        load_user_id(target)


def test_load_non_object_raises(tmp_path):
    target = tmp_path / "config.json"
    target.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_user_id(target)


def test_load_without_user_id_returns_empty(tmp_path):
    target = tmp_path / "config.json"
    target.write_text('{"other": 1}')
    assert load_user_id(target) == ""