# tests/test_config/test_settings.py
import os
import subprocess
import sys
from pathlib import Path
import json
import pytest
from mut.config.settings import App, UNSUPPORTED_MESSAGE, config_load, config_read


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for k in list(os.environ):
        if k.startswith("MUT_"):
            monkeypatch.delenv(k)


def test_app_default_settings():
    app = App()
    assert app.beQuiet is False
    assert app.fallbackTime == "23:59:59"
    assert app.colorMarker == "§"
    assert app.unsupportedMessage == UNSUPPORTED_MESSAGE
    assert app.identifier == "mut"
    assert app.nullText == "null"


def test_app_env_override(monkeypatch):
    monkeypatch.setenv("MUT_BEQUIET", "true")
    monkeypatch.setenv("MUT_FALLBACKTIME", "00:00:00")
    monkeypatch.setenv("MUT_COLORMARKER", "&")

    app = App()
    assert app.beQuiet is True
    assert app.fallbackTime == "00:00:00"
    assert app.colorMarker == "&"


def test_config_read_missing_file(tmp_path):
    assert config_read(tmp_path / "absent.json") == {}


def test_config_read_malformed_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert config_read(path) == {}


def test_config_read_non_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    assert config_read(path) == {}


def test_config_load_overlays_file(tmp_path, monkeypatch):
    monkeypatch.setenv("MUT_IDENTIFIER", "fromenv")
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"identifier": "fromfile", "nullText": "-"}))
    app = config_load(path)
    assert app.identifier == "fromfile"
    assert app.nullText == "-"


def test_config_load_invalid_values_fall_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"beQuiet": "not a bool"}))
    assert config_load(path).beQuiet is False


def test_config_problems_collected_instead_of_logged(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"beQuiet": "not a bool"}))
    problems = []
    config_load(path, problems=problems)
    assert len(problems) == 1
    assert "Ignoring invalid config file" in problems[0]


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG config dir")
def test_malformed_config_file_at_import_logs_to_stderr(tmp_path):
    (tmp_path / "mut").mkdir()
    (tmp_path / "mut" / "config.json").write_text("{not json")
    env = dict(os.environ)
    env["XDG_CONFIG_HOME"] = str(tmp_path)
    env["MUT_BEQUIET"] = "false"
    env["PYTHONPATH"] = os.pathsep.join(
        [str(Path(__file__).resolve().parents[2]), env.get("PYTHONPATH", "")]
    )

    result = subprocess.run(
        [sys.executable, "-c", "import mut.config.settings"],
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 0
    assert result.stdout == ""
    assert "Could not read config file" in result.stderr
    assert "Logging error" not in result.stderr
