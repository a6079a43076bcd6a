"""
Unit Tests: Command line interface
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from taiko_configurator.main import EXIT_INVALID, EXIT_LOAD_FAILED, EXIT_OK, main


@pytest.fixture
def run(tmp_path):
    log_dir = tmp_path / "logs"

    def _run(*args):
        return main(["--log-dir", str(log_dir), *args])
    return _run


@pytest.fixture
def config_file(tmp_path):
    def _write(options):
        path = tmp_path / "taiko.json"
        path.write_text(json.dumps({"version": "1.0", "taikoAddonOptions": options}),
                        encoding="utf-8")
        return str(path)
    return _write


def test_validate_valid_file(run, config_file, capsys):
    assert run("validate", config_file({"enabled": 1, "sensor1Pin": 26})) == EXIT_OK
    assert "Configuration is valid" in capsys.readouterr().out


def test_validate_reports_errors(run, config_file, capsys):
    assert run("validate", config_file({"enabled": 1, "debounceMillis": 0})) == EXIT_INVALID
    assert "ERROR   debounceMillis" in capsys.readouterr().out


def test_validate_force_enable(run, config_file):
    path = config_file({"enabled": 0, "debounceMillis": 0})
    assert run("validate", path) == EXIT_OK
    assert run("validate", path, "--force-enable") == EXIT_INVALID


def test_validate_pin_warnings(run, config_file, capsys):
    path = config_file({"enabled": 1, "sensor1Pin": 26})
    assert run("validate", path, "--used-pins", "26") == EXIT_OK
    assert "WARNING sensor1Pin" in capsys.readouterr().out


def test_validate_huge_integer(run, config_file, capsys):
    path = config_file({"enabled": 1, "keyTimeoutMillis": 10**400})
    assert run("validate", path) == EXIT_INVALID
    assert "ERROR   keyTimeoutMillis" in capsys.readouterr().out
    assert run("resolve", path) == EXIT_OK


def test_validate_missing_file(run, tmp_path, capsys):
    assert run("validate", str(tmp_path / "missing.json")) == EXIT_LOAD_FAILED
    assert "not found" in capsys.readouterr().err


def test_defaults(run, capsys):
    assert run("defaults") == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["taikoAddonOptions"]["debounceMillis"] == 45


def test_schema(run, capsys):
    assert run("schema") == EXIT_OK
    schema = json.loads(capsys.readouterr().out)
    assert schema["then"]["properties"]["sensor1ThresholdLight"]["maximum"] == 4095


def test_pins(run, capsys):
    assert run("pins", "--used-pins", "27") == EXIT_OK
    assert capsys.readouterr().out.strip() == "Available ADC pins: 26, 28, 29"


def test_resolve(run, config_file, capsys):
    assert run("resolve", config_file({"enabled": 1, "sensor2Pin": 27, "debounceMillis": 0})) == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["enabled"] is True
    assert data["debounce_millis"] == 45
    assert data["sensors"][1]["adc_channel"] == 1
    assert data["sensors"][1]["active"] is True
    assert data["sensors"][0]["suppressed_by"] == [2, 3]
