"""Tests for the one-button runner."""

import json
import sys
from pathlib import Path

import pytest

import run


def _invoke(monkeypatch: pytest.MonkeyPatch, argv) -> None:
    monkeypatch.setattr(sys, "argv", ["run.py", *argv])
    run.main()


def test_bad_config_version_exits_cleanly(monkeypatch, tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "wps_config.json"
    config_path.write_text(json.dumps({"version": "9.9", "simulation": {}}))

    with pytest.raises(SystemExit) as exc:
        _invoke(monkeypatch, ["5", "5", "5", "5", "5", "5", "--config", str(config_path)])

    assert exc.value.code == 1
    assert "ERROR" in capsys.readouterr().out


def test_invalid_samples_in_config_exits_cleanly(monkeypatch, tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "wps_config.json"
    config_path.write_text(json.dumps({"version": "1.0", "simulation": {"samples": 0}}))

    with pytest.raises(SystemExit) as exc:
        _invoke(monkeypatch, ["5", "5", "5", "5", "5", "5", "--config", str(config_path)])

    assert exc.value.code == 1
    assert "samples" in capsys.readouterr().out


def test_writes_results(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "wps_config.json"
    config_path.write_text(json.dumps({"version": "1.0", "simulation": {"samples": 50, "salt": 3}}))
    out = tmp_path / "out.json"

    _invoke(monkeypatch, ["10", "1", "1", "1", "1", "1", "--config", str(config_path), "-o", str(out)])

    data = json.loads(out.read_text())
    assert data["samples"] == 50
    assert data["salt"] == 3
