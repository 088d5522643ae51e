import importlib.util
import json
import sys
from pathlib import Path

import pytest


def load_cli():
    spec = importlib.util.spec_from_file_location(
        "project_updater_cli", Path(__file__).resolve().parents[1] / "project-updater.py"
    )
    cli = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = cli
    spec.loader.exec_module(cli)
    return cli


def test_state_round_trip(tmp_path):
    cli = load_cli()
    path = tmp_path / "updater_config.json"
    cli.save_state(path, "omen", "1.2.0", True, False)
    state = cli.UpdaterState.load(path)
    assert state == cli.UpdaterState(
        package_name="omen", version="1.2.0", initialized=True, interrupted=False
    )


def test_state_file_schema(tmp_path):
    cli = load_cli()
    path = tmp_path / "state" / "updater_config.json"
    cli.save_state(path, "omen", "2.0", False, True)
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "packageName": "omen",
        "version": "2.0",
        "initialized": False,
        "interrupted": True,
    }


def test_missing_file_returns_defaults(tmp_path):
    cli = load_cli()
    state = cli.UpdaterState.load(tmp_path / "nope.json")
    assert state.initialized is False
    assert state.interrupted is False
    assert state.package_name == "" and state.version == ""


def test_save_overwrites_whole_record(tmp_path):
    cli = load_cli()
    path = tmp_path / "updater_config.json"
    path.write_text(json.dumps({"packageName": "x", "extra": 1}), encoding="utf-8")
    cli.save_state(path, "omen", "1.0", True, False)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert "extra" not in data
    assert data["packageName"] == "omen"
    # no temp files left behind by the atomic write
    assert [p.name for p in tmp_path.iterdir()] == ["updater_config.json"]


def test_corrupt_file_resets_with_warning(tmp_path, capsys):
    cli = load_cli()
    path = tmp_path / "updater_config.json"
    path.write_text("{not json", encoding="utf-8")
    state = cli.UpdaterState.load(path)
    assert state == cli.UpdaterState()
    assert "Could not load state" in capsys.readouterr().out


def test_corrupt_file_strict_raises(tmp_path):
    cli = load_cli()
    path = tmp_path / "updater_config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(cli.ConfigReadError):
        cli.UpdaterState.load(path, strict=True)


def test_mark_interrupted_keeps_saved_fields(tmp_path):
    cli = load_cli()
    path = tmp_path / "updater_config.json"
    cli.save_state(path, "omen", "1.0", True, False)
    state = cli.mark_interrupted(path, "other", "9.9")
    assert state == cli.UpdaterState("omen", "1.0", True, True)
    assert cli.UpdaterState.load(path) == state


def test_mark_interrupted_without_file_uses_fallbacks(tmp_path):
    cli = load_cli()
    path = tmp_path / "updater_config.json"
    state = cli.mark_interrupted(path, "omen", "0.1")
    assert state == cli.UpdaterState("omen", "0.1", False, True)


def test_default_state_path_env_override(tmp_path, monkeypatch):
    cli = load_cli()
    monkeypatch.delenv("PROJECT_UPDATER_STATE", raising=False)
    assert cli.default_state_path(tmp_path) == tmp_path / "updater_config.json"
    monkeypatch.setenv("PROJECT_UPDATER_STATE", str(tmp_path / "elsewhere.json"))
    assert cli.default_state_path(tmp_path) == tmp_path / "elsewhere.json"
