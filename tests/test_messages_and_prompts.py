import importlib.util
import sys
from pathlib import Path


def load_cli():
    spec = importlib.util.spec_from_file_location(
        "project_updater_cli", Path(__file__).resolve().parents[1] / "project-updater.py"
    )
    cli = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = cli
    spec.loader.exec_module(cli)
    return cli


def test_placeholders_substituted_once():
    cli = load_cli()
    out = cli.fill_placeholders(
        "{{packageName}} {{version}} {{url}} {{packageName}}", "omen", "1.0", "http://x"
    )
    assert out == "omen 1.0 http://x {{packageName}}"


def test_placeholder_values_are_not_expanded_again():
    cli = load_cli()
    out = cli.fill_placeholders("{{packageName}}@{{version}}", "{{version}}", "2.0")
    assert out == "{{version}}@2.0"


def test_unknown_and_missing_placeholders():
    cli = load_cli()
    assert cli.fill_placeholders("{{other}} {{url}}", "p", "v") == "{{other}} "


def test_language_fallback_per_key(monkeypatch):
    cli = load_cli()
    monkeypatch.delitem(cli.load_messages.__globals__["ES"], "title")
    es = cli.load_messages("es-ES")
    assert es.language == "es"
    assert es["title"] == "PROJECT UPDATER"
    assert es["updateCancel"] == "Actualización cancelada."
    assert cli.load_messages("fr")["updateCancel"] == "Update cancelled."


def test_unknown_key_renders_itself():
    cli = load_cli()
    messages = cli.load_messages("en")
    assert messages["noSuchKey"] == "noSuchKey"
    assert "noSuchKey" not in messages
    assert messages.get("noSuchKey") is None
    assert messages.get("noSuchKey", "fallback") == "fallback"
    assert messages.get("updateCancel") == "Update cancelled."
    assert messages.fill("updated", "omen", "3.1") == "omen is up to date (3.1)."


def test_prompt_choice_and_yes_no(monkeypatch, capsys):
    cli = load_cli()
    inputs = iter(["0", "2", "", "no", "y", "maybe", "n"])
    monkeypatch.setattr("builtins.input", lambda _: next(inputs))

    assert cli.prompt_choice("Pick", ["one", "two", "three"]) == 1
    assert "Invalid choice" in capsys.readouterr().out

    assert cli.prompt_yes_no("Q?", default=True) is True
    assert cli.prompt_yes_no("Q?", default=True) is False
    assert cli.prompt_yes_no("Q?", default=False) is True
    assert cli.prompt_yes_no("Q?", default=True) is False
    assert "answer y or n" in capsys.readouterr().out


def test_select_package_by_number_or_name(monkeypatch):
    cli = load_cli()
    inputs = iter(["2", "alpha"])
    monkeypatch.setattr("builtins.input", lambda _: next(inputs))
    assert cli.select_package(["alpha", "beta"], "Select") == "beta"
    assert cli.select_package(["alpha", "beta"], "Select") == "alpha"


def test_prompt_propagates_ctrl_c(monkeypatch):
    cli = load_cli()

    def interrupt(_):
        raise KeyboardInterrupt

    monkeypatch.setattr("builtins.input", interrupt)
    try:
        cli.prompt_yes_no("Q?")
    except KeyboardInterrupt:
        pass
    else:  # pragma: no cover
        raise AssertionError("KeyboardInterrupt was swallowed")
