import importlib
import sys

import pytest


def test_pkg_main_delegates_to_main_flow(monkeypatch):
    pkg = importlib.import_module("project_updater")
    main_flow = importlib.import_module("project_updater.main_flow")
    monkeypatch.setattr(main_flow, "main", lambda argv=None: 7)
    assert pkg.main() == 7


def test_cli_run_exits_with_main_code(monkeypatch):
    cli = importlib.import_module("project_updater.cli")
    monkeypatch.setattr(cli, "main", lambda: 3)
    with pytest.raises(SystemExit) as exc:
        cli.run()
    assert exc.value.code == 3


def test_cli_run_turns_ctrl_c_into_exit_one(monkeypatch):
    cli = importlib.import_module("project_updater.cli")

    def interrupted():
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "main", interrupted)
    with pytest.raises(SystemExit) as exc:
        cli.run()
    assert exc.value.code == 1


def test_cli_facade_exports():
    impl = importlib.import_module("project_updater.impl")
    cli = importlib.import_module("project_updater.cli")
    assert cli.main is impl.main


def test_sigterm_handler_raises_keyboard_interrupt():
    main_flow = importlib.import_module("project_updater.main_flow")
    with pytest.raises(KeyboardInterrupt):
        main_flow._raise_keyboard_interrupt(15, None)


def test_launcher_reexports(monkeypatch):
    import importlib.util
    from pathlib import Path

    spec = importlib.util.spec_from_file_location(
        "project_updater_cli", Path(__file__).resolve().parents[1] / "project-updater.py"
    )
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, spec.name, module)
    spec.loader.exec_module(module)
    assert module.main is importlib.import_module("project_updater.impl").main
    assert "parse_changelog" in module.__all__


def test_get_version_falls_back_to_pyproject(monkeypatch):
    import importlib.metadata
    import importlib.util
    from pathlib import Path

    spec = importlib.util.spec_from_file_location(
        "project_updater_cli", Path(__file__).resolve().parents[1] / "project-updater.py"
    )
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, spec.name, module)
    spec.loader.exec_module(module)

    def not_installed(name):
        raise importlib.metadata.PackageNotFoundError(name)

    monkeypatch.setattr(module, "pkg_version", not_installed)
    assert module.get_version() == "0.3.0"


def test_facade_exports_only_patch_points():
    impl = importlib.import_module("project_updater.impl")
    assert "subprocess" in impl.__all__ and "urllib" in impl.__all__
    for name in ("os", "shutil", "logging"):
        assert name not in impl.__all__
