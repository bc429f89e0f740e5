"""Smoke tests for the Numeric Entry entrypoint module."""

from __future__ import annotations

import builtins
import importlib.util
import io
import sys
import types
from contextlib import redirect_stdout
from pathlib import Path

import pytest


def load_entrypoint_module():
    """Load the project entrypoint module without running it as ``__main__``."""
    module_path = Path(__file__).resolve().parents[1] / "__main__.py"
    spec = importlib.util.spec_from_file_location("numeric_entry_entry", module_path)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


@pytest.fixture()
def entry_module():
    return load_entrypoint_module()


def test_parse_arguments_defaults(entry_module):
    args = entry_module.parse_arguments([])
    assert args.check_deps is False
    assert args.force is False
    assert args.log_dir is None


def test_check_dependencies_reports_missing_required(entry_module, monkeypatch):
    """check_dependencies should fail gracefully when PySide6 is unavailable."""
    real_import = builtins.__import__

    def fake_import(name, globals=None, locals=None, fromlist=(), level=0):  # noqa: D401
        if name.startswith("PySide6"):
            raise ImportError("No module named PySide6")
        return real_import(name, globals, locals, fromlist, level)

    monkeypatch.setattr(builtins, "__import__", fake_import)

    buffer = io.StringIO()
    with redirect_stdout(buffer):
        result = entry_module.check_dependencies()

    output = buffer.getvalue()

    assert result is False
    assert "Missing required dependencies" in output
    assert "PySide6" in output


def test_check_dependencies_succeeds_with_stubbed_gui(entry_module, monkeypatch):
    """check_dependencies should pass when PySide6 imports cleanly."""
    pyside6 = types.ModuleType("PySide6")
    pyside6.__version__ = "6.0"
    pyside6.__file__ = "PySide6/__init__.py"

    monkeypatch.setitem(sys.modules, "PySide6", pyside6)
    for name in ("QtCore", "QtWidgets", "QtGui"):
        submodule = types.ModuleType(f"PySide6.{name}")
        monkeypatch.setattr(pyside6, name, submodule, raising=False)
        monkeypatch.setitem(sys.modules, f"PySide6.{name}", submodule)

    buffer = io.StringIO()
    with redirect_stdout(buffer):
        result = entry_module.check_dependencies()

    assert result is True
    assert "version: 6.0" in buffer.getvalue()


def test_main_reports_missing_dependencies(entry_module, monkeypatch):
    """The main function should exit early when dependencies are missing."""
    monkeypatch.setattr(entry_module, "check_dependencies", lambda: False)
    monkeypatch.setattr(sys, "argv", ["numeric-entry", "--check-deps"])

    buffer = io.StringIO()
    with redirect_stdout(buffer):
        exit_code = entry_module.main()

    assert exit_code == 1
    assert "Some dependencies are missing" in buffer.getvalue()


def test_main_refuses_to_start_without_force(entry_module, monkeypatch):
    monkeypatch.setattr(entry_module, "check_dependencies", lambda: False)
    monkeypatch.setattr(sys, "argv", ["numeric-entry"])

    buffer = io.StringIO()
    with redirect_stdout(buffer):
        exit_code = entry_module.main()

    assert exit_code == 1
    assert "--force" in buffer.getvalue()


def test_main_launches_application(entry_module, monkeypatch, tmp_path):
    app_module = types.ModuleType("main")
    app_module.run_application = lambda: 0
    monkeypatch.setitem(sys.modules, "main", app_module)
    monkeypatch.setattr(entry_module, "check_dependencies", lambda: True)
    monkeypatch.setattr(sys, "argv", ["numeric-entry", "--log-dir", str(tmp_path / "logs")])

    with redirect_stdout(io.StringIO()):
        exit_code = entry_module.main()

    assert exit_code == 0
    assert (tmp_path / "logs" / "numeric_entry.log").exists()


def test_main_reports_unexpected_errors(entry_module, monkeypatch):
    def explode():
        raise RuntimeError("window failed")

    app_module = types.ModuleType("main")
    app_module.run_application = explode
    monkeypatch.setitem(sys.modules, "main", app_module)
    monkeypatch.setattr(entry_module, "check_dependencies", lambda: True)
    monkeypatch.setattr(entry_module, "configure_logging", lambda args: None)
    monkeypatch.setattr(sys, "argv", ["numeric-entry"])

    buffer = io.StringIO()
    with redirect_stdout(buffer):
        exit_code = entry_module.main()

    assert exit_code == 1
    assert "RuntimeError: window failed" in buffer.getvalue()
