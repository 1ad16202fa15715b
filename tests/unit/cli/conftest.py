"""Fixtures shared by the CLI tests."""

import logging

import pytest

from rxmd.constants import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the root logger changes made by ``main``."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def isolated_dir(tmp_path, monkeypatch):
    """Run in an empty directory with no home config and no RXMD_CONFIG."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def render_module(tmp_path, monkeypatch):
    """Provide an importable module with custom render functions."""
    package_dir = tmp_path / "plugins"
    package_dir.mkdir()
    (package_dir / "rxmd_test_renderers.py").write_text(
        "def highlight(captures):\n"
        "    return '<mark>' + captures['text'] + '</mark>'\n"
        "\n"
        "NOT_CALLABLE = 'nope'\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(package_dir))
    return "rxmd_test_renderers"
