from __future__ import annotations

import importlib
from types import SimpleNamespace

import pytest

from config import development
from src.member_portal.member_portal.main import should_start_monitor


def test_monitor_off_when_disabled(monkeypatch):
    monkeypatch.setenv("WERKZEUG_RUN_MAIN", "true")
    assert not should_start_monitor(SimpleNamespace(ENABLE_MONITOR=False, DEBUG=True))
    assert not should_start_monitor(SimpleNamespace())


def test_monitor_skipped_in_reloader_parent(monkeypatch):
    monkeypatch.delenv("WERKZEUG_RUN_MAIN", raising=False)
    assert not should_start_monitor(SimpleNamespace(ENABLE_MONITOR=True, DEBUG=True))


def test_monitor_starts_in_reloader_child(monkeypatch):
    monkeypatch.setenv("WERKZEUG_RUN_MAIN", "true")
    assert should_start_monitor(SimpleNamespace(ENABLE_MONITOR=True, DEBUG=True))


@pytest.mark.parametrize("run_main", [None, "true"])
def test_monitor_starts_without_debug(monkeypatch, run_main):
    if run_main is None:
        monkeypatch.delenv("WERKZEUG_RUN_MAIN", raising=False)
    else:
        monkeypatch.setenv("WERKZEUG_RUN_MAIN", run_main)
    assert should_start_monitor(SimpleNamespace(ENABLE_MONITOR=True, DEBUG=False))


def test_development_defaults_leave_monitor_off(monkeypatch):
    monkeypatch.delenv("ENABLE_MONITOR", raising=False)
    assert importlib.reload(development).ENABLE_MONITOR is False
