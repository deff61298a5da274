"""Tests for the Finder reveal helper."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from xa_ui.services import finder as finder_mod
from xa_ui.services.finder import FinderRevealer, reveal_script


pytestmark = pytest.mark.unit_ui


def test_reveal_script_selects_the_file() -> None:
    script = reveal_script(Path("/out/My App.ipa"))
    assert 'reveal POSIX file "/out/My App.ipa"' in script
    assert script.startswith('tell application "Finder"')


def test_reveal_runs_osascript(monkeypatch, ui) -> None:
    calls = []

    def fake_run(argv, **kwargs):
        calls.append(argv)
        return subprocess.CompletedProcess(argv, 0, "", "")

    monkeypatch.setattr(finder_mod.subprocess, "run", fake_run)
    FinderRevealer("osascript", ui=ui).reveal(Path("/out/Example.ipa"))
    assert calls[0][:2] == ["osascript", "-e"]
    assert ui.messages == []


def test_reveal_failure_is_a_warning(monkeypatch, ui) -> None:
    def fake_run(argv, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", argv[0])

    monkeypatch.setattr(finder_mod.subprocess, "run", fake_run)
    FinderRevealer("osascript", ui=ui).reveal(Path("/out/Example.ipa"))
    assert len(ui.of_kind("warning")) == 1
