"""Tests for the Typer entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from xa_app.services.run_types import PackagedArtifact, PipelineResult, PipelineStage
from xa_common.errors import AmbiguousProject
from xa_ui.cli import main as cli_main


pytestmark = pytest.mark.unit_ui


class StubController:
    def __init__(self, result: PipelineResult):
        self.result = result
        self.configs = []

    def run(self, config):
        self.configs.append(config)
        return self.result


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in ("XA_CONFIG_PATH", "XA_EXPORT_PATH", "XA_IDENTITY", "XA_MOBILE_PROVISION", "XA_NOTIFY", "XA_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def cli(monkeypatch, ui):
    controllers: list[StubController] = []

    def install(result: PipelineResult) -> list[StubController]:
        def fake_create_controller(config, ui_adapter):
            controller = StubController(result)
            controllers.append(controller)
            return controller

        monkeypatch.setattr(cli_main, "create_controller", fake_create_controller)
        monkeypatch.setattr(cli_main, "create_ui", lambda: ui)
        return controllers

    return install


def test_version_flag() -> None:
    result = CliRunner().invoke(cli_main.app, ["--version"])
    assert result.exit_code == 0
    assert "Version 1.1.0" in result.output


def test_options_reach_the_configuration(cli, tmp_path) -> None:
    controllers = cli(PipelineResult(PipelineStage.DONE, 0))
    result = CliRunner().invoke(
        cli_main.app,
        ["-n", "-c", "-s", "-g", "-o", str(tmp_path / "out"), "-i", "Forced", "-p", "Demo.xcodeproj"],
    )
    assert result.exit_code == 0
    (config,) = controllers[0].configs
    assert not config.keep_symbols
    assert config.clean and config.reveal and config.notify
    assert config.export_path == tmp_path / "out"
    assert config.identity == "Forced"
    assert config.project == Path("Demo.xcodeproj")


def test_legacy_option_spellings(cli, tmp_path) -> None:
    controllers = cli(PipelineResult(PipelineStage.DONE, 0))
    result = CliRunner().invoke(
        cli_main.app,
        [
            "--do_not_keep_dsym_symbols",
            "--ipa_export_path", str(tmp_path),
            "--developper_identity", "",
            "--archive_from_app_path", str(tmp_path / "A.app"),
        ],
    )
    assert result.exit_code == 0
    (config,) = controllers[0].configs
    assert config.identity == ""
    assert config.prebuilt


def test_exit_code_follows_the_pipeline(cli, ui) -> None:
    error = AmbiguousProject("Error: The directory /w contains 2 projects")
    cli(PipelineResult(PipelineStage.LOCATE, 3, error=error))
    result = CliRunner().invoke(cli_main.app, [])
    assert result.exit_code == 3
    assert ui.of_kind("error") == ["Error: The directory /w contains 2 projects"]


def test_verbose_shows_parameters(cli, ui) -> None:
    cli(PipelineResult(PipelineStage.DONE, 0))
    CliRunner().invoke(cli_main.app, ["-v"])
    assert ui.tables[0][0] == "Performing task with options"


def test_json_summary_is_written(cli, tmp_path) -> None:
    ipa = tmp_path / "Example.ipa"
    cli(PipelineResult(PipelineStage.DONE, 0, package=PackagedArtifact(ipa, "X", tmp_path / "p")))
    summary = tmp_path / "reports" / "run.json"
    result = CliRunner().invoke(cli_main.app, ["--json-summary", str(summary)])
    assert result.exit_code == 0
    payload = json.loads(summary.read_text())
    assert payload["success"] is True
    assert payload["ipa"] == str(ipa)


def test_bad_settings_file_exits_1(cli, tmp_path) -> None:
    controllers = cli(PipelineResult(PipelineStage.DONE, 0))
    settings = tmp_path / "bad.yaml"
    settings.write_text("- not\n- a mapping\n")
    result = CliRunner().invoke(cli_main.app, ["--config", str(settings)])
    assert result.exit_code == 1
    assert controllers == []


def test_doctor_reports_missing_tools(cli, ui, tmp_path) -> None:
    cli(PipelineResult(PipelineStage.DONE, 0))
    settings = tmp_path / "tools.yaml"
    settings.write_text(f"tools:\n  xcodebuild: {tmp_path / 'missing'}\n")
    result = CliRunner().invoke(cli_main.app, ["doctor", "--config", str(settings)])
    assert result.exit_code == 1
    assert ui.tables[0][0] == "Build Tools"
    assert ui.tables[0][2][0] == [f"xcodebuild ({tmp_path / 'missing'})", "✗"]


def test_short_help_option() -> None:
    result = CliRunner().invoke(cli_main.app, ["-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output
