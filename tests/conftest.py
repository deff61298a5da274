from __future__ import annotations

from collections import defaultdict
from contextlib import nullcontext
from pathlib import Path
from typing import Callable, Sequence

import pytest
from rich.console import Console
from rich.table import Table

from xa_app.api import RunConfiguration, ToolPaths, ToolResult

KNOWN_MARKERS = {"unit_common", "unit_app", "unit_ui", "e2e"}

PROJECT_NAME = "Example"
IDENTITY = "iPhone Distribution: Example Co"

# pbxproj key paths of a project whose release configuration sits at index 1.
RELEASE_GRAPH = {
    "rootObject": "ROOT0001",
    "objects:ROOT0001:buildConfigurationList": "LIST0001",
    "objects:LIST0001:buildConfigurations:1": "CONF0002",
    "objects:CONF0002:name": "Release",
    "objects:CONF0002:buildSettings:CODE_SIGN_IDENTITY[sdk=iphoneos*]": IDENTITY,
}


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """
    Print statistics by marker at the end of the test session.
    """
    _ = (exitstatus, config)
    marker_stats = defaultdict(lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0})

    for outcome in ["passed", "failed", "skipped"]:
        for report in terminalreporter.stats.get(outcome, []):
            # Only count the actual test call, or setup skips
            if report.when == "call" or (report.when == "setup" and report.outcome == "skipped"):
                duration = getattr(report, "duration", 0.0)
                for marker in KNOWN_MARKERS:
                    if marker in report.keywords:
                        stats = marker_stats[marker]
                        stats[outcome] += 1
                        stats["total"] += 1
                        stats["duration"] += duration

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
            f"{stats['duration']:.2f}",
        )

    console = Console()
    console.print("\n")
    console.print(table)


Handler = Callable[[tuple[str, ...], Path | None], tuple[int, str]]


class FakeRunner:
    """Records tool invocations; responses are looked up by argv[0]."""

    def __init__(self) -> None:
        self.calls: list[tuple[tuple[str, ...], Path | None]] = []
        self.handlers: dict[str, Handler] = {}

    def on(self, tool: str, handler: Handler | None = None, *, returncode: int = 0, output: str = "") -> None:
        self.handlers[tool] = handler or (lambda argv, cwd: (returncode, output))

    def run(self, argv: Sequence[str], *, cwd: Path | None = None) -> ToolResult:
        args = tuple(str(arg) for arg in argv)
        self.calls.append((args, cwd))
        handler = self.handlers.get(args[0])
        if handler is None:
            return ToolResult(args, 0, "")
        returncode, output = handler(args, cwd)
        return ToolResult(args, returncode, output)

    def invocations(self, tool: str) -> list[tuple[str, ...]]:
        return [argv for argv, _ in self.calls if argv[0] == tool]


class FakePlistReader:
    """Serves key paths per plist file name; unknown keys read as ''."""

    def __init__(self, values: dict[str, dict[str, str]] | None = None) -> None:
        self.values = values or {}
        self.reads: list[tuple[Path, str]] = []

    def read(self, plist: Path, key_path: str) -> str:
        self.reads.append((plist, key_path))
        return self.values.get(plist.name, {}).get(key_path, "")


def simulate_xcodebuild(argv: tuple[str, ...], cwd: Path | None) -> tuple[int, str]:
    """Create the .app and .dSYM products under SYMROOT like a real build."""
    if "clean" in argv:
        return 0, "** CLEAN SUCCEEDED **\n"
    project = Path(argv[argv.index("-project") + 1])
    name = project.name[: -len(".xcodeproj")]
    symroot = next(Path(arg.split("=", 1)[1]) for arg in argv if arg.startswith("SYMROOT="))
    products = symroot / "Release-iphoneos"
    (products / f"{name}.app").mkdir(parents=True, exist_ok=True)
    (products / f"{name}.app.dSYM" / "Contents").mkdir(parents=True, exist_ok=True)
    return 0, "** BUILD SUCCEEDED **\n"


def simulate_package(argv: tuple[str, ...], cwd: Path | None) -> tuple[int, str]:
    Path(argv[argv.index("-o") + 1]).write_bytes(b"PK\x03\x04ipa")
    return 0, "Results at ...\n"


def simulate_zip(argv: tuple[str, ...], cwd: Path | None) -> tuple[int, str]:
    assert cwd is not None and (cwd / argv[-1]).exists()
    Path(argv[-2]).write_bytes(b"PK\x03\x04dsym")
    return 0, f"  adding: {argv[-1]}/ (stored 0%)\n"


@pytest.fixture
def tools() -> ToolPaths:
    return ToolPaths(
        xcodebuild="xcodebuild",
        plistbuddy="PlistBuddy",
        xcrun="xcrun",
        zip="zip",
        growlnotify="growlnotify",
        mobileprovision="mobileprovision",
        osascript="osascript",
    )


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def working_runner(runner: FakeRunner, tools: ToolPaths) -> FakeRunner:
    """A runner whose build, package and zip steps all succeed."""
    runner.on(tools.xcodebuild, simulate_xcodebuild)
    runner.on(tools.xcrun, simulate_package)
    runner.on(tools.zip, simulate_zip)
    return runner


@pytest.fixture
def plist_reader() -> FakePlistReader:
    return FakePlistReader(
        {
            "project.pbxproj": dict(RELEASE_GRAPH),
            "Info.plist": {"CFBundleVersion": "1.4.2"},
        }
    )


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def project_dir(workdir: Path) -> Path:
    project = workdir / f"{PROJECT_NAME}.xcodeproj"
    project.mkdir()
    (project / "project.pbxproj").write_text("// !$*UTF8*$!\n{}\n", encoding="utf-8")
    return project


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    return tmp_path / "export"


@pytest.fixture
def make_config(export_dir: Path, tools: ToolPaths) -> Callable[..., RunConfiguration]:
    def _make(**overrides) -> RunConfiguration:
        values = {"export_path": export_dir, "tools": tools}
        values.update(overrides)
        return RunConfiguration(**values)

    return _make


class RecordingUI:
    """UIAdapter that keeps every message as (kind, text)."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.tables: list[tuple[str, list[str], list[list[str]]]] = []

    def show_info(self, message: str) -> None:
        self.messages.append(("info", message))

    def show_warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def show_error(self, message: str) -> None:
        self.messages.append(("error", message))

    def show_success(self, message: str) -> None:
        self.messages.append(("success", message))

    def show_panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None:
        self.messages.append(("panel", f"{title}: {message}"))

    def show_table(self, title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None:
        self.tables.append((title, list(columns), [list(row) for row in rows]))

    def status(self, message: str):
        self.messages.append(("status", message))
        return nullcontext()

    def of_kind(self, kind: str) -> list[str]:
        return [text for k, text in self.messages if k == kind]


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def notify(self, title: str, message: str) -> None:
        self.sent.append((title, message))


class RecordingRevealer:
    def __init__(self) -> None:
        self.revealed: list[Path] = []

    def reveal(self, path: Path) -> None:
        self.revealed.append(path)


@pytest.fixture
def ui() -> RecordingUI:
    return RecordingUI()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def revealer() -> RecordingRevealer:
    return RecordingRevealer()
