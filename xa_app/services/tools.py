"""Thin wrappers around the external command-line tools."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)

# Conventional shell status for "command not found / not executable".
EXEC_FAILED_STATUS = 127


@dataclass(frozen=True)
class ToolResult:
    """Exit status and combined stdout/stderr of one tool invocation."""

    argv: tuple[str, ...]
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)


class CommandRunner(Protocol):
    """Anything able to run an argv and report its status."""

    def run(self, argv: Sequence[str], *, cwd: Path | None = None) -> ToolResult: ...


class ToolRunner:
    """Run tools synchronously, capturing stderr together with stdout."""

    def run(self, argv: Sequence[str], *, cwd: Path | None = None) -> ToolResult:
        args = tuple(str(arg) for arg in argv)
        logger.debug("Running %s (cwd=%s)", shlex.join(args), cwd)
        try:
            completed = subprocess.run(
                list(args),
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            logger.warning("Could not execute %s: %s", args[0], exc)
            return ToolResult(args, EXEC_FAILED_STATUS, f"{args[0]}: {exc.strerror or exc}")
        logger.debug("%s exited with status %s", args[0], completed.returncode)
        return ToolResult(args, completed.returncode, completed.stdout or "")


class PlistReader(Protocol):
    """Scalar lookups by key path in a property list."""

    def read(self, plist: Path, key_path: str) -> str: ...


class PlistBuddyReader:
    """Query property lists (including old-style pbxproj files) via PlistBuddy.

    Key paths use PlistBuddy syntax without the leading colon, e.g.
    ``objects:<id>:buildConfigurations:1``. A failed or empty lookup reads as
    the empty string.
    """

    def __init__(self, runner: CommandRunner, executable: str) -> None:
        self.runner = runner
        self.executable = executable

    def read(self, plist: Path, key_path: str) -> str:
        result = self.runner.run(
            [self.executable, "-c", f"Print :{key_path}", str(plist)]
        )
        if not result.ok:
            logger.debug("No value for %s in %s", key_path, plist)
            return ""
        return result.output.rstrip("\n")
