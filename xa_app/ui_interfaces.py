"""App-level UI contracts and no-op implementations."""

from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext
from pathlib import Path
from typing import Protocol, Sequence


class UIAdapter(Protocol):
    """Minimal interface for presentation concerns."""

    def show_info(self, message: str) -> None:
        """Render an informational message."""

    def show_warning(self, message: str) -> None:
        """Render a warning message."""

    def show_error(self, message: str) -> None:
        """Render an error message."""

    def show_success(self, message: str) -> None:
        """Render a success message."""

    def show_panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None:
        """Render a block/panel container."""

    def show_table(self, title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None:
        """Render a simple table."""

    def status(self, message: str) -> AbstractContextManager[None]:
        """Context manager that shows a status/spinner while work is running."""


class Notifier(Protocol):
    """Best-effort progress alerts. Implementations never raise."""

    def notify(self, title: str, message: str) -> None: ...


class FileRevealer(Protocol):
    """Best-effort "show in file manager". Implementations never raise."""

    def reveal(self, path: Path) -> None: ...


class NoOpUIAdapter(UIAdapter):
    """UI adapter that drops every message."""

    def show_info(self, message: str) -> None:  # pragma: no cover - trivial
        pass

    def show_warning(self, message: str) -> None:  # pragma: no cover - trivial
        pass

    def show_error(self, message: str) -> None:  # pragma: no cover - trivial
        pass

    def show_success(self, message: str) -> None:  # pragma: no cover - trivial
        pass

    def show_panel(self, message: str, title: str | None = None, border_style: str | None = None) -> None:  # pragma: no cover - trivial
        pass

    def show_table(self, title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None:  # pragma: no cover - trivial
        pass

    def status(self, message: str) -> AbstractContextManager[None]:
        return nullcontext()


class NoOpNotifier(Notifier):
    def notify(self, title: str, message: str) -> None:  # pragma: no cover - trivial
        pass


class NoOpFileRevealer(FileRevealer):
    def reveal(self, path: Path) -> None:  # pragma: no cover - trivial
        pass
