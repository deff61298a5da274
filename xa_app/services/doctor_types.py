"""Result types for the external tool checks."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DoctorCheckItem:
    """One external tool and whether it can be executed."""

    tool: str
    path: str
    ok: bool
    required: bool

    @property
    def label(self) -> str:
        return f"{self.tool} ({self.path})"

    @property
    def failed(self) -> bool:
        return self.required and not self.ok


@dataclass(frozen=True)
class DoctorCheckGroup:
    title: str
    items: list[DoctorCheckItem] = field(default_factory=list)

    @property
    def failures(self) -> int:
        return sum(1 for item in self.items if item.failed)


@dataclass(frozen=True)
class DoctorReport:
    groups: list[DoctorCheckGroup] = field(default_factory=list)
    info_messages: list[str] = field(default_factory=list)

    @property
    def total_failures(self) -> int:
        return sum(group.failures for group in self.groups)
