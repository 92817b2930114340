"""Interpreter state record and its read-only snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from vim_interpreter.registers import RegisterBank


class Mode(str, Enum):
    """Available editing modes."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    VISUAL_LINE = "visual-line"

    @property
    def is_visual(self) -> bool:
        return self in (Mode.VISUAL, Mode.VISUAL_LINE)

    @property
    def table_group(self) -> Optional[str]:
        if self is Mode.NORMAL:
            return "normal"
        if self.is_visual:
            return "visual"
        return None


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(slots=True)
class SearchState:
    pattern: str = ""
    direction: SearchDirection = SearchDirection.FORWARD
    last_pattern: Optional[str] = None


@dataclass(slots=True)
class InterpreterState:
    """Mutable record owned by ``ModeInterpreter``; hosts read snapshots."""

    mode: Mode = Mode.NORMAL
    enabled: bool = False
    pending_count: str = ""
    pending_prefix: str = ""
    last_motion: Optional[str] = None
    registers: RegisterBank = field(default_factory=RegisterBank)
    search: SearchState = field(default_factory=SearchState)

    @property
    def count(self) -> int:
        return int(self.pending_count) if self.pending_count else 1

    def reset_pending(self) -> None:
        self.pending_count = ""
        self.pending_prefix = ""

    def snapshot(self) -> "StateSnapshot":
        return StateSnapshot(
            mode=self.mode,
            enabled=self.enabled,
            pending_count=self.pending_count,
            pending_prefix=self.pending_prefix,
            last_motion=self.last_motion,
            registers=MappingProxyType(self.registers.as_dict()),
            search_pattern=self.search.pattern,
            search_direction=self.search.direction,
            last_search=self.search.last_pattern,
        )


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    mode: Mode
    enabled: bool
    pending_count: str
    pending_prefix: str
    last_motion: Optional[str]
    registers: Mapping[str, str]
    search_pattern: str
    search_direction: SearchDirection
    last_search: Optional[str]

    @property
    def pending(self) -> str:
        """Keys typed so far for an unfinished command, e.g. ``"3d"``."""

        return self.pending_count + self.pending_prefix


__all__ = [
    "InterpreterState",
    "Mode",
    "SearchDirection",
    "SearchState",
    "StateSnapshot",
]
