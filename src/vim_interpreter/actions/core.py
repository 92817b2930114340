"""Action descriptors emitted by the interpreter, one per key event."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ActionKind(str, Enum):
    """Discriminator for the ``Action`` variant."""

    NONE = "none"
    MOTION = "motion"
    EDIT = "edit"
    MODE_CHANGE = "mode-change"
    SEARCH = "search"
    REGISTER = "register"


@dataclass(frozen=True, slots=True)
class Action:
    """Abstract editing intent for the host surface to apply.

    ``name`` identifies the motion, edit, mode or search verb. ``count`` is
    only meaningful for motions and edits; it is always at least 1.
    """

    kind: ActionKind = ActionKind.NONE
    name: Optional[str] = None
    count: int = 1
    pattern: Optional[str] = None
    register: Optional[str] = None

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError("count must be a positive integer")

    @property
    def is_none(self) -> bool:
        return self.kind is ActionKind.NONE


NONE = Action()


def none_action() -> Action:
    return NONE


def motion(name: str, count: int = 1) -> Action:
    return Action(ActionKind.MOTION, name=name, count=count)


def edit(name: str, count: int = 1) -> Action:
    return Action(ActionKind.EDIT, name=name, count=count)


def mode_change(name: str) -> Action:
    return Action(ActionKind.MODE_CHANGE, name=name)


def search(name: str, pattern: Optional[str] = None) -> Action:
    return Action(ActionKind.SEARCH, name=name, pattern=pattern)


def register(name: str) -> Action:
    # Reserved for named-register selection; no key transition emits it yet.
    return Action(ActionKind.REGISTER, register=name)


__all__ = [
    "Action",
    "ActionKind",
    "NONE",
    "none_action",
    "motion",
    "edit",
    "mode_change",
    "search",
    "register",
]
