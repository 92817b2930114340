"""Action vocabulary shared by the interpreter and its hosts."""

from .core import (
    NONE,
    Action,
    ActionKind,
    edit,
    mode_change,
    motion,
    none_action,
    register,
    search,
)

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
