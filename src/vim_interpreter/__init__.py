"""UI-agnostic modal (Vim-style) key interpreter."""

from vim_interpreter.actions import Action, ActionKind
from vim_interpreter.keymaps import KeyEvent
from vim_interpreter.modes import Mode, ModeInterpreter, StateSnapshot

__all__ = [
    "Action",
    "ActionKind",
    "KeyEvent",
    "Mode",
    "ModeInterpreter",
    "StateSnapshot",
    "actions",
    "adapters",
    "keymaps",
    "modes",
    "registers",
    "runtime",
    "settings",
]

__version__ = "0.1.0"
