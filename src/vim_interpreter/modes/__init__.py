"""Mode state, observer bus, and the key interpreter."""

from .bus import ACTION_EMITTED, ENABLED_CHANGED, MODE_CHANGED, STATE_CHANGED, StateBus
from .state import InterpreterState, Mode, SearchDirection, SearchState, StateSnapshot
from .interpreter import ModeInterpreter, create_interpreter

__all__ = [
    "ACTION_EMITTED",
    "ENABLED_CHANGED",
    "MODE_CHANGED",
    "STATE_CHANGED",
    "StateBus",
    "InterpreterState",
    "Mode",
    "SearchDirection",
    "SearchState",
    "StateSnapshot",
    "ModeInterpreter",
    "create_interpreter",
]
