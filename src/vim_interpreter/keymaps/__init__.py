"""Key events, binding tables, and the built-in keymaps."""

from .models import BindingKind, KeyBinding, KeyEvent, keys
from .registry import KeymapConflictError, KeyTable, TableStats
from .defaults import (
    DEFAULT_BINDINGS,
    MOTIONS,
    VISUAL_MOTIONS,
    load_default_keymaps,
)

__all__ = [
    "BindingKind",
    "KeyBinding",
    "KeyEvent",
    "keys",
    "KeyTable",
    "KeymapConflictError",
    "TableStats",
    "DEFAULT_BINDINGS",
    "MOTIONS",
    "VISUAL_MOTIONS",
    "load_default_keymaps",
]
