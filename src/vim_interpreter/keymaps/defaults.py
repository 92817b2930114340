"""Built-in key tables for Normal and Visual mode.

The motion tables are spelled out twice on purpose: the action vocabulary
stays an explicit closed set that tests can enumerate.

``e`` is a real ``word-end`` motion (and ``select-word-end`` in Visual mode)
rather than an alias of ``w``, so its selection stops on the last character
of a word.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from .models import BindingKind, KeyBinding
from .registry import KeyTable

MOTIONS: Mapping[str, str] = MappingProxyType(
    {
        "h": "move-left",
        "l": "move-right",
        "j": "move-down",
        "k": "move-up",
        "w": "word-forward",
        "b": "word-backward",
        "e": "word-end",
        "0": "line-home",
        "$": "line-end",
        "^": "visual-line-home",
        "gg": "buffer-home",
        "G": "buffer-end",
    }
)

VISUAL_MOTIONS: Mapping[str, str] = MappingProxyType(
    {
        "h": "select-left",
        "l": "select-right",
        "j": "select-down",
        "k": "select-up",
        "w": "select-word-forward",
        "b": "select-word-backward",
        "e": "select-word-end",
        "0": "select-line-home",
        "$": "select-line-end",
        "^": "select-visual-line-home",
        "gg": "select-buffer-home",
        "G": "select-buffer-end",
    }
)

# key -> (mode-change action, target mode)
MODE_ENTRIES: Mapping[str, tuple[str, str]] = MappingProxyType(
    {
        "i": ("insert", "insert"),
        "I": ("insert-line-start", "insert"),
        "a": ("append", "insert"),
        "A": ("append-line-end", "insert"),
        "o": ("open-below", "insert"),
        "O": ("open-above", "insert"),
        "v": ("visual", "visual"),
        "V": ("visual-line", "visual-line"),
    }
)

# key -> (edit action, uses count, target mode)
NORMAL_EDITS: Mapping[str, tuple[str, bool, str | None]] = MappingProxyType(
    {
        "dd": ("delete-line", True, None),
        "cc": ("change-line", True, "insert"),
        "yy": ("yank-line", True, None),
        "x": ("delete-char", True, None),
        "p": ("paste-after", True, None),
        "P": ("paste-before", True, None),
        "u": ("undo", False, None),
        "ctrl+r": ("redo", False, None),
        "D": ("delete-to-line-end", False, None),
        "C": ("change-to-line-end", False, "insert"),
    }
)

VISUAL_EDITS: Mapping[str, tuple[str, bool, str | None]] = MappingProxyType(
    {
        "d": ("delete-selection", False, "normal"),
        "x": ("delete-selection", False, "normal"),
        "c": ("change-selection", False, "insert"),
        "y": ("yank-selection", False, "normal"),
    }
)

SEARCHES: Mapping[str, str] = MappingProxyType(
    {
        "/": "search-forward",
        "?": "search-backward",
        "n": "search-next",
        "N": "search-prev",
    }
)


def _motion_bindings(mode: str, table: Mapping[str, str]) -> Iterable[KeyBinding]:
    for key, action in table.items():
        yield KeyBinding.build(key, mode, BindingKind.MOTION, action)


def _edit_bindings(
    mode: str, table: Mapping[str, tuple[str, bool, str | None]]
) -> Iterable[KeyBinding]:
    for key, (action, counted, switch_to) in table.items():
        yield KeyBinding.build(
            key, mode, BindingKind.EDIT, action, counted=counted, switch_to=switch_to
        )


def default_bindings() -> tuple[KeyBinding, ...]:
    bindings: list[KeyBinding] = []
    bindings.extend(_motion_bindings("normal", MOTIONS))
    bindings.extend(_edit_bindings("normal", NORMAL_EDITS))
    for key, (action, target) in MODE_ENTRIES.items():
        bindings.append(
            KeyBinding.build(
                key,
                "normal",
                BindingKind.MODE_CHANGE,
                action,
                counted=False,
                switch_to=target,
            )
        )
    for key, action in SEARCHES.items():
        bindings.append(
            KeyBinding.build(key, "normal", BindingKind.SEARCH, action, counted=False)
        )
    bindings.extend(_motion_bindings("visual", VISUAL_MOTIONS))
    bindings.extend(_edit_bindings("visual", VISUAL_EDITS))
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = default_bindings()


def load_default_keymaps(
    table: KeyTable,
    *,
    replace: bool = False,
    extra_bindings: Iterable[KeyBinding] | None = None,
) -> KeyTable:
    """Register every built-in binding, then any ``extra_bindings``."""

    table.register_many(DEFAULT_BINDINGS, replace=replace)
    if extra_bindings:
        table.register_many(extra_bindings, replace=True)
    return table


__all__ = [
    "DEFAULT_BINDINGS",
    "MODE_ENTRIES",
    "MOTIONS",
    "NORMAL_EDITS",
    "SEARCHES",
    "VISUAL_EDITS",
    "VISUAL_MOTIONS",
    "default_bindings",
    "load_default_keymaps",
]
