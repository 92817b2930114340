"""Dataclasses describing key events and table bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

MODIFIER_ORDER = ("ctrl", "alt", "shift")
TABLE_GROUPS = ("normal", "visual")


class BindingKind(str, Enum):
    MOTION = "motion"
    EDIT = "edit"
    MODE_CHANGE = "mode-change"
    SEARCH = "search"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Decoded key press handed over by the key source.

    ``name`` is the logical key: a literal character (``"a"``, ``"$"``) or a
    named key (``"escape"``, ``"return"``, ``"up"``).
    """

    name: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def modifiers(self) -> tuple[str, ...]:
        flags = (self.ctrl, self.alt, self.shift and len(self.name) != 1)
        return tuple(mod for mod, on in zip(MODIFIER_ORDER, flags) if on)

    @property
    def token(self) -> str:
        """Lookup token; shift is implied by the character for printable keys."""

        if self.modifiers:
            return "+".join(self.modifiers + (self.name,))
        return self.name

    @classmethod
    def parse(cls, token: str) -> "KeyEvent":
        head, sep, name = token.rpartition("+")
        if sep and not name:
            # a literal "+" key, optionally with modifiers ("ctrl++")
            name = "+"
            head = head[:-1] if head.endswith("+") else head
        mods = {part.strip().lower() for part in head.split("+") if part.strip()}
        unknown = mods.difference(MODIFIER_ORDER)
        if unknown:
            raise ValueError(f"Unknown modifiers {sorted(unknown)} in '{token}'")
        return cls(
            name=name,
            ctrl="ctrl" in mods,
            alt="alt" in mods,
            shift="shift" in mods,
        )


def keys(*tokens: str) -> list[KeyEvent]:
    """Build a list of events from tokens, handy for scripted input."""

    return [KeyEvent.parse(token) for token in tokens]


@dataclass(frozen=True, slots=True)
class KeyBinding:
    """Maps a one- or two-key sequence to an action name within a table group.

    Two-key sequences must repeat the same leader (``gg``, ``dd``); the leader
    becomes the interpreter's pending prefix after the first press.
    """

    sequence: tuple[str, ...]
    mode: str
    kind: BindingKind
    action: str
    counted: bool = True
    switch_to: Optional[str] = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.sequence or not all(self.sequence):
            raise ValueError("binding sequence cannot be empty")
        if len(self.sequence) > 2:
            raise ValueError("bindings support at most two keys")
        if len(self.sequence) == 2 and self.sequence[0] != self.sequence[1]:
            raise ValueError("two-key bindings must repeat their leader key")
        if self.mode not in TABLE_GROUPS:
            raise ValueError(f"binding mode must be one of {TABLE_GROUPS}")
        if not self.action:
            raise ValueError("binding action cannot be empty")
        object.__setattr__(self, "kind", BindingKind(self.kind))

    @property
    def leader(self) -> Optional[str]:
        return self.sequence[0] if len(self.sequence) == 2 else None

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence)

    @classmethod
    def build(
        cls,
        keys_: str | Iterable[str],
        mode: str,
        kind: BindingKind,
        action: str,
        **extra,
    ) -> "KeyBinding":
        if isinstance(keys_, str):
            doubled = len(keys_) == 2 and keys_[0] == keys_[1]
            sequence = tuple(keys_) if doubled else (keys_,)
        else:
            sequence = tuple(keys_)
        return cls(sequence=sequence, mode=mode, kind=kind, action=action, **extra)


__all__ = [
    "BindingKind",
    "KeyBinding",
    "KeyEvent",
    "MODIFIER_ORDER",
    "TABLE_GROUPS",
    "keys",
]
