"""Textual adapter that feeds key presses to the interpreter and reports back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from vim_interpreter.actions import Action
from vim_interpreter.keymaps import KeyEvent
from vim_interpreter.modes import STATE_CHANGED, Mode, ModeInterpreter, StateSnapshot
from vim_interpreter.modes.interpreter import ESCAPE

# Textual key names that differ from the interpreter's vocabulary.
_KEY_ALIASES: Dict[str, str] = {
    "enter": "return",
    "esc": "escape",
    "ctrl+left_square_bracket": "escape",
}

MODE_LABELS: Dict[Mode, str] = {
    Mode.NORMAL: "NORMAL",
    Mode.INSERT: "-- INSERT --",
    Mode.VISUAL: "-- VISUAL --",
    Mode.VISUAL_LINE: "-- VISUAL LINE --",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def key_event_from_textual(key: str, character: Optional[str] = None) -> KeyEvent:
    """Translate a Textual ``Key`` (``key``/``character`` pair) into a KeyEvent.

    Printable characters win over Textual's symbolic names, so ``dollar_sign``
    arrives as ``"$"`` and ``shift+a`` as ``"A"``.
    """

    key = _KEY_ALIASES.get(key, key)
    *modifiers, name = key.split("+") if key != "+" else ["+"]
    mods = {mod.lower() for mod in modifiers}
    ctrl = "ctrl" in mods
    alt = "alt" in mods or "meta" in mods
    shift = "shift" in mods

    printable = (
        character is not None and len(character) == 1 and character.isprintable()
    )
    if printable and not ctrl and not alt:
        return KeyEvent(name=character, shift=shift)  # type: ignore[arg-type]
    return KeyEvent(name=_KEY_ALIASES.get(name, name), ctrl=ctrl, alt=alt, shift=shift)


def status_text(snapshot: StateSnapshot) -> str:
    """Mode indicator line, e.g. ``NORMAL 3d``; empty while disabled."""

    if not snapshot.enabled:
        return ""
    label = MODE_LABELS[snapshot.mode]
    pending = snapshot.pending
    return f"{label} {pending}" if pending else label


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_status: Callable[[str], None]
    apply_action: Callable[[Action], None] = _noop
    log: Callable[[str], None] = _noop


class TextualVimAdapter:
    """Bridges ``ModeInterpreter`` to a Textual-friendly surface."""

    def __init__(self, interpreter: ModeInterpreter, hooks: TextualUIHooks) -> None:
        self.interpreter = interpreter
        self.hooks = hooks
        self._unsubscribe = interpreter.subscribe(STATE_CHANGED, self._on_state)
        self._refresh_status()

    def close(self) -> None:
        self._unsubscribe()

    def wants_key(self, key: str) -> bool:
        """Whether the interpreter, not the text widget, should get this key."""

        state = self.interpreter.get_state()
        if not state.enabled:
            return False
        if state.mode is Mode.INSERT:
            return _KEY_ALIASES.get(key, key) == ESCAPE
        return True

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Action:
        event = key_event_from_textual(key, character)
        self._log("key ->", key=event.token)
        action = self.interpreter.handle(event)
        if not action.is_none:
            self.hooks.apply_action(action)
        self._log(
            "action <-",
            kind=action.kind.value,
            name=action.name,
            count=action.count,
        )
        return action

    def _on_state(self, payload: object) -> None:
        del payload
        self._refresh_status()

    def _refresh_status(self) -> None:
        self.hooks.update_status(status_text(self.interpreter.get_state()))

    def _log(self, prefix: str, **fields: object) -> None:
        snapshot = self.interpreter.get_state()
        values: Dict[str, object] = {
            "mode": snapshot.mode.value,
            "pending": snapshot.pending,
        }
        values.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in values.items()]
        self.hooks.log(" ".join(parts))


__all__ = [
    "MODE_LABELS",
    "TextualUIHooks",
    "TextualVimAdapter",
    "key_event_from_textual",
    "status_text",
]
