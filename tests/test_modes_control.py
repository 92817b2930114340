from __future__ import annotations

import pytest

from vim_interpreter.actions import NONE, edit
from vim_interpreter.keymaps import KeyEvent, keys
from vim_interpreter.modes import (
    ACTION_EMITTED,
    ENABLED_CHANGED,
    MODE_CHANGED,
    STATE_CHANGED,
    Mode,
    ModeInterpreter,
)


def test_initial_state() -> None:
    interpreter = ModeInterpreter()
    state = interpreter.get_state()

    assert state.mode is Mode.NORMAL
    assert state.enabled is False
    assert state.pending == ""
    assert state.last_motion is None
    assert dict(state.registers) == {'"': ""}


def test_disabled_interpreter_is_inert() -> None:
    interpreter = ModeInterpreter(initial_enabled=False)
    before = interpreter.get_state()

    results = [interpreter.handle(event) for event in keys("i", "3", "d", "escape")]

    assert results == [NONE] * 4
    assert interpreter.get_state() == before


def test_enable_forces_normal_and_clears_pending() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)
    interpreter.handle(KeyEvent("v"))
    interpreter.handle(KeyEvent("2"))

    interpreter.enable()
    state = interpreter.get_state()

    assert state.enabled is True
    assert state.mode is Mode.NORMAL
    assert state.pending == ""


def test_disable_is_idempotent_and_keeps_mode() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)
    interpreter.handle(KeyEvent("V"))
    interpreter.handle(KeyEvent("4"))

    interpreter.disable()
    once = interpreter.get_state()
    interpreter.disable()
    twice = interpreter.get_state()

    assert once == twice
    assert twice.enabled is False
    assert twice.mode is Mode.VISUAL_LINE
    assert twice.pending == ""


def test_toggle_round_trip() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)
    interpreter.handle(KeyEvent("i"))

    assert interpreter.toggle() is False
    assert interpreter.mode is Mode.INSERT
    assert interpreter.toggle() is True
    assert interpreter.mode is Mode.NORMAL


def test_set_mode_resets_pending() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)
    interpreter.handle(KeyEvent("7"))
    interpreter.handle(KeyEvent("c"))

    interpreter.set_mode("insert")
    state = interpreter.get_state()

    assert state.mode is Mode.INSERT
    assert state.pending_prefix == ""
    assert state.pending_count == ""


def test_set_mode_rejects_unknown_modes() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)

    with pytest.raises(ValueError):
        interpreter.set_mode("replace")


def test_yank_register_reflects_host_writes_only() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)

    interpreter.handle(KeyEvent("y"))
    assert interpreter.handle(KeyEvent("y")) == edit("yank-line")
    assert interpreter.get_yank_register() == ""

    interpreter.set_yank_register("first\n")
    interpreter.handle(KeyEvent("d"))
    interpreter.handle(KeyEvent("d"))
    assert interpreter.get_yank_register() == "first\n"

    interpreter.set_yank_register("second")
    assert interpreter.handle(KeyEvent("p")) == edit("paste-after")
    assert interpreter.get_yank_register() == "second"
    assert interpreter.get_state().registers['"'] == "second"


def test_snapshot_is_read_only() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)
    state = interpreter.get_state()

    with pytest.raises(TypeError):
        state.registers['"'] = "x"  # type: ignore[index]
    with pytest.raises(AttributeError):
        state.mode = Mode.INSERT  # type: ignore[misc]


def test_observers_see_transitions() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)
    events: list[tuple[str, object]] = []
    for name in (STATE_CHANGED, MODE_CHANGED, ENABLED_CHANGED, ACTION_EMITTED):
        interpreter.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )

    interpreter.handle(KeyEvent("i"))
    interpreter.handle(KeyEvent("z"))
    interpreter.disable()

    names = [name for name, _ in events]
    assert (MODE_CHANGED, Mode.INSERT) in events
    assert (ENABLED_CHANGED, False) in events
    assert names.count(ACTION_EMITTED) == 1
    # the insert-mode "z" changes nothing and publishes nothing
    assert names.count(STATE_CHANGED) == 2


def test_unsubscribe_stops_notifications() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)
    seen: list[object] = []
    unsubscribe = interpreter.subscribe(MODE_CHANGED, seen.append)

    interpreter.handle(KeyEvent("v"))
    unsubscribe()
    interpreter.handle(KeyEvent("escape"))

    assert seen == [Mode.VISUAL]


def test_handle_token_parses_modifiers() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)

    assert interpreter.handle_token("ctrl+r") == edit("redo")
    assert interpreter.handle_token("r") is NONE
