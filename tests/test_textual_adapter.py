from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple

import pytest

from vim_interpreter.actions import Action, ActionKind, motion
from vim_interpreter.adapters.textual import (
    TextAreaSurface,
    TextualUIHooks,
    TextualVimAdapter,
    key_event_from_textual,
    status_text,
)
from vim_interpreter.keymaps import KeyEvent
from vim_interpreter.modes import Mode, ModeInterpreter

Location = Tuple[int, int]


class FakeSelection(NamedTuple):
    start: Location
    end: Location


@dataclass
class FakeDocument:
    lines: List[str]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def get_line(self, row: int) -> str:
        return self.lines[row]


@dataclass
class FakeTextArea:
    """Stand-in for ``textual.widgets.TextArea`` covering what the surface uses."""

    text: str
    cursor_location: Location = (0, 0)
    read_only: bool = False
    selection: FakeSelection = FakeSelection((0, 0), (0, 0))
    history: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.document = FakeDocument(self.text.split("\n"))

    def _offset(self, location: Location) -> int:
        row, col = location
        return sum(len(line) + 1 for line in self.document.lines[:row]) + col

    @property
    def joined(self) -> str:
        return "\n".join(self.document.lines)

    def get_text_range(self, start: Location, end: Location) -> str:
        return self.joined[self._offset(start):self._offset(end)]

    @property
    def selected_text(self) -> str:
        start, end = sorted(self.selection)
        return self.get_text_range(start, end)

    def move_cursor(self, location: Location, select: bool = False) -> None:
        start = self.selection.start if select else location
        self.selection = FakeSelection(start, location)
        self.cursor_location = location

    def delete(self, start: Location, end: Location) -> None:
        text = self.joined
        self._replace(text[: self._offset(start)] + text[self._offset(end):])

    def insert(self, text: str, location: Location) -> None:
        joined = self.joined
        offset = self._offset(location)
        self._replace(joined[:offset] + text + joined[offset:])

    def _replace(self, text: str) -> None:
        self.history.append(self.joined)
        self.document.lines = text.split("\n")

    def undo(self) -> None:
        if self.history:
            self.document.lines = self.history.pop().split("\n")


def make_stack(text: str = "alpha beta\ngamma\ndelta") -> tuple[
    ModeInterpreter, FakeTextArea, TextualVimAdapter, List[str]
]:
    interpreter = ModeInterpreter(initial_enabled=True)
    area = FakeTextArea(text)
    surface = TextAreaSurface(area, interpreter)
    statuses: List[str] = []
    hooks = TextualUIHooks(update_status=statuses.append, apply_action=surface.apply)
    adapter = TextualVimAdapter(interpreter, hooks)
    return interpreter, area, adapter, statuses


def press(adapter: TextualVimAdapter, *keys: str) -> List[Action]:
    return [adapter.handle_textual_key(key, character=key) for key in keys]


@pytest.mark.parametrize(
    "key,character,expected",
    [
        ("escape", "\x1b", KeyEvent("escape")),
        ("ctrl+r", "\x12", KeyEvent("r", ctrl=True)),
        ("dollar_sign", "$", KeyEvent("$")),
        ("circumflex_accent", "^", KeyEvent("^")),
        ("question_mark", "?", KeyEvent("?")),
        ("A", "A", KeyEvent("A")),
        ("shift+a", "A", KeyEvent("A", shift=True)),
        ("enter", "\r", KeyEvent("return")),
        ("up", None, KeyEvent("up")),
        ("alt+x", "x", KeyEvent("x", alt=True)),
    ],
)
def test_key_event_from_textual(
    key: str, character: str | None, expected: KeyEvent
) -> None:
    assert key_event_from_textual(key, character) == expected


def test_status_line_follows_mode() -> None:
    interpreter, _area, adapter, statuses = make_stack()

    press(adapter, "3", "d")
    assert statuses[-1] == "NORMAL 3d"

    press(adapter, "escape", "i")
    assert statuses[-1] == "-- INSERT --"

    interpreter.disable()
    assert statuses[-1] == ""
    assert status_text(interpreter.get_state()) == ""


def test_wants_key_respects_insert_and_disabled() -> None:
    interpreter, _area, adapter, _statuses = make_stack()

    assert adapter.wants_key("j") is True
    press(adapter, "i")
    assert adapter.wants_key("j") is False
    assert adapter.wants_key("escape") is True
    interpreter.disable()
    assert adapter.wants_key("escape") is False


def test_adapter_logs_key_and_action() -> None:
    interpreter = ModeInterpreter(initial_enabled=True)
    lines: List[str] = []
    adapter = TextualVimAdapter(
        interpreter, TextualUIHooks(update_status=lambda _: None, log=lines.append)
    )

    adapter.handle_textual_key("j", character="j")

    assert lines[0].startswith("key ->")
    assert "kind='motion'" in lines[1]


def test_surface_moves_cursor() -> None:
    _interpreter, area, adapter, _statuses = make_stack()

    press(adapter, "w")
    assert area.cursor_location == (0, 6)
    press(adapter, "j", "$")
    assert area.cursor_location == (1, 5)
    press(adapter, "g", "g")
    assert area.cursor_location == (0, 0)
    press(adapter, "G")
    assert area.cursor_location == (2, 0)


def test_surface_word_end_crosses_lines() -> None:
    _interpreter, area, adapter, _statuses = make_stack()

    press(adapter, "e")
    assert area.cursor_location == (0, 4)
    press(adapter, "e")
    assert area.cursor_location == (0, 9)
    press(adapter, "e")
    assert area.cursor_location == (1, 4)
    press(adapter, "2", "e")
    assert area.cursor_location == (2, 4)


def test_surface_ignores_motions_it_cannot_map() -> None:
    interpreter, area, _adapter, _statuses = make_stack()
    surface = TextAreaSurface(area, interpreter)
    area.move_cursor((1, 2))

    surface.apply(motion("paragraph-forward", 2))
    surface.apply(motion("select-paragraph-forward"))

    assert area.cursor_location == (1, 2)


def test_surface_delete_line_fills_register() -> None:
    interpreter, area, adapter, _statuses = make_stack()

    press(adapter, "2", "d", "d")

    assert area.document.lines == ["delta"]
    assert interpreter.get_yank_register() == "alpha beta\ngamma\n"


def test_surface_yank_and_paste_line() -> None:
    interpreter, area, adapter, _statuses = make_stack()

    press(adapter, "y", "y", "j", "p")

    assert area.document.lines == ["alpha beta", "gamma", "alpha beta", "delta"]
    assert interpreter.mode is Mode.NORMAL


def test_surface_delete_char_and_undo() -> None:
    interpreter, area, adapter, _statuses = make_stack()

    actions = press(adapter, "3", "x")
    assert actions[-1].kind is ActionKind.EDIT
    assert area.document.lines[0] == "ha beta"
    assert interpreter.get_yank_register() == "alp"

    press(adapter, "u")
    assert area.document.lines[0] == "alpha beta"


def test_surface_visual_yank() -> None:
    interpreter, area, adapter, _statuses = make_stack()

    press(adapter, "v", "$", "y")

    assert interpreter.get_yank_register() == "alpha beta"
    assert interpreter.mode is Mode.NORMAL
    assert area.read_only is True


def test_surface_change_line_enters_insert() -> None:
    interpreter, area, adapter, _statuses = make_stack()

    press(adapter, "j", "c", "c")

    assert area.document.lines == ["alpha beta", "", "delta"]
    assert interpreter.mode is Mode.INSERT
    assert area.read_only is False


def test_surface_search_next_uses_last_pattern() -> None:
    interpreter, area, adapter, _statuses = make_stack()
    requested: list[object] = []
    surface = TextAreaSurface(area, interpreter, request_pattern=requested.append)
    adapter.hooks.apply_action = surface.apply

    press(adapter, "/")
    interpreter.set_search_pattern("a")
    press(adapter, "n")

    assert requested
    assert area.cursor_location == (0, 4)
