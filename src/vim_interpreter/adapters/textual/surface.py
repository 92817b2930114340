"""Applies interpreter actions to a Textual ``TextArea``.

The surface is the editing collaborator: it moves the cursor, mutates text,
and pushes yanked or deleted text back into the interpreter's unnamed
register. It only relies on the public ``TextArea`` API, so tests can drive it
with a light stand-in.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

from vim_interpreter.actions import Action, ActionKind
from vim_interpreter.modes import Mode, ModeInterpreter, SearchDirection
from vim_interpreter.runtime import telemetry

Location = Tuple[int, int]


class TextAreaSurface:
    """Editing surface wrapping a ``textual.widgets.TextArea``."""

    def __init__(
        self,
        text_area: Any,
        interpreter: ModeInterpreter,
        *,
        request_pattern: Callable[[SearchDirection], None] | None = None,
    ) -> None:
        self.text_area = text_area
        self.interpreter = interpreter
        self._request_pattern = request_pattern
        self._anchor: Optional[Location] = None
        self._motions: Dict[str, Callable[[int], Location]] = {
            "left": self._left,
            "right": self._right,
            "down": lambda n: self._vertical(n),
            "up": lambda n: self._vertical(-n),
            "word-forward": self._word_forward,
            "word-backward": self._word_backward,
            "word-end": self._word_end,
            "line-home": lambda n: (self._row, 0),
            "line-end": lambda n: (self._row, len(self._line(self._row))),
            "visual-line-home": lambda n: (self._row, self._indent(self._row)),
            "buffer-home": lambda n: (0, 0),
            "buffer-end": lambda n: (self._last_row, 0),
        }

    # -- geometry helpers ----------------------------------------------

    @property
    def _cursor(self) -> Location:
        row, col = self.text_area.cursor_location
        return row, col

    @property
    def _row(self) -> int:
        return self._cursor[0]

    @property
    def _last_row(self) -> int:
        return max(0, self.text_area.document.line_count - 1)

    def _line(self, row: int) -> str:
        return self.text_area.document.get_line(row)

    def _indent(self, row: int) -> int:
        line = self._line(row)
        return len(line) - len(line.lstrip())

    def _left(self, count: int) -> Location:
        row, col = self._cursor
        return row, max(0, col - count)

    def _right(self, count: int) -> Location:
        row, col = self._cursor
        return row, min(len(self._line(row)), col + count)

    def _vertical(self, delta: int) -> Location:
        row, col = self._cursor
        target = max(0, min(self._last_row, row + delta))
        return target, min(col, len(self._line(target)))

    def _word_forward(self, count: int) -> Location:
        row, col = self._cursor
        for _ in range(count):
            line = self._line(row)
            while col < len(line) and not line[col].isspace():
                col += 1
            while col < len(line) and line[col].isspace():
                col += 1
            if col >= len(line) and row < self._last_row:
                row, col = row + 1, self._indent(row + 1)
        return row, col

    def _word_backward(self, count: int) -> Location:
        row, col = self._cursor
        for _ in range(count):
            if col == 0 and row > 0:
                row -= 1
                col = len(self._line(row))
            line = self._line(row)
            while col > 0 and line[col - 1].isspace():
                col -= 1
            while col > 0 and not line[col - 1].isspace():
                col -= 1
        return row, col

    def _word_end(self, count: int) -> Location:
        row, col = self._cursor
        for _ in range(count):
            line = self._line(row)
            col += 1
            while True:
                while col < len(line) and line[col].isspace():
                    col += 1
                if col < len(line) or row >= self._last_row:
                    break
                row, col = row + 1, 0
                line = self._line(row)
            while col + 1 < len(line) and not line[col + 1].isspace():
                col += 1
        return row, min(col, max(0, len(self._line(row)) - 1))

    # -- dispatch ------------------------------------------------------

    def apply(self, action: Action) -> None:
        handler = {
            ActionKind.MOTION: self._apply_motion,
            ActionKind.EDIT: self._apply_edit,
            ActionKind.MODE_CHANGE: self._apply_mode_change,
            ActionKind.SEARCH: self._apply_search,
        }.get(action.kind)
        if handler is None:
            return
        with telemetry.span(
            "surface::apply",
            component="surface",
            metadata={"kind": action.kind.value, "name": action.name},
        ):
            handler(action)
        self.text_area.read_only = self.interpreter.mode is not Mode.INSERT

    def _apply_motion(self, action: Action) -> None:
        name = action.name or ""
        selecting = name.startswith("select-")
        base = name[len("select-"):] if selecting else name
        base = base.replace("move-", "")
        resolve = self._motions.get(base)
        if resolve is None:
            # motions bound by the host without a surface counterpart
            return
        target = resolve(action.count)
        if selecting:
            self._select_to(target)
        else:
            self.text_area.move_cursor(target)

    def _select_to(self, target: Location) -> None:
        anchor = self._anchor or self._cursor
        if self.interpreter.mode is Mode.VISUAL_LINE:
            if target >= anchor:
                anchor = (anchor[0], 0)
                target = (target[0], len(self._line(target[0])))
            else:
                anchor = (anchor[0], len(self._line(anchor[0])))
                target = (target[0], 0)
        self.text_area.move_cursor(anchor)
        self.text_area.move_cursor(target, select=True)

    def _apply_mode_change(self, action: Action) -> None:
        area = self.text_area
        row, col = self._cursor
        name = action.name
        if name == "append":
            area.move_cursor(self._right(1))
        elif name == "insert-line-start":
            area.move_cursor((row, self._indent(row)))
        elif name == "append-line-end":
            area.move_cursor((row, len(self._line(row))))
        elif name == "open-below":
            end = (row, len(self._line(row)))
            area.insert("\n", end)
            area.move_cursor((row + 1, 0))
        elif name == "open-above":
            area.insert("\n", (row, 0))
            area.move_cursor((row, 0))
        elif name == "visual":
            self._anchor = (row, col)
            area.move_cursor((row, col))
        elif name == "visual-line":
            self._anchor = (row, 0)
            self._select_to((row, len(self._line(row))))
        elif name == "normal":
            self._anchor = None
            area.move_cursor(self._cursor)

    def _apply_edit(self, action: Action) -> None:
        area = self.text_area
        row, col = self._cursor
        count = action.count
        name = action.name

        if name == "delete-char":
            end = (row, min(len(self._line(row)), col + count))
            self._cut((row, col), end)
        elif name in ("delete-line", "yank-line", "change-line"):
            last = min(self._last_row, row + count - 1)
            text = "\n".join(self._line(r) for r in range(row, last + 1)) + "\n"
            self.interpreter.set_yank_register(text)
            if name == "delete-line":
                self._delete_rows(row, last)
            elif name == "change-line":
                area.delete((row, 0), (last, len(self._line(last))))
                area.move_cursor((row, 0))
        elif name in ("delete-to-line-end", "change-to-line-end"):
            self._cut((row, col), (row, len(self._line(row))))
        elif name in ("paste-after", "paste-before"):
            self._paste(name == "paste-after", count)
        elif name == "undo":
            area.undo()
        elif name == "redo":
            area.redo()
        elif name in ("delete-selection", "change-selection", "yank-selection"):
            selection = area.selection
            start, end = sorted((tuple(selection.start), tuple(selection.end)))
            self.interpreter.set_yank_register(area.selected_text)
            if name == "yank-selection":
                area.move_cursor(start)
            else:
                area.delete(start, end)
                area.move_cursor(start)
            self._anchor = None

    def _cut(self, start: Location, end: Location) -> None:
        area = self.text_area
        self.interpreter.set_yank_register(area.get_text_range(start, end))
        area.delete(start, end)
        area.move_cursor(start)

    def _delete_rows(self, first: int, last: int) -> None:
        area = self.text_area
        if last < self._last_row:
            area.delete((first, 0), (last + 1, 0))
            area.move_cursor((first, self._indent(first)))
        elif first > 0:
            start = (first - 1, len(self._line(first - 1)))
            area.delete(start, (last, len(self._line(last))))
            area.move_cursor((first - 1, self._indent(first - 1)))
        else:
            area.delete((0, 0), (last, len(self._line(last))))
            area.move_cursor((0, 0))

    def _paste(self, after: bool, count: int) -> None:
        area = self.text_area
        text = self.interpreter.get_yank_register()
        if not text:
            return
        row, col = self._cursor
        if text.endswith("\n"):
            block = text * count
            if after and row == self._last_row:
                area.insert("\n" + block[:-1], (row, len(self._line(row))))
                area.move_cursor((row + 1, 0))
            else:
                target = row + 1 if after else row
                area.insert(block, (target, 0))
                area.move_cursor((target, 0))
            return
        column = min(len(self._line(row)), col + 1) if after else col
        area.insert(text * count, (row, column))

    def _apply_search(self, action: Action) -> None:
        state = self.interpreter.get_state()
        if action.name in ("search-forward", "search-backward"):
            if self._request_pattern is not None:
                self._request_pattern(state.search_direction)
            return
        if not action.pattern:
            return
        forward = state.search_direction is SearchDirection.FORWARD
        if action.name == "search-prev":
            forward = not forward
        self.find(action.pattern, forward=forward)

    def find(self, pattern: str, *, forward: bool = True) -> Optional[Location]:
        """Plain substring search from the cursor, wrapping around the buffer."""

        row, col = self._cursor
        total = self._last_row + 1
        for step in range(total + 1):
            current = (row + step) % total if forward else (row - step) % total
            line = self._line(current)
            if forward:
                start = col + 1 if step == 0 else 0
                index = line.find(pattern, start)
            else:
                stop = col if step == 0 else len(line)
                index = line.rfind(pattern, 0, stop)
            if index >= 0:
                self.text_area.move_cursor((current, index))
                return current, index
        return None


__all__ = ["TextAreaSurface"]
