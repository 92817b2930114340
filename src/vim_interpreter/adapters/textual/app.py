"""Executable Textual app hosting the interpreter over a ``TextArea``."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Input, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vim_interpreter.adapters.textual.app"
    ) from exc

from vim_interpreter.modes import ModeInterpreter, SearchDirection, create_interpreter
from vim_interpreter.settings import (
    SettingsStore,
    bind_enabled_persistence,
    load_enabled,
)

from .controller import TextualUIHooks, TextualVimAdapter
from .surface import TextAreaSurface


class VimTextArea(TextArea):
    """TextArea that lets the adapter claim keys before normal editing."""

    adapter: TextualVimAdapter | None = None

    async def _on_key(self, event: events.Key) -> None:
        adapter = self.adapter
        if adapter is not None and adapter.wants_key(event.key):
            event.prevent_default()
            event.stop()
            adapter.handle_textual_key(event.key, character=event.character)
            return
        await super()._on_key(event)


class VimInterpreterApp(App[None]):
    """Minimal editor demonstrating the interpreter end to end."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#search {
		display: none;
	}

	#search.active {
		display: block;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("f2", "toggle_vim", "Toggle vim"),
    ]

    def __init__(
        self,
        *,
        text: str = "",
        settings: SettingsStore | None = None,
        enabled: Optional[bool] = None,
    ) -> None:
        super().__init__()
        self._text = text
        self.settings = settings or SettingsStore()
        initial = load_enabled(self.settings) if enabled is None else enabled
        self.interpreter: ModeInterpreter = create_interpreter(initial)
        bind_enabled_persistence(self.interpreter, self.settings)
        self.adapter: TextualVimAdapter | None = None
        self.surface: TextAreaSurface | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield VimTextArea(self._text, id="editor")
        yield Input(placeholder="search", id="search")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        editor = self.query_one("#editor", VimTextArea)
        self.surface = TextAreaSurface(
            editor, self.interpreter, request_pattern=self._open_search
        )
        hooks = TextualUIHooks(
            update_status=self._update_status,
            apply_action=self.surface.apply,
            log=self.log.debug,
        )
        self.adapter = TextualVimAdapter(self.interpreter, hooks)
        editor.adapter = self.adapter
        editor.read_only = self.interpreter.enabled
        editor.focus()

    def action_toggle_vim(self) -> None:
        enabled = self.interpreter.toggle()
        self.query_one("#editor", VimTextArea).read_only = enabled

    def _update_status(self, text: str) -> None:
        self.query_one("#status-line", Static).update(text)

    def _open_search(self, direction: SearchDirection) -> None:
        search = self.query_one("#search", Input)
        search.placeholder = "/" if direction is SearchDirection.FORWARD else "?"
        search.value = ""
        search.add_class("active")
        search.focus()

    def on_input_submitted(self, message: Input.Submitted) -> None:
        search = message.input
        search.remove_class("active")
        editor = self.query_one("#editor", VimTextArea)
        editor.focus()
        pattern = message.value
        if not pattern or self.surface is None:
            return
        self.interpreter.set_search_pattern(pattern)
        forward = self.interpreter.state.search_direction is SearchDirection.FORWARD
        self.surface.find(pattern, forward=forward)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the vim interpreter Textual demo."
    )
    parser.add_argument("path", nargs="?", help="Text file to open (read only)")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings JSON file (default: $VIM_INTERPRETER_SETTINGS or ~/.config)",
    )
    toggle = parser.add_mutually_exclusive_group()
    toggle.add_argument(
        "--vim",
        dest="enabled",
        action="store_true",
        default=None,
        help="Start with modal editing enabled",
    )
    toggle.add_argument(
        "--no-vim",
        dest="enabled",
        action="store_false",
        help="Start with modal editing disabled",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    text = Path(args.path).read_text(encoding="utf-8") if args.path else ""
    app = VimInterpreterApp(
        text=text,
        settings=SettingsStore(args.settings),
        enabled=args.enabled,
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
