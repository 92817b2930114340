"""Modal key interpreter turning key events into editing intents."""

from __future__ import annotations

from typing import Callable, Optional

from vim_interpreter import actions
from vim_interpreter.actions import NONE, Action
from vim_interpreter.keymaps import BindingKind, KeyBinding, KeyEvent, KeyTable
from vim_interpreter.keymaps import load_default_keymaps
from vim_interpreter.registers import UNNAMED
from vim_interpreter.runtime import telemetry

from .bus import ACTION_EMITTED, ENABLED_CHANGED, MODE_CHANGED, STATE_CHANGED, StateBus
from .state import InterpreterState, Mode, SearchDirection, StateSnapshot

ESCAPE = "escape"
DIGITS = frozenset("0123456789")

_SEARCH_DIRECTIONS = {
    "search-forward": SearchDirection.FORWARD,
    "search-backward": SearchDirection.BACKWARD,
}


class ModeInterpreter:
    """Owns interpreter state and resolves one key event at a time.

    ``handle`` is total: every key maps to exactly one ``Action`` and
    unrecognised input degrades to ``NONE``. The host applies the actions and
    pushes yanked text back through ``set_yank_register``.
    """

    def __init__(
        self,
        initial_enabled: bool = False,
        *,
        table: KeyTable | None = None,
        bus: StateBus | None = None,
        logger_name: str = "vim_interpreter.modes",
    ) -> None:
        self._state = InterpreterState(enabled=bool(initial_enabled))
        self._logger_name = logger_name
        self.table = table or load_default_keymaps(
            KeyTable(logger_name="vim_interpreter.keymaps")
        )
        self.bus = bus or StateBus()

    # -- read side -----------------------------------------------------

    def get_state(self) -> StateSnapshot:
        return self._state.snapshot()

    @property
    def state(self) -> StateSnapshot:
        return self._state.snapshot()

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def enabled(self) -> bool:
        return self._state.enabled

    def subscribe(
        self, event: str, callback: Callable[[object], None]
    ) -> Callable[[], None]:
        return self.bus.subscribe(event, callback)

    # -- key handling --------------------------------------------------

    def handle(self, event: KeyEvent) -> Action:
        state = self._state
        if not state.enabled:
            return NONE

        before = self._signature()
        with telemetry.span(
            "interpreter::handle",
            logger_name=self._logger_name,
            component="interpreter",
            metadata={"key": event.token, "mode": state.mode.value},
        ) as handle:
            action = self._dispatch(event)
            handle.add_metadata("action", action.name or action.kind.value)

        if not action.is_none:
            self.bus.emit(ACTION_EMITTED, action)
        self._publish(before)
        return action

    def handle_token(self, token: str) -> Action:
        return self.handle(KeyEvent.parse(token))

    def _dispatch(self, event: KeyEvent) -> Action:
        state = self._state
        if event.name == ESCAPE:
            if state.mode is not Mode.NORMAL:
                self._switch(Mode.NORMAL)
                return actions.mode_change(Mode.NORMAL.value)
            state.reset_pending()
            return NONE

        group = state.mode.table_group
        if group is None:
            # insert mode: text entry belongs to the host surface
            return NONE
        return self._dispatch_table(group, event.token)

    def _dispatch_table(self, group: str, token: str) -> Action:
        state = self._state
        # counts are a normal-mode concept; in visual mode digits other than
        # "0" fall through as unmatched keys
        counting = group == "normal"
        if counting and token in DIGITS and (token != "0" or state.pending_count):
            state.pending_count += token
            return NONE

        prefix = state.pending_prefix
        if prefix:
            # the second key must repeat the leader, otherwise it is dropped
            binding = None
            if token == prefix:
                binding = self.table.lookup(group, prefix, token)
            if binding is None:
                state.reset_pending()
                return NONE
            return self._resolve(binding)

        if token in self.table.leaders(group):
            state.pending_prefix = token
            return NONE

        binding = self.table.lookup(group, token)
        if binding is None:
            state.reset_pending()
            return NONE
        return self._resolve(binding)

    def _resolve(self, binding: KeyBinding) -> Action:
        state = self._state
        count = state.count if binding.counted else 1
        state.reset_pending()

        if binding.kind is BindingKind.MOTION:
            state.last_motion = binding.action
            return actions.motion(binding.action, count)

        if binding.kind is BindingKind.SEARCH:
            return self._search(binding.action)

        if binding.switch_to:
            self._switch(Mode(binding.switch_to))
        if binding.kind is BindingKind.MODE_CHANGE:
            return actions.mode_change(binding.action)
        return actions.edit(binding.action, count)

    def _search(self, name: str) -> Action:
        search = self._state.search
        direction = _SEARCH_DIRECTIONS.get(name)
        if direction is not None:
            search.direction = direction
            search.pattern = ""
            return actions.search(name)
        return actions.search(name, search.last_pattern)

    # -- explicit control ----------------------------------------------

    def set_mode(self, mode: Mode | str) -> None:
        before = self._signature()
        self._switch(Mode(mode))
        self._publish(before)

    def enable(self) -> None:
        before = self._signature()
        self._set_enabled(True)
        self._switch(Mode.NORMAL)
        self._publish(before)

    def disable(self) -> None:
        before = self._signature()
        self._set_enabled(False)
        self._state.reset_pending()
        self._publish(before)

    def toggle(self) -> bool:
        before = self._signature()
        enabled = not self._state.enabled
        self._set_enabled(enabled)
        if enabled:
            self._switch(Mode.NORMAL)
        else:
            self._state.reset_pending()
        self._publish(before)
        return enabled

    def set_yank_register(self, text: str) -> None:
        self._state.registers.set(UNNAMED, text)
        self.bus.emit(STATE_CHANGED, self._state.snapshot())

    def get_yank_register(self) -> str:
        return self._state.registers.get(UNNAMED)

    def set_search_pattern(self, pattern: str) -> None:
        """Record the pattern the host collected after ``/`` or ``?``."""

        before = self._signature()
        search = self._state.search
        search.pattern = pattern
        if pattern:
            search.last_pattern = pattern
        self._publish(before)

    # -- internals -----------------------------------------------------

    def _switch(self, mode: Mode) -> None:
        state = self._state
        previous = state.mode
        state.mode = mode
        state.reset_pending()
        if previous is not mode:
            telemetry.record_event(
                "mode.switch",
                level="debug",
                data={"from": previous.value, "mode": mode.value},
                logger_name=self._logger_name,
            )
            self.bus.emit(MODE_CHANGED, mode)

    def _set_enabled(self, enabled: bool) -> None:
        if self._state.enabled is enabled:
            return
        self._state.enabled = enabled
        telemetry.record_event(
            "interpreter.enabled",
            data={"enabled": enabled},
            logger_name=self._logger_name,
        )
        self.bus.emit(ENABLED_CHANGED, enabled)

    def _signature(self) -> tuple[object, ...]:
        state = self._state
        return (
            state.mode,
            state.enabled,
            state.pending_count,
            state.pending_prefix,
            state.last_motion,
            state.search.pattern,
            state.search.direction,
            state.search.last_pattern,
        )

    def _publish(self, before: tuple[object, ...]) -> None:
        if self._signature() != before:
            self.bus.emit(STATE_CHANGED, self._state.snapshot())


def create_interpreter(
    initial_enabled: bool = False, *, table: Optional[KeyTable] = None
) -> ModeInterpreter:
    """Build an interpreter seeded with the default key tables."""

    return ModeInterpreter(initial_enabled, table=table)


__all__ = ["ModeInterpreter", "create_interpreter", "ESCAPE"]
