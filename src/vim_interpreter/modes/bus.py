"""Observer hook letting hosts react to interpreter state changes."""

from __future__ import annotations

from typing import Callable, Dict

Callback = Callable[[object], None]

STATE_CHANGED = "state.changed"
MODE_CHANGED = "mode.changed"
ENABLED_CHANGED = "enabled.changed"
ACTION_EMITTED = "action"


class StateBus:
    """Minimal synchronous event bus; callbacks run in subscription order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callback]] = {}

    def subscribe(self, event: str, callback: Callback) -> Callable[[], None]:
        callbacks = self._subscribers.setdefault(event, [])
        callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, ())):
            callback(payload)


__all__ = [
    "ACTION_EMITTED",
    "ENABLED_CHANGED",
    "MODE_CHANGED",
    "STATE_CHANGED",
    "StateBus",
]
