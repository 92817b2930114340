"""Persistent JSON settings for hosts embedding the interpreter.

The interpreter itself never touches storage. Hosts read ``vim_enabled`` once
at start-up and write it back whenever the flag flips.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from vim_interpreter.modes import ENABLED_CHANGED, ModeInterpreter
from vim_interpreter.runtime import telemetry

ENABLED_KEY = "vim_enabled"
SETTINGS_ENV = "VIM_INTERPRETER_SETTINGS"
DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "vim-interpreter" / "settings.json"


def default_settings_path() -> Path:
    override = os.environ.get(SETTINGS_ENV)
    return Path(override).expanduser() if override else DEFAULT_SETTINGS_PATH


class SettingsStore:
    """Write-through key/value store backed by a single JSON object file.

    Missing, unreadable or malformed files read as empty settings; failures
    are reported as telemetry warnings rather than raised into the host UI.
    """

    def __init__(self, path: Optional[Path | str] = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()
        self._data: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raw = {}
        except (OSError, ValueError) as exc:
            telemetry.record_event(
                "settings.load_failed",
                level="warning",
                data={"path": str(self.path), "error": str(exc)},
            )
            raw = {}
        self._data = raw if isinstance(raw, dict) else {}
        return dict(self._data)

    def _ensure(self) -> Dict[str, Any]:
        if self._data is None:
            self.load()
        assert self._data is not None
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._ensure().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        data = self._ensure()
        data[key] = value
        return self.save()

    def save(self) -> bool:
        data = self._ensure()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            telemetry.record_event(
                "settings.save_failed",
                level="warning",
                data={"path": str(self.path), "error": str(exc)},
            )
            return False
        return True


def load_enabled(store: SettingsStore) -> bool:
    value = store.get(ENABLED_KEY, False)
    return value if isinstance(value, bool) else False


def bind_enabled_persistence(
    interpreter: ModeInterpreter, store: SettingsStore
) -> Callable[[], None]:
    """Write ``vim_enabled`` every time the interpreter's flag changes.

    Returns the unsubscribe callable.
    """

    def persist(payload: object) -> None:
        store.set(ENABLED_KEY, bool(payload))

    return interpreter.subscribe(ENABLED_CHANGED, persist)


__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "ENABLED_KEY",
    "SETTINGS_ENV",
    "SettingsStore",
    "bind_enabled_persistence",
    "default_settings_path",
    "load_enabled",
]
