"""Register storage for yanked and deleted text."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

UNNAMED = '"'


class RegisterBank:
    """Named text slots; the unnamed register mirrors the latest write.

    Only the unnamed register is written by the interpreter today. The host
    pushes text into it after it performed a yank or delete.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._registers: Dict[str, str] = {UNNAMED: ""}
        if initial:
            self.load(initial)

    @staticmethod
    def _check_name(name: str) -> str:
        if not isinstance(name, str) or len(name) != 1:
            raise ValueError(f"Register names are single characters, got {name!r}")
        return name

    def get(self, name: str = UNNAMED) -> str:
        return self._registers.get(self._check_name(name), "")

    def set(self, name: str, text: str) -> None:
        self._registers[self._check_name(name)] = text
        if name != UNNAMED:
            self._registers[UNNAMED] = text

    @property
    def unnamed(self) -> str:
        return self._registers[UNNAMED]

    @unnamed.setter
    def unnamed(self, text: str) -> None:
        self.set(UNNAMED, text)

    def names(self) -> Iterable[str]:
        return tuple(self._registers)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._registers)

    def load(self, data: Mapping[str, str]) -> None:
        for name, text in data.items():
            self._registers[self._check_name(name)] = text

    def __contains__(self, name: object) -> bool:
        return name in self._registers

    def __repr__(self) -> str:
        return f"RegisterBank({self._registers!r})"


__all__ = ["RegisterBank", "UNNAMED"]
