"""Key table storing interpreter bindings per table group."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from vim_interpreter.runtime.telemetry import span

from .models import TABLE_GROUPS, KeyBinding


@dataclass(slots=True)
class TableStats:
    """Lightweight snapshot describing table contents."""

    binding_count: int
    leaders: Dict[str, tuple[str, ...]]
    groups: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding would make a key ambiguous."""

    def __init__(self, binding: KeyBinding, conflicts: Iterable[KeyBinding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.key_signature}' ({binding.mode}) conflicts with "
            f"{[c.key_signature for c in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeyTable:
    """Owns the closed set of bindings the interpreter resolves against.

    A key is either a complete command or the leader of a two-key command in a
    given group, never both.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Dict[tuple[str, ...], KeyBinding]] = {
            group: {} for group in TABLE_GROUPS
        }
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def register(self, binding: KeyBinding, *, replace: bool = False) -> KeyBinding:
        with span(
            "keymaps::register",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"keys": binding.key_signature, "mode": binding.mode},
        ) as handle:
            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(c.key_signature for c in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            bucket = self._bindings[binding.mode]
            for conflict in conflicts:
                bucket.pop(conflict.sequence, None)
            bucket[binding.sequence] = binding
            self._revision += 1
            return binding

    def register_many(
        self, bindings: Iterable[KeyBinding], *, replace: bool = False
    ) -> None:
        for binding in bindings:
            self.register(binding, replace=replace)

    def unregister(self, mode: str, sequence: tuple[str, ...]) -> Optional[KeyBinding]:
        binding = self._bindings.get(mode, {}).pop(tuple(sequence), None)
        if binding is not None:
            self._revision += 1
        return binding

    def lookup(self, mode: str, *sequence: str) -> Optional[KeyBinding]:
        return self._bindings.get(mode, {}).get(tuple(sequence))

    def leaders(self, mode: str) -> frozenset[str]:
        return frozenset(
            binding.leader
            for binding in self._bindings.get(mode, {}).values()
            if binding.leader is not None
        )

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[KeyBinding]:
        groups = TABLE_GROUPS if mode is None else (mode,)
        for group in groups:
            yield from self._bindings.get(group, {}).values()

    def detect_conflicts(self, binding: KeyBinding) -> list[KeyBinding]:
        bucket = self._bindings[binding.mode]
        conflicts: list[KeyBinding] = []
        existing = bucket.get(binding.sequence)
        if existing is not None:
            conflicts.append(existing)
        if binding.leader is not None:
            single = bucket.get((binding.leader,))
            if single is not None:
                conflicts.append(single)
        else:
            doubled = bucket.get(binding.sequence * 2)
            if doubled is not None:
                conflicts.append(doubled)
        return conflicts

    def stats(self) -> TableStats:
        return TableStats(
            binding_count=sum(len(bucket) for bucket in self._bindings.values()),
            leaders={
                group: tuple(sorted(self.leaders(group))) for group in TABLE_GROUPS
            },
            groups=tuple(group for group in TABLE_GROUPS if self._bindings[group]),
        )


__all__ = [
    "KeyTable",
    "KeymapConflictError",
    "TableStats",
]
