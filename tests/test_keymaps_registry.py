import pytest

from vim_interpreter.keymaps import (
    BindingKind,
    KeyBinding,
    KeymapConflictError,
    KeyTable,
    load_default_keymaps,
)


def make_binding(
    keys: str = "gg",
    *,
    mode: str = "normal",
    kind: BindingKind = BindingKind.MOTION,
    action: str = "buffer-home",
) -> KeyBinding:
    return KeyBinding.build(keys, mode, kind, action)


def test_register_binding_success() -> None:
    table = KeyTable()
    binding = make_binding()

    table.register(binding)

    assert table.stats().binding_count == 1
    assert list(table.iter_bindings("normal")) == [binding]
    assert table.lookup("normal", "g", "g") is binding
    assert table.leaders("normal") == frozenset({"g"})


def test_register_duplicate_sequence_conflicts() -> None:
    table = KeyTable()
    table.register(make_binding())

    with pytest.raises(KeymapConflictError) as excinfo:
        table.register(make_binding(action="somewhere-else"))

    assert excinfo.value.conflicts[0].action == "buffer-home"


def test_single_key_cannot_shadow_leader() -> None:
    table = KeyTable()
    table.register(make_binding())

    with pytest.raises(KeymapConflictError):
        table.register(make_binding("g", action="goto"))


def test_leader_cannot_shadow_single_key() -> None:
    table = KeyTable()
    table.register(make_binding("d", kind=BindingKind.EDIT, action="delete-char"))

    with pytest.raises(KeymapConflictError):
        table.register(make_binding("dd", kind=BindingKind.EDIT, action="delete-line"))


def test_replace_drops_conflicting_bindings() -> None:
    table = KeyTable()
    table.register(make_binding())

    table.register(make_binding("g", action="goto"), replace=True)

    assert table.lookup("normal", "g", "g") is None
    assert table.lookup("normal", "g").action == "goto"
    assert table.leaders("normal") == frozenset()


def test_groups_are_independent() -> None:
    table = KeyTable()
    table.register(make_binding("d", mode="visual", kind=BindingKind.EDIT, action="x"))
    table.register(make_binding("dd", kind=BindingKind.EDIT, action="delete-line"))

    assert table.stats().groups == ("normal", "visual")
    assert table.leaders("visual") == frozenset()


def test_unregister_bumps_revision() -> None:
    table = KeyTable()
    table.register(make_binding())
    revision = table.revision()

    removed = table.unregister("normal", ("g", "g"))

    assert removed is not None
    assert table.revision() == revision + 1
    assert table.unregister("normal", ("g", "g")) is None


def test_binding_validation() -> None:
    with pytest.raises(ValueError):
        KeyBinding(("d", "y"), "normal", BindingKind.EDIT, "nope")
    with pytest.raises(ValueError):
        KeyBinding(("g",), "insert", BindingKind.MOTION, "nope")
    with pytest.raises(ValueError):
        KeyBinding(("g",), "normal", BindingKind.MOTION, "")
    with pytest.raises(ValueError):
        KeyBinding((), "normal", BindingKind.MOTION, "nope")


def test_load_default_keymaps_is_conflict_free() -> None:
    table = load_default_keymaps(KeyTable())

    stats = table.stats()

    assert stats.leaders == {"normal": ("c", "d", "g", "y"), "visual": ("g",)}
    assert stats.binding_count == len(list(table.iter_bindings()))


def test_load_default_keymaps_twice_requires_replace() -> None:
    table = load_default_keymaps(KeyTable())

    with pytest.raises(KeymapConflictError):
        load_default_keymaps(table)

    load_default_keymaps(table, replace=True)


def test_extra_bindings_override_defaults() -> None:
    table = load_default_keymaps(
        KeyTable(),
        extra_bindings=[make_binding("e", action="word-forward")],
    )

    assert table.lookup("normal", "e").action == "word-forward"
