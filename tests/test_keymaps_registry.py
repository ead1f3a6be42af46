import pytest

from writeonly.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "insert",
    key: str = "ESC",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    source: str | None = None,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=KeyStroke.parse(key),
        action_id=action_id,
        when=when,
        source=source,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="insert.esc")

    registry.register_binding(binding)

    assert list(registry.iter_bindings()) == [binding]
    assert registry.candidates("insert", "ESC") == [binding]


def test_register_binding_requires_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="insert.esc"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="insert.esc"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="insert.esc.duplicate"))

    assert [b.id for b in excinfo.value.conflicts] == ["insert.esc"]


def test_vim_notation_and_token_collide() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="a", key="ctrl+w"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="b", key="<C-w>"))


def test_gated_binding_does_not_conflict_with_fallback() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="default"))
    registry.register_binding(
        make_binding(binding_id="locked", when=(WhenClause("locked"),))
    )
    registry.register_binding(
        make_binding(binding_id="unlocked", when=(WhenClause.parse("!locked"),))
    )

    assert len(registry.candidates("insert", "ESC")) == 3


def test_same_gate_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(
        make_binding(binding_id="first", when=(WhenClause("locked"),))
    )

    with pytest.raises(KeymapConflictError):
        registry.register_binding(
            make_binding(binding_id="second", when=(WhenClause("locked"),))
        )


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", key="BACKSPACE")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.candidates("insert", "ESC") == []


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert list(registry.iter_bindings()) == []
    assert registry.candidates("insert", "ESC") == []
    assert registry.unregister_binding("binding") is None


def test_unregister_source_removes_whole_group() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="keep", key="x"))
    for key in ("ESC", "BACKSPACE", "LEFT"):
        registry.register_binding(
            make_binding(binding_id=f"group.{key}", key=key, source="group")
        )
    removed = registry.unregister_source("group")

    assert sorted(b.id for b in removed) == ["group.BACKSPACE", "group.ESC", "group.LEFT"]
    assert [b.id for b in registry.iter_bindings()] == ["keep"]
    assert registry.unregister_source("group") == []


def test_unregister_action_refuses_bound_action() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="binding"))

    with pytest.raises(ValueError):
        registry.unregister_action("core.test")

    registry.unregister_binding("binding")
    assert registry.unregister_action("core.test") is not None
    assert not registry.has_action("core.test")


def test_load_default_keymaps() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert {b.mode for b in registry.iter_bindings()} == {"insert", "normal"}
    assert registry.get_binding("insert.ctrl+w").action_id == "edit.delete_word"
    assert registry.get_binding("insert.BACKSPACE").source == "defaults"


def test_load_default_keymaps_exclude() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_bindings=("insert.ctrl+w",))

    assert registry.candidates("insert", "ctrl+w") == []
