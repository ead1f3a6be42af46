from __future__ import annotations

import pytest

from writeonly.keymaps import (
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    WhenClause,
    normalize_token,
)


def make_binding(
    binding_id: str,
    *,
    key: str = "ESC",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        mode="insert",
        stroke=KeyStroke.parse(key),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in {binding.action_id for binding in bindings}:
        registry.register_action(
            ActionRef(id=action_id, handler=lambda *args, **kwargs: action_id)
        )
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_token() -> None:
    binding = make_binding("insert.esc")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("insert", "ESC")

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "core.test"


def test_resolver_misses_unknown_token_and_mode() -> None:
    resolver = KeymapResolver(build_registry([make_binding("insert.esc")]))

    assert resolver.resolve("insert", "x").status == "miss"
    assert resolver.resolve("normal", "ESC").status == "miss"


def test_gated_binding_outranks_fallback_only_when_flag_set() -> None:
    fallback = make_binding("default", action_id="core.default")
    gated = make_binding(
        "intercept",
        action_id="core.intercept",
        when=(WhenClause("locked"),),
        priority=100,
    )
    resolver = KeymapResolver(build_registry([fallback, gated]))

    unlocked = resolver.resolve("insert", "ESC", context={"locked": False})
    locked = resolver.resolve("insert", "ESC", context={"locked": True})

    assert unlocked.match is not None and unlocked.match.binding.id == "default"
    assert locked.match is not None and locked.match.binding.id == "intercept"


def test_gated_binding_without_fallback_misses() -> None:
    gated = make_binding("intercept", when=(WhenClause("locked"),))
    resolver = KeymapResolver(build_registry([gated]))

    assert resolver.resolve("insert", "ESC").status == "miss"


@pytest.mark.parametrize(
    ("notation", "token"),
    [
        ("ESC", "ESC"),
        ("<esc>", "ESC"),
        ("escape", "ESC"),
        ("<bs>", "BACKSPACE"),
        ("<Del>", "DELETE"),
        ("<left>", "LEFT"),
        ("<C-w>", "ctrl+w"),
        ("ctrl+w", "ctrl+w"),
        ("control+W", "ctrl+W"),
        ("<S-Left>", "shift+LEFT"),
        ("shift+ctrl+x", "ctrl+shift+x"),
        ("<C-->", "ctrl+-"),
        ("ctrl++", "ctrl++"),
        ("+", "+"),
        ("a", "a"),
    ],
)
def test_key_notation(notation: str, token: str) -> None:
    assert normalize_token(notation) == token


def test_empty_key_notation_rejected() -> None:
    with pytest.raises(ValueError):
        KeyStroke.parse("   ")
