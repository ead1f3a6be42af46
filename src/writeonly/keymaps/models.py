"""Dataclasses describing key strokes, bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

_MODIFIER_ALIASES = {
    "c": "ctrl",
    "ctrl": "ctrl",
    "control": "ctrl",
    "s": "shift",
    "shift": "shift",
    "m": "alt",
    "a": "alt",
    "alt": "alt",
    "meta": "alt",
}

_KEY_ALIASES = {
    "esc": "ESC",
    "escape": "ESC",
    "bs": "BACKSPACE",
    "backspace": "BACKSPACE",
    "del": "DELETE",
    "delete": "DELETE",
    "cr": "ENTER",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "space": "SPACE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
}


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = []
    for modifier in modifiers:
        cleaned = modifier.strip().lower()
        if not cleaned:
            continue
        values.append(_MODIFIER_ALIASES.get(cleaned, cleaned))
    return tuple(sorted(dict.fromkeys(values)))


def _normalize_key(key: str) -> str:
    if len(key) == 1:
        return key
    return _KEY_ALIASES.get(key.lower(), key.upper())


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press.

    Named keys are upper-cased (``ESC``, ``BACKSPACE``), single characters
    keep their case, modifiers are lower-cased and sorted.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", _normalize_key(self.key))
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key

    @classmethod
    def parse(cls, notation: str) -> "KeyStroke":
        """Parse ``ctrl+w`` style tokens as well as vim ``<C-w>`` notation."""

        text = notation.strip()
        if not text:
            raise ValueError("key notation cannot be empty")

        if len(text) > 2 and text.startswith("<") and text.endswith(">"):
            parts = text[1:-1].split("-")
            if len(parts) > 1 and parts[-1] == "":
                # <C-->
                return cls("-", tuple(parts[:-2]))
            return cls(parts[-1], tuple(parts[:-1]))

        head, sep, tail = text.rpartition("+")
        if not sep or not head:
            return cls(text)
        if not tail:
            # ctrl++
            return cls("+", tuple(part for part in head.split("+") if part))
        return cls(tail, tuple(head.split("+")))


def normalize_token(notation: str) -> str:
    return KeyStroke.parse(notation).token


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean flag condition gating a binding."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:], False)
        return cls(expr)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable executed when a binding resolves."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates one key stroke in one mode with an action."""

    id: str
    mode: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    source: str | None = None
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))
        object.__setattr__(
            self,
            "when",
            tuple(
                clause
                if isinstance(clause, WhenClause)
                else WhenClause.parse(str(clause))
                for clause in self.when
            ),
        )

    @property
    def token(self) -> str:
        return self.stroke.token

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)


__all__ = [
    "KeyStroke",
    "WhenClause",
    "ActionRef",
    "Binding",
    "normalize_token",
]
