"""Base classes and shared plumbing for host editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from writeonly.buffer import Buffer

TEXT_CHANGED = "text.changed"
MODE_SWITCH = "mode.switch"
MESSAGE = "editor.message"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    buffer: Buffer
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Synchronous event bus; callbacks run in subscription order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> bool:
        callbacks = self._subscribers.get(event, [])
        if callback not in callbacks:
            return False
        callbacks.remove(callback)
        if not callbacks:
            self._subscribers.pop(event, None)
        return True

    def subscriber_count(self, event: str) -> int:
        return len(self._subscribers.get(event, ()))

    def emit(self, event: str, payload: object | None = None) -> None:
        # Copy so callbacks may unsubscribe while being notified.
        for callback in list(self._subscribers.get(event, ())):
            callback(payload)


class Mode:
    """Base class all host modes inherit from."""

    name: str = "mode"
    # Whether buffer edits made while this mode is active are broadcast
    # as ``TEXT_CHANGED`` once the key has been handled.
    reports_text_changes: bool = False

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
