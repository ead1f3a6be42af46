"""In-process reference host: buffer, modes and keymap table."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional

from writeonly.buffer import Buffer
from writeonly.keymaps import (
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    ResolutionMatch,
    WhenClause,
    load_default_keymaps,
)
from writeonly.modes import (
    MESSAGE,
    TEXT_CHANGED,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
)
from writeonly.modes.keymap_helpers import update_flag
from writeonly.modes.mode_manager import ModeManager
from writeonly.runtime import telemetry

from .protocol import KeyHandler, TextChangedCallback

INTERCEPT_PRIORITY = 100


def group_flag(group: str) -> str:
    return f"{group}_active"


class Editor:
    """Minimal modal editor implementing :class:`EditorHost`.

    Interceptor groups are registered as bindings that outrank the defaults
    and are gated on a per-group flag, so removing a group restores the
    host's own behaviour for those keys.
    """

    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        registry: Optional[KeymapRegistry] = None,
        bus: Optional[ModeBus] = None,
    ) -> None:
        self.logger = telemetry.get_logger("writeonly.host")
        self.registry = registry or KeymapRegistry(logger_name="writeonly.keymaps")
        if registry is None:
            load_default_keymaps(self.registry)
        self.buffer = buffer or Buffer()
        self.context = ModeContext(buffer=self.buffer, bus=bus or ModeBus(), extras={})
        self.manager = ModeManager(
            self.context,
            keymap_registry=self.registry,
            keymap_resolver=KeymapResolver(
                self.registry, logger_name="writeonly.keymaps"
            ),
        )
        self.manager.register_mode(NormalMode)
        self.manager.register_mode(InsertMode)
        self._groups: Dict[str, tuple[str, ...]] = {}
        self._observers: Dict[TextChangedCallback, Callable[[object], None]] = {}
        self.last_message: Optional[str] = None

    @property
    def bus(self) -> ModeBus:
        return self.context.bus

    @property
    def mode(self) -> str:
        return self.manager.active_name or "normal"

    def groups(self) -> tuple[str, ...]:
        return tuple(self._groups)

    def start_insert(self) -> None:
        self.manager.switch_mode("insert")

    def stop_insert(self) -> None:
        self.manager.switch_mode("normal")

    def map_keys(
        self, mode: str, table: Mapping[str, KeyHandler], *, group: str
    ) -> None:
        strokes: Dict[str, tuple[KeyStroke, KeyHandler]] = {}
        for key, handler in table.items():
            if not callable(handler):
                raise TypeError(
                    f"Handler for '{key}' in '{group}' is not callable"
                )
            stroke = KeyStroke.parse(key)
            if stroke.token in strokes:
                raise ValueError(f"Key '{stroke.token}' mapped twice in '{group}'")
            strokes[stroke.token] = (stroke, handler)

        if group in self._groups:
            self.unmap_keys(group)

        action_ids = []
        try:
            for stroke, handler in strokes.values():
                action = self.registry.register_action(
                    ActionRef(
                        id=f"{group}.{mode}.{stroke.token}",
                        handler=_intercept(handler),
                        description=f"{group} interceptor for {stroke.token}",
                    ),
                    replace=True,
                )
                action_ids.append(action.id)
                self.registry.register_binding(
                    Binding(
                        id=action.id,
                        mode=mode,
                        stroke=stroke,
                        action_id=action.id,
                        when=(WhenClause(group_flag(group)),),
                        source=group,
                        priority=INTERCEPT_PRIORITY,
                    )
                )
        except Exception:
            self.registry.unregister_source(group)
            for action_id in action_ids:
                self.registry.unregister_action(action_id)
            raise

        self._groups[group] = tuple(action_ids)
        update_flag(self.context, group_flag(group), True)
        telemetry.record_event(
            "host.map_keys", data={"group": group, "mode": mode, "keys": len(table)}
        )

    def unmap_keys(self, group: str) -> None:
        action_ids = self._groups.pop(group, ())
        update_flag(self.context, group_flag(group), False)
        self.registry.unregister_source(group)
        for action_id in action_ids:
            self.registry.unregister_action(action_id)
        telemetry.record_event("host.unmap_keys", data={"group": group})

    def subscribe_text_changed(self, callback: TextChangedCallback) -> None:
        if callback in self._observers:
            return

        def relay(payload: object) -> None:
            del payload
            callback()

        self._observers[callback] = relay
        self.bus.subscribe(TEXT_CHANGED, relay)

    def unsubscribe_text_changed(self, callback: TextChangedCallback) -> None:
        relay = self._observers.pop(callback, None)
        if relay is not None:
            self.bus.unsubscribe(TEXT_CHANGED, relay)

    def delete_previous_word(self) -> None:
        self.buffer.delete_previous_word()

    def notify(self, message: str) -> None:
        self.last_message = message
        self.bus.emit(MESSAGE, message)

    def handle_key(
        self, key: str | KeyInput, *, text: Optional[str] = None
    ) -> ModeResult:
        """Dispatch ``key`` (a token, vim notation, or ``KeyInput``)."""

        if isinstance(key, str):
            stroke = KeyStroke.parse(key)
            if text is None and len(stroke.key) == 1 and not stroke.modifiers:
                text = stroke.key
            key = KeyInput(key=stroke.key, modifiers=stroke.modifiers, text=text)
        return self.manager.handle_key(key)

    def type_text(self, text: str) -> None:
        for char in text:
            if char == "\n":
                self.handle_key("ENTER")
            else:
                self.handle_key(KeyInput(key=char, text=char))


def _intercept(handler: KeyHandler) -> Callable[..., ModeResult]:
    def action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
        del context
        outcome = handler()
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(
            consumed=True, status="intercepted", message=match.binding.token
        )

    return action


__all__ = ["Editor", "INTERCEPT_PRIORITY", "group_flag"]
