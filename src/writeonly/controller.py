"""Writing-mode controller.

While enabled, the host is held in insert mode: the blocked keys do nothing,
the delete-word key works once per burst of typing, and the exit key must be
pressed ``threshold`` times before the host is released back to normal mode.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from writeonly.config import WriteOnlyConfig
from writeonly.host.protocol import EditorHost, KeyHandler
from writeonly.runtime import telemetry

KEYMAP_GROUP = "writeonly"
HOST_INSERT_MODE = "insert"
# A deletion stays locked through the change it causes plus one more.
DELETE_STAGE_ARMED = 2


class WritingMode(str, enum.Enum):
    WRITING = "writing"
    NORMAL = "normal"


@dataclass(slots=True)
class WritingSession:
    """Counters for one enable/disable cycle."""

    threshold: int
    escape_count: int = 0
    delete_stage: int = 0

    def register_exit(self) -> bool:
        """Count one exit-key press; ``True`` once the threshold is reached."""

        self.escape_count += 1
        return self.escape_count >= self.threshold

    def arm_delete(self) -> bool:
        """Claim the delete-word allowance; ``False`` while cooling down."""

        if self.delete_stage > 0:
            return False
        self.delete_stage = DELETE_STAGE_ARMED
        return True

    def settle(self) -> None:
        if self.delete_stage > 0:
            self.delete_stage -= 1

    @property
    def remaining_exits(self) -> int:
        return max(0, self.threshold - self.escape_count)


class WriteOnlyController:
    def __init__(
        self, host: EditorHost, config: Optional[WriteOnlyConfig] = None
    ) -> None:
        self.host = host
        self.config = config or WriteOnlyConfig()
        self.session: Optional[WritingSession] = None
        self.logger = telemetry.get_logger("writeonly.controller")

    @property
    def mode(self) -> WritingMode:
        return WritingMode.WRITING if self.session is not None else WritingMode.NORMAL

    @property
    def active(self) -> bool:
        return self.session is not None

    def enable(
        self,
        threshold: Optional[int] = None,
        blocked_keys: Optional[Iterable[str]] = None,
    ) -> WritingSession:
        """Start a writing session, replacing any session already running.

        ``threshold`` and ``blocked_keys`` override the controller's config
        for this session only. Invalid values raise ``WriteOnlyConfigError``
        before the host is touched; a host failure part way through removes
        whatever was already installed and re-raises.
        """

        config = self.config.with_overrides(
            threshold=threshold,
            blocked_keys=tuple(blocked_keys) if blocked_keys is not None else None,
        )
        if self.session is not None:
            self._release()

        with telemetry.span(
            "writeonly::enable",
            component="writeonly",
            metadata={"threshold": config.threshold},
        ):
            session = WritingSession(threshold=config.threshold)
            try:
                self.host.map_keys(
                    HOST_INSERT_MODE, self._interceptors(config), group=KEYMAP_GROUP
                )
                self.host.subscribe_text_changed(self.on_text_changed)
                self.host.start_insert()
            except Exception:
                self._release()
                raise
            self.session = session

        telemetry.record_event(
            "writeonly.enable",
            data={
                "threshold": config.threshold,
                "blocked_keys": ",".join(config.blocked_keys),
            },
        )
        return self.session

    def disable(self) -> bool:
        """End the session and hand the host back in normal mode.

        Returns ``False`` when no session was running.
        """

        if self.session is None:
            return False
        escapes = self.session.escape_count
        with telemetry.span("writeonly::disable", component="writeonly"):
            self._release()
            self.host.stop_insert()
        telemetry.record_event("writeonly.disable", data={"escape_count": escapes})
        return True

    def on_exit_key(self) -> None:
        session = self.session
        if session is None:
            return
        reached = session.register_exit()
        self.host.notify(f"pressed escape: {session.escape_count}/{session.threshold}")
        telemetry.record_event(
            "writeonly.escape",
            level="debug",
            data={"count": session.escape_count, "threshold": session.threshold},
        )
        if reached:
            self.disable()

    def on_delete_word(self) -> None:
        session = self.session
        if session is None or session.delete_stage > 0:
            return
        self.host.delete_previous_word()
        session.arm_delete()
        telemetry.record_event("writeonly.delete_word", level="debug")

    def on_text_changed(self) -> None:
        if self.session is not None:
            self.session.settle()

    def _interceptors(self, config: WriteOnlyConfig) -> Dict[str, KeyHandler]:
        table: Dict[str, KeyHandler] = {key: _blocked for key in config.blocked_keys}
        table[config.exit_key] = self.on_exit_key
        table[config.delete_word_key] = self.on_delete_word
        return table

    def _release(self) -> None:
        self.host.unmap_keys(KEYMAP_GROUP)
        self.host.unsubscribe_text_changed(self.on_text_changed)
        self.session = None


def _blocked() -> None:
    return None


__all__ = [
    "DELETE_STAGE_ARMED",
    "HOST_INSERT_MODE",
    "KEYMAP_GROUP",
    "WriteOnlyController",
    "WritingMode",
    "WritingSession",
]
