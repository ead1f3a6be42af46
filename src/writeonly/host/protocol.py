"""Interface the writing-mode controller needs from its host editor."""

from __future__ import annotations

from typing import Callable, Mapping, Protocol

KeyHandler = Callable[[], object]
TextChangedCallback = Callable[[], None]


class EditorHost(Protocol):
    """Services a host editor exposes to the controller."""

    def start_insert(self) -> None:
        """Switch the host into its insert mode."""
        ...

    def stop_insert(self) -> None:
        """Switch the host back to its normal mode."""
        ...

    def map_keys(
        self, mode: str, table: Mapping[str, KeyHandler], *, group: str
    ) -> None:
        """Install ``table`` as one group of key interceptors in ``mode``.

        Interceptors take precedence over the host's own bindings for the
        same keys until the group is removed.
        """
        ...

    def unmap_keys(self, group: str) -> None:
        """Remove every interceptor installed under ``group``, if any."""
        ...

    def subscribe_text_changed(self, callback: TextChangedCallback) -> None:
        ...

    def unsubscribe_text_changed(self, callback: TextChangedCallback) -> None:
        """Drop ``callback``; unknown callbacks are ignored."""
        ...

    def delete_previous_word(self) -> None:
        """Delete from the start of the previous word to the cursor."""
        ...

    def notify(self, message: str) -> None:
        """Show a short status message to the writer."""
        ...


__all__ = ["EditorHost", "KeyHandler", "TextChangedCallback"]
