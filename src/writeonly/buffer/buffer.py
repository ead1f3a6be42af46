"""Buffer façade combining document and cursor state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from writeonly.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Cursor
from .sync import BufferMirror
from .validation import ensure_cursor


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    cursor: Cursor
    label: str
    removed: str = ""


def _char_class(char: str) -> int:
    if char.isspace():
        return 0
    if char.isalnum() or char == "_":
        return 2
    return 1


def previous_word_start(text: str, offset: int) -> int:
    """Offset where a backward word motion from ``offset`` lands.

    Whitespace (newlines included) before the cursor is skipped, then the run
    of characters sharing a class is consumed. Keyword characters
    (alphanumerics and ``_``) and punctuation form separate words.
    """

    index = offset
    while index > 0 and _char_class(text[index - 1]) == 0:
        index -= 1
    if index == 0:
        return 0
    word_class = _char_class(text[index - 1])
    while index > 0 and _char_class(text[index - 1]) == word_class:
        index -= 1
    return index


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        buffer = cls(name=name, document=BufferDocument.from_text(text))
        last_row = buffer.document.line_count - 1
        buffer.state.set_cursor(last_row, len(buffer.document.get_line(last_row)))
        return buffer

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def version(self) -> int:
        return self.document.version

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            cursor=self.state.cursor,
            version=self.document.version,
            attributes=dict(attributes or {}),
        )

    def replace_range(
        self, start: Cursor, end: Cursor, text: str, *, label: str
    ) -> BufferDelta:
        start = ensure_cursor(self.document, start)
        end = ensure_cursor(self.document, end)
        if start > end:
            start, end = end, start
        with telemetry.span(
            f"buffer::{label}", component=True, metadata={"buffer": self.name}
        ):
            before = self.document.text
            start_offset = self.offset_of(start)
            end_offset = self.offset_of(end)
            removed = before[start_offset:end_offset]
            self.document = self.document.replace_text(
                before[:start_offset] + text + before[end_offset:]
            )
            self.state.set_cursor(*self.cursor_at(start_offset + len(text)))
            self.state.last_change_tick = self.document.version

        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            cursor=self.state.cursor,
            label=label,
            removed=removed,
        )

    def insert_text(self, text: str) -> BufferDelta:
        position = self.state.cursor
        return self.replace_range(position, position, text, label="insert_text")

    def delete_backward(self) -> Optional[BufferDelta]:
        offset = self.offset_of(self.state.cursor)
        if offset == 0:
            return None
        return self.replace_range(
            self.cursor_at(offset - 1), self.state.cursor, "", label="delete_backward"
        )

    def delete_forward(self) -> Optional[BufferDelta]:
        offset = self.offset_of(self.state.cursor)
        if offset >= len(self.document.text):
            return None
        return self.replace_range(
            self.state.cursor, self.cursor_at(offset + 1), "", label="delete_forward"
        )

    def delete_previous_word(self) -> Optional[BufferDelta]:
        offset = self.offset_of(self.state.cursor)
        start = previous_word_start(self.document.text, offset)
        if start == offset:
            return None
        return self.replace_range(
            self.cursor_at(start), self.state.cursor, "", label="delete_word"
        )

    def move_horizontal(self, delta: int) -> Cursor:
        offset = self.offset_of(self.state.cursor) + delta
        offset = max(0, min(offset, len(self.document.text)))
        self.state.set_cursor(*self.cursor_at(offset))
        return self.state.cursor

    def move_vertical(self, delta: int) -> Cursor:
        row, col = self.state.cursor
        row = max(0, min(row + delta, self.document.line_count - 1))
        self.state.set_cursor(row, min(col, len(self.document.get_line(row))))
        return self.state.cursor

    def offset_of(self, cursor: Cursor) -> int:
        row, col = ensure_cursor(self.document, cursor)
        lines = self.document.snapshot()
        return sum(len(line) + 1 for line in lines[:row]) + col

    def cursor_at(self, offset: int) -> Cursor:
        running = 0
        lines = self.document.snapshot()
        for row, line in enumerate(lines):
            if offset <= running + len(line):
                return (row, offset - running)
            running += len(line) + 1
        return (len(lines) - 1, len(lines[-1]))
