"""Text buffer used by the reference host."""

from .buffer import Buffer, BufferDelta, previous_word_start
from .document import BufferDocument
from .state import BufferState, Cursor
from .sync import BufferMirror, BufferValidationError
from .validation import ensure_cursor

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferDocument",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "Cursor",
    "ensure_cursor",
    "previous_word_start",
]
