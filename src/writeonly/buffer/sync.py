"""Boundary types shared with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field

from .state import Cursor


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of the buffer to render."""

    text: str
    cursor: Cursor
    version: int
    attributes: dict[str, str] = field(default_factory=dict)


class BufferValidationError(RuntimeError):
    """Raised when a cursor falls outside the document."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
