"""Textual demo app that opens a buffer in writing mode."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from writeonly.buffer import Buffer, BufferMirror
from writeonly.config import WriteOnlyConfig, WriteOnlyConfigError
from writeonly.controller import WriteOnlyController
from writeonly.host import Editor
from writeonly.runtime import telemetry

from .controller import TextualUIHooks, TextualWriteOnlyAdapter

RESERVED_KEYS = {"ctrl+c", "ctrl+q", "ctrl+s", "ctrl+e"}
CURSOR_MARK = "█"


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""


def render_with_cursor(mirror: BufferMirror) -> str:
    lines = mirror.text.split("\n")
    row, col = mirror.cursor
    line = lines[row]
    lines[row] = line[:col] + CURSOR_MARK + line[col:]
    return "\n".join(lines)


class WriteOnlyApp(App[None]):
    """Single-buffer editor that starts locked in writing mode."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+s", "save", "Save"),
        ("ctrl+e", "write", "Writing mode"),
    ]

    def __init__(
        self, *, config: WriteOnlyConfig, path: Optional[Path] = None
    ) -> None:
        super().__init__()
        self.config = config
        self.path = path
        self._state = UIState()
        self.editor: Editor | None = None
        self.controller: WriteOnlyController | None = None
        self.adapter: TextualWriteOnlyAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        text = ""
        if self.path is not None and self.path.exists():
            text = self.path.read_text(encoding="utf-8")
        self.editor = Editor(Buffer.from_text(text))
        self.controller = WriteOnlyController(self.editor, self.config)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
        )
        self.adapter = TextualWriteOnlyAdapter(self.editor, self.controller, hooks)
        self.action_write()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in RESERVED_KEYS:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    def action_write(self) -> None:
        if self.controller and self.adapter and not self.controller.active:
            self.controller.enable()
            self._update_status(self.adapter.status_line())

    def action_save(self) -> None:
        if self.path is None or self.editor is None:
            self._update_status("no file to save to")
            return
        self.path.write_text(self.editor.buffer.text, encoding="utf-8")
        telemetry.record_event("app.save", data={"path": str(self.path)})
        self._update_status(f"saved {self.path}")

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = render_with_cursor(mirror)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if self.adapter and name != "text.changed":
            self._update_status(self.adapter.status_line())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="writeonly",
        description="Write first, edit later: an editor locked into insert mode.",
    )
    parser.add_argument("path", nargs="?", type=Path, help="File to write into")
    parser.add_argument(
        "--threshold",
        type=int,
        help="Exit-key presses needed to leave writing mode",
    )
    parser.add_argument(
        "--block",
        action="append",
        metavar="KEY",
        help="Key to disable while writing (repeatable, e.g. --block '<bs>')",
    )
    parser.add_argument("--exit-key", help="Key counted towards leaving")
    parser.add_argument("--delete-word-key", help="Once-per-burst delete-word key")
    parser.add_argument(
        "--preset",
        choices=("development", "production", "quiet"),
        default="quiet",
        help="Telemetry preset (default: quiet, keeps the terminal clean)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> WriteOnlyConfig:
    return WriteOnlyConfig.from_env().with_overrides(
        threshold=args.threshold,
        blocked_keys=tuple(args.block) if args.block else None,
        exit_key=args.exit_key,
        delete_word_key=args.delete_word_key,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = config_from_args(args)
    except WriteOnlyConfigError as exc:
        parser.error(str(exc))
    telemetry.configure(preset=args.preset)
    WriteOnlyApp(config=config, path=args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
