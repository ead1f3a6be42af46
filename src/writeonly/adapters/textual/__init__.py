"""Textual integration: UI hooks adapter and the demo application."""

from .controller import TextualUIHooks, TextualWriteOnlyAdapter, translate_key

__all__ = ["TextualUIHooks", "TextualWriteOnlyAdapter", "translate_key"]
