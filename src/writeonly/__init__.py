"""Lock an editor into insert mode to force uninterrupted writing."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "controller",
    "host",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
