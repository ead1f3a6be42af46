"""Writing-mode configuration and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Optional

from writeonly.keymaps import normalize_token

ENV_PREFIX = "WRITEONLY_"

DEFAULT_THRESHOLD = 15
DEFAULT_BLOCKED_KEYS: tuple[str, ...] = (
    "BACKSPACE",
    "DELETE",
    "LEFT",
    "RIGHT",
    "UP",
    "DOWN",
)
DEFAULT_EXIT_KEY = "ESC"
DEFAULT_DELETE_WORD_KEY = "ctrl+w"


class WriteOnlyConfigError(ValueError):
    """Raised when a writing-mode configuration cannot be used."""


def _normalize_keys(keys: Iterable[str], *, field_name: str) -> tuple[str, ...]:
    if isinstance(keys, str):
        raise WriteOnlyConfigError(f"{field_name} must be a sequence of keys")
    try:
        tokens = tuple(normalize_token(str(key)) for key in keys)
    except ValueError as exc:
        raise WriteOnlyConfigError(f"{field_name}: {exc}") from exc
    return tuple(dict.fromkeys(tokens))


def _normalize_key(key: str, *, field_name: str) -> str:
    try:
        return normalize_token(str(key))
    except ValueError as exc:
        raise WriteOnlyConfigError(f"{field_name}: {exc}") from exc


def _positive_int(value: object, *, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise WriteOnlyConfigError(
            f"{field_name} must be an integer, got {value!r}"
        )
    if value <= 0:
        raise WriteOnlyConfigError(f"{field_name} must be positive, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class WriteOnlyConfig:
    """Validated settings for one writing session.

    Keys accept engine tokens (``ESC``, ``ctrl+w``) or vim notation
    (``<esc>``, ``<C-w>``) and are stored normalized.
    """

    threshold: int = DEFAULT_THRESHOLD
    blocked_keys: tuple[str, ...] = DEFAULT_BLOCKED_KEYS
    exit_key: str = DEFAULT_EXIT_KEY
    delete_word_key: str = DEFAULT_DELETE_WORD_KEY

    def __post_init__(self) -> None:
        _positive_int(self.threshold, field_name="threshold")

        blocked = _normalize_keys(self.blocked_keys, field_name="blocked_keys")
        if not blocked:
            raise WriteOnlyConfigError("blocked_keys cannot be empty")
        exit_key = _normalize_key(self.exit_key, field_name="exit_key")
        delete_key = _normalize_key(self.delete_word_key, field_name="delete_word_key")

        if exit_key == delete_key:
            raise WriteOnlyConfigError(
                f"exit_key and delete_word_key are both '{exit_key}'"
            )
        for name, key in (("exit_key", exit_key), ("delete_word_key", delete_key)):
            if key in blocked:
                raise WriteOnlyConfigError(f"{name} '{key}' is also a blocked key")

        object.__setattr__(self, "blocked_keys", blocked)
        object.__setattr__(self, "exit_key", exit_key)
        object.__setattr__(self, "delete_word_key", delete_key)

    def with_overrides(self, **changes: object) -> "WriteOnlyConfig":
        """Copy with the non-``None`` ``changes`` applied and re-validated."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "WriteOnlyConfig":
        """Read ``WRITEONLY_THRESHOLD``, ``WRITEONLY_BLOCKED_KEYS`` (comma
        separated), ``WRITEONLY_EXIT_KEY`` and ``WRITEONLY_DELETE_WORD_KEY``."""

        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            raw = env.get(f"{ENV_PREFIX}{name}")
            if raw is None or not raw.strip():
                return None
            return raw.strip()

        changes: dict[str, object] = {}
        threshold = get("THRESHOLD")
        if threshold is not None:
            try:
                changes["threshold"] = int(threshold)
            except ValueError as exc:
                raise WriteOnlyConfigError(
                    f"{ENV_PREFIX}THRESHOLD must be an integer, got {threshold!r}"
                ) from exc
        blocked = get("BLOCKED_KEYS")
        if blocked is not None:
            changes["blocked_keys"] = tuple(
                part.strip() for part in blocked.split(",") if part.strip()
            )
        changes["exit_key"] = get("EXIT_KEY")
        changes["delete_word_key"] = get("DELETE_WORD_KEY")
        return cls().with_overrides(**changes)


__all__ = [
    "DEFAULT_BLOCKED_KEYS",
    "DEFAULT_DELETE_WORD_KEY",
    "DEFAULT_EXIT_KEY",
    "DEFAULT_THRESHOLD",
    "WriteOnlyConfig",
    "WriteOnlyConfigError",
]
