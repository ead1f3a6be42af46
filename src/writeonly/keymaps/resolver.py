"""Single-stroke keymap resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Optional

from writeonly.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Picks the binding that handles a token in a given mode.

    Among the bindings whose ``when`` clauses hold, the highest priority wins;
    ties go to the lexically smallest binding id so resolution is stable.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name

    def resolve(
        self,
        mode: str,
        token: str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        flags = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "token": token},
        ) as handle:
            allowed = [
                binding
                for binding in self._registry.candidates(mode, token)
                if binding.allows(flags)
            ]
            if not allowed:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")

            allowed.sort(key=lambda b: (-b.priority, b.id))
            binding = allowed[0]
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", binding.id)
            action = self._registry.get_action(binding.action_id)
            return ResolutionResult(
                status="match", match=ResolutionMatch(binding=binding, action=action)
            )


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
