"""Keymap registry storing actions and the per-mode key table."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Sequence

from writeonly.runtime.telemetry import span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """Raised when a new binding overlaps existing entries."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and bindings indexed by ``mode -> token``."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._table: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def unregister_action(self, action_id: str) -> Optional[ActionRef]:
        in_use = [b.id for b in self._bindings.values() if b.action_id == action_id]
        if in_use:
            raise ValueError(f"Action '{action_id}' is still bound by {in_use}")
        return self._actions.pop(action_id, None)

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            existing = self._bindings.get(binding.id)
            if existing is not None and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            ignore = (binding.id,) if replace else ()
            conflicts = self.detect_conflicts(binding, ignore=ignore)
            if conflicts:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if existing is not None:
                self._unindex(existing)
            self._bindings[binding.id] = binding
            self._index(binding)
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with span(
            "keymaps::unregister_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ):
            binding = self._bindings.pop(binding_id, None)
            if binding is None:
                return None
            self._unindex(binding)
            return binding

    def unregister_source(self, source: str) -> list[Binding]:
        """Drop every binding registered with ``source``."""

        with span(
            "keymaps::unregister_source",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"source": source},
        ) as handle:
            removed = [b for b in self._bindings.values() if b.source == source]
            for binding in removed:
                del self._bindings[binding.id]
                self._unindex(binding)
            handle.add_metadata("removed", len(removed))
            return removed

    def iter_bindings(self) -> Iterator[Binding]:
        return iter(tuple(self._bindings.values()))

    def candidates(self, mode: str, token: str) -> list[Binding]:
        bucket = self._table.get(mode, {}).get(token, set())
        return [self._bindings[binding_id] for binding_id in sorted(bucket)]

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        ignored = set(ignore or ())
        return [
            existing
            for existing in self.candidates(binding.mode, binding.token)
            if existing.id not in ignored and _contexts_overlap(binding, existing)
        ]

    def _index(self, binding: Binding) -> None:
        by_token = self._table.setdefault(binding.mode, {})
        by_token.setdefault(binding.token, set()).add(binding.id)

    def _unindex(self, binding: Binding) -> None:
        by_token = self._table.get(binding.mode)
        if not by_token:
            return
        bucket = by_token.get(binding.token)
        if bucket is None:
            return
        bucket.discard(binding.id)
        if not bucket:
            by_token.pop(binding.token, None)
        if not by_token:
            self._table.pop(binding.mode, None)


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """Two bindings on the same key overlap when no flag state separates them.

    An ungated binding acts as the fallback for gated ones, so it only
    collides with another ungated binding. Gated bindings collide when their
    shared flags agree and they gate on the same set of flags.
    """

    if not left.when and not right.when:
        return True
    if not left.when or not right.when:
        return False

    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    return left_map == right_map


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
]
