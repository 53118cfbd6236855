"""Keyword to magic action mapping."""

from __future__ import annotations

from collections.abc import Iterator

from magicargs.core.actions import MagicAction, default_actions
from magicargs.core.workspace import Workspace


class MagicActions:
    """Registered magic actions, at most one per keyword.

    Populated during startup, then only read while arguments are intercepted.
    """

    def __init__(self, *actions: MagicAction):
        self._actions: dict[str, MagicAction] = {}
        self.register(*actions)

    @classmethod
    def with_defaults(cls, workspace: Workspace) -> MagicActions:
        """Registry holding the built-in actions for workspace."""
        return cls(*default_actions(workspace))

    def register(self, *actions: MagicAction) -> None:
        """Add actions. An action replaces any already registered under its keyword."""
        for action in actions:
            self._actions[action.keyword] = action

    def unregister(self, *actions: MagicAction | str) -> None:
        """Remove actions by keyword. Unknown keywords are ignored."""
        for action in actions:
            keyword = action if isinstance(action, str) else action.keyword
            self._actions.pop(keyword, None)

    def get(self, keyword: str) -> MagicAction | None:
        return self._actions.get(keyword)

    def keywords(self) -> list[str]:
        return list(self._actions)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._actions

    def __iter__(self) -> Iterator[MagicAction]:
        return iter(list(self._actions.values()))

    def __len__(self) -> int:
        return len(self._actions)

    def __repr__(self) -> str:
        return f"MagicActions({self.keywords()!r})"
