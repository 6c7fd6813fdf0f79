"""User commands for dismissing inline results."""

from collections.abc import Callable

from anchorage import Tracker
from anchorage.host.protocols import View

CommandFn = Callable[[Tracker, View | None], int]


def clear_all(tracker: Tracker, view: View | None) -> int:
    """Clear every inline result."""
    return tracker.remove_all()


def clear_in_editor(tracker: Tracker, view: View | None) -> int:
    """Clear the inline results of the active editor."""
    if view is None:
        return 0
    return tracker.remove_all(view.document)


def clear_current(tracker: Tracker, view: View | None) -> int:
    """Clear the inline results under the active editor's selections."""
    if view is None:
        return 0
    return tracker.remove_at_selections(view.document, view.selections)


DEFAULT_COMMANDS: dict[str, CommandFn] = {
    "clear-all-inline-results": clear_all,
    "clear-all-inline-results-in-editor": clear_in_editor,
    "clear-current-inline-result": clear_current,
}


class CommandTable:
    """Named commands bound to one tracker."""

    def __init__(
        self, tracker: Tracker, commands: dict[str, CommandFn] | None = None
    ) -> None:
        self.tracker = tracker
        self._commands = dict(DEFAULT_COMMANDS if commands is None else commands)

    def register(self, name: str, fn: CommandFn) -> None:
        self._commands[name] = fn

    def run(self, name: str, view: View | None = None) -> int:
        """Run a command against the active view; returns results removed."""
        if name not in self._commands:
            raise KeyError(f"Unknown command: {name}")
        return self._commands[name](self.tracker, view)

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __iter__(self):
        return iter(sorted(self._commands))
