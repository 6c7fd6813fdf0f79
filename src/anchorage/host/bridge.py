"""Wires host editor events to a tracker."""

from typing import TYPE_CHECKING, Any, Protocol
from collections.abc import Callable

if TYPE_CHECKING:
    from anchorage import Tracker


class EventSource(Protocol):
    """Host that publishes document and visibility changes."""

    def on_did_change_text_document(self, listener: Callable[[Any], None]) -> Any:
        ...

    def on_did_change_visible_views(self, listener: Callable[[Any], None]) -> Any:
        ...


class Subscription:
    """Handles returned by the host for one tracker binding."""

    def __init__(self, disposables: list[Any]) -> None:
        self._disposables = disposables

    def dispose(self) -> None:
        while self._disposables:
            self._disposables.pop().dispose()

    @property
    def active(self) -> bool:
        return bool(self._disposables)


def bind(tracker: "Tracker", host: EventSource) -> Subscription:
    """Forward the host's change events to ``tracker``.

    The tracker disposes the subscription when it closes.
    """
    subscription = Subscription(
        [
            host.on_did_change_text_document(tracker.on_document_changed),
            host.on_did_change_visible_views(tracker.on_visibility_changed),
        ]
    )
    return tracker.own(subscription)
