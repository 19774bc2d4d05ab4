"""Change notification with subscription support."""

from __future__ import annotations

from typing import Any, Callable

Listener = Callable[[Any], None]


class ChangeNotifier:
    """Keeps a list of listeners and calls them when state changes."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Subscribe to state changes.

        Args:
            listener: A function called with this notifier on every change.

        Returns:
            An unsubscribe function.
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def has_listeners(self) -> bool:
        """True if anything is subscribed."""
        return bool(self._listeners)

    def notify_listeners(self) -> None:
        """Notify all listeners of a state change."""
        if not self.has_listeners:
            return
        # Listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(self)

    def clear_listeners(self) -> None:
        """Remove every listener."""
        self._listeners.clear()
