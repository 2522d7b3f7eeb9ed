"""Signal — synchronous, zero-payload notifications.

Levels and timers expose their outcomes (win, die, lose, time-up) as
signals.  Subscribers are called inline, in subscription order, from
within the tick that produced the condition.
"""

from __future__ import annotations

from collections.abc import Callable

Listener = Callable[[], None]


class Signal:
    """A list of listeners called synchronously on ``publish``."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Listener:
        """Register ``listener`` and return it (usable as a decorator)."""
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        """Remove ``listener``; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self) -> None:
        """Call every listener in subscription order."""
        for listener in list(self._listeners):
            listener()

    def __len__(self) -> int:
        return len(self._listeners)

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, listeners={len(self._listeners)})"
