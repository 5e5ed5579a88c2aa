"""Device event kinds and the listener registry.

Listeners are delivered synchronously, in registration order, within the
call that caused the change.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

_logger = logging.getLogger(__name__)

Listener = Callable[..., Any]

_CHANGE_PREFIX = "change:"


class EventKind(StrEnum):
    ONLINE = "online"
    OFFLINE = "offline"
    CHANGE = "change"


def change_of(name: str) -> str:
    """Event name scoped to a single property, e.g. ``change:host``."""
    if not name:
        raise ValueError("property name must be non-empty")
    return f"{_CHANGE_PREFIX}{name}"


def property_of(event: str) -> str | None:
    """Inverse of :func:`change_of`; ``None`` for non-scoped events."""
    if event.startswith(_CHANGE_PREFIX):
        return event[len(_CHANGE_PREFIX) :] or None
    return None


class EventEmitter:
    """Registry of listeners keyed by event name."""

    def __init__(self, *, raise_errors: bool = False) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._raise_errors = raise_errors

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register *listener* for *event*.

        Returns a callable that removes the registration again.
        """
        self._listeners.setdefault(str(event), []).append(listener)

        def _unsubscribe() -> None:
            self.off(event, listener)

        return _unsubscribe

    def once(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register *listener* for the next *event* only."""

        def _wrapper(*args: Any) -> None:
            self.off(event, _wrapper)
            listener(*args)

        _wrapper.listener = listener  # type: ignore[attr-defined]
        return self.on(event, _wrapper)

    def off(self, event: str, listener: Listener) -> None:
        """Remove one registration of *listener*; unknown listeners are ignored.

        Listeners registered with :meth:`once` can be removed by passing the
        original callable.
        """
        listeners = self._listeners.get(str(event))
        if not listeners:
            return
        for index, registered in enumerate(listeners):
            if registered == listener or getattr(registered, "listener", None) == listener:
                del listeners[index]
                break
        else:
            return
        if not listeners:
            del self._listeners[str(event)]

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(str(event), ()))

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener registered for *event* with *args*.

        The listener list is snapshotted first so listeners may register or
        remove listeners while being delivered.  Returns whether any
        listener was registered.
        """
        listeners = list(self._listeners.get(str(event), ()))
        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                if self._raise_errors:
                    raise
                _logger.warning("Listener for %s event failed", event, exc_info=True)
        return bool(listeners)
