# src/logicgraph/core/events.py
"""Synchronous publish/subscribe."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

Listener = Callable[..., None]


class EventEmitter:
    """
    Minimal typed-by-convention event emitter shared by every stateful entity.

    - Listeners run synchronously in registration order.
    - A nested emit() fired from inside a listener completes before the outer
      emit() moves on to its remaining listeners.
    - Listener exceptions propagate to whoever called emit().
    """

    def __init__(self) -> None:
        self._events: Dict[str, List[Listener]] = {}

    def on(self, event: str, callback: Listener) -> None:
        self._events.setdefault(event, []).append(callback)

    def off(self, event: str, callback: Listener) -> None:
        callbacks = self._events.get(event)
        if not callbacks:
            return
        try:
            callbacks.remove(callback)
        except ValueError:
            pass

    def once(self, event: str, callback: Listener) -> None:
        """Register a listener that detaches itself after the first call."""
        def _wrapper(*args: Any) -> None:
            self.off(event, _wrapper)
            callback(*args)

        self.on(event, _wrapper)

    def emit(self, event: str, *args: Any) -> None:
        callbacks = self._events.get(event)
        if not callbacks:
            return
        # snapshot: off() during dispatch must not skip siblings
        for callback in list(callbacks):
            callback(*args)

    def listener_count(self, event: str) -> int:
        return len(self._events.get(event, ()))

    def remove_all_listeners(self, event: Optional[str] = None) -> None:
        if event is None:
            self._events.clear()
        else:
            self._events.pop(event, None)
