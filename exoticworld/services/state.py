from __future__ import annotations

import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class StateSlot:
    """Holds the current value of one piece of observable state.

    ``set`` replaces the value in a single assignment and then notifies the
    subscribers; setting an equal value is a no-op.
    """

    def __init__(self, name: str, initial: Any = None) -> None:
        self.name = name
        self._value = initial
        self._listeners: List[Listener] = []

    @property
    def value(self) -> Any:
        return self._value

    def set(self, value: Any) -> None:
        if value == self._value:
            return
        self._value = value
        logger.debug("%s -> %r", self.name, value)
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("%s listener failed", self.name)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
