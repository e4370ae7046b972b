"""Global "something changed" signal used to trigger re-renders."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger("blockflow.flow")


class DirtyNotifier:
    """Parameterless change signal.

    Listeners are called synchronously, in subscription order, on every
    ``dirty()``. Coalescing is left to listeners.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[[], None]] = []
        self.count = 0

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dirty(self) -> None:
        self.count += 1
        logger.debug("Dirty signal #%d (%d listeners)", self.count, len(self._listeners))
        for listener in list(self._listeners):
            listener()
