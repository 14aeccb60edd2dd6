"""
In-flight request counter backing the store's loading flag
"""
import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class BusyCounter:
    """
    Reference-counted busy flag

    Every request increments on start and decrements once it settles, so
    the flag stays up until the last overlapping request finishes.
    """

    def __init__(self):
        self._in_flight = 0
        self._listeners: List[Callable[[bool], None]] = []

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    def subscribe(self, listener: Callable[[bool], None]) -> None:
        """Call listener(busy) whenever the flag flips"""
        self._listeners.append(listener)

    def acquire(self) -> None:
        self._in_flight += 1
        logger.debug(f"Busy counter up: {self._in_flight}")
        if self._in_flight == 1:
            self._notify()

    def release(self) -> None:
        if self._in_flight == 0:
            logger.warning("Busy counter released more times than acquired")
            return
        self._in_flight -= 1
        logger.debug(f"Busy counter down: {self._in_flight}")
        if self._in_flight == 0:
            self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self.busy)

    def __enter__(self) -> "BusyCounter":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def get_stats(self) -> dict:
        return {
            'in_flight': self._in_flight,
            'busy': self.busy,
        }
