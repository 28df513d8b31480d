"""Transient feedback messages with a cancelable expiry."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass
class ScheduledClear:
    """A pending "clear this message" task."""

    deadline: float
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class Feedback:
    """Holds at most one message and the scheduled task that will clear it.

    Showing a new message cancels the previous task before scheduling its
    own, so an old deadline can never wipe a newer message. Expiry is
    deadline-based: ``current()`` hides an expired message immediately and
    ``expire()`` drops it.
    """

    def __init__(self, timeout: float, clock: Callable[[], float] = time.monotonic):
        self._timeout = timeout
        self._clock = clock
        self._message: str | None = None
        self._pending: ScheduledClear | None = None

    def show(self, message: str) -> ScheduledClear:
        self.cancel()
        self._message = message
        self._pending = ScheduledClear(self._clock() + self._timeout)
        return self._pending

    def cancel(self) -> None:
        """Drop the message and its pending clear."""
        if self._pending is not None:
            self._pending.cancel()
        self._pending = None
        self._message = None

    def _due(self) -> bool:
        pending = self._pending
        return pending is not None and not pending.cancelled and self._clock() >= pending.deadline

    def expire(self) -> bool:
        """Run the scheduled clear if it is due. Returns whether it fired."""
        if not self._due():
            return False
        self._pending = None
        self._message = None
        return True

    def current(self) -> str | None:
        if self._message is None or self._due():
            return None
        return self._message
