"""
Trailing-Edge Rate Limiter
==========================
Bounds how often pointer samples become layout mutations.

The first sample after a quiet period passes straight through. Samples arriving
sooner than `interval` after the last emitted one are coalesced: only the most
recent is kept, and it is emitted by `flush` once the interval has elapsed.
The limiter never reads a clock itself; callers pass `now`, so it can be
driven by a Qt timer in the app and by plain numbers in tests.
"""
from __future__ import annotations

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class RateLimiter(Generic[T]):

    def __init__(self, interval: float) -> None:
        if interval < 0.0:
            raise ValueError(f"Interval must be non-negative, got {interval}")
        self.interval = interval
        self._last_emit: Optional[float] = None
        self._pending: Optional[T] = None
        self._has_pending = False

    @property
    def has_pending(self) -> bool:
        return self._has_pending

    def sample(self, value: T, now: float) -> Optional[T]:
        """Offer a sample; returns it if it may be applied now, else keeps it pending."""
        if self._ready(now):
            self._emit(now)
            return value
        self._pending = value
        self._has_pending = True
        return None

    def flush(self, now: float) -> Optional[T]:
        """Emit the pending sample if the interval has elapsed."""
        if not self._has_pending or not self._ready(now):
            return None
        value = self._pending
        self._emit(now)
        return value

    def drain(self) -> Optional[T]:
        """Take the pending sample regardless of timing (e.g. on pointer release)."""
        value = self._pending if self._has_pending else None
        self._clear()
        return value

    def time_until_flush(self, now: float) -> Optional[float]:
        """Seconds until a pending sample may be flushed; None if nothing is pending."""
        if not self._has_pending:
            return None
        if self._last_emit is None:
            return 0.0
        return max(0.0, self._last_emit + self.interval - now)

    def reset(self) -> None:
        self._last_emit = None
        self._clear()

    def _ready(self, now: float) -> bool:
        return self._last_emit is None or now - self._last_emit >= self.interval

    def _emit(self, now: float) -> None:
        self._last_emit = now
        self._clear()

    def _clear(self) -> None:
        self._pending = None
        self._has_pending = False
