"""Lazily computed cached values that re-run initialisation instead of locking."""

from __future__ import annotations

from typing import Callable


class LazyUsize:
    """A value computed on first use and cached afterwards.

    If ``init`` returns ``UNINIT`` the value is returned but not cached, so
    the next call runs ``init`` again. Concurrent callers may each run
    ``init``; it should always return the same value when it succeeds.
    """

    UNINIT = (1 << 64) - 1

    def __init__(self) -> None:
        self._value = self.UNINIT

    def unsync_init(self, init: Callable[[], int]) -> int:
        """Return the cached value, running ``init`` if none is cached yet."""
        value = self._value
        if value == self.UNINIT:
            value = init()
            self._value = value
        return value


class LazyBool:
    """A boolean computed on first use and cached afterwards."""

    def __init__(self) -> None:
        self._inner = LazyUsize()

    def unsync_init(self, init: Callable[[], bool]) -> bool:
        """Return the cached flag, running ``init`` if none is cached yet."""
        return self._inner.unsync_init(lambda: int(bool(init()))) != 0