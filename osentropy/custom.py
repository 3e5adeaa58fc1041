"""A random source supplied by the application."""

from __future__ import annotations

import threading
from typing import Callable

from osentropy.error import Error
from osentropy.util import fill_zero

CustomSource = Callable[[memoryview], None]

_registered: CustomSource | None = None
_lock = threading.Lock()


def register_custom_getrandom(func: CustomSource) -> CustomSource:
    """Register ``func`` as the random source and return it.

    ``func`` receives a writable byte view that it must fill completely,
    and raises ``Error`` on failure. Usable as a decorator.
    """
    global _registered
    if not callable(func):
        raise TypeError("custom random source must be callable")
    with _lock:
        _registered = func
    return func


def clear_custom_getrandom() -> None:
    """Remove the registered random source, if any."""
    global _registered
    with _lock:
        _registered = None


def custom_fill(dest: bytearray | memoryview) -> None:
    """Fill ``dest`` by calling the registered source.

    ``dest`` is zeroed first. Raises ``Error.UNSUPPORTED`` when no source
    has been registered; errors raised by the source propagate.
    """
    func = _registered
    if func is None:
        raise Error.UNSUPPORTED
    fill_zero(dest)
    view = memoryview(dest)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    func(view)