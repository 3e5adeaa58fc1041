"""Helpers shared by the system random sources."""

from __future__ import annotations

import errno as _errno
import os
import threading
from typing import Any, Callable

from osentropy.error import Error


def error_from_errno(errno: int | None) -> Error:
    """Turn an OS error number into an ``Error``.

    Non-positive or missing numbers become ``Error.ERRNO_NOT_POSITIVE``.
    """
    if errno is not None and errno > 0:
        return Error(errno)
    return Error.ERRNO_NOT_POSITIVE


def _writable_view(buf: bytearray | memoryview) -> memoryview:
    view = memoryview(buf)
    if view.readonly:
        raise TypeError("buffer must be writable")
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def sys_fill_exact(
    buf: bytearray | memoryview,
    sys_fill: Callable[[memoryview], int],
) -> None:
    """Fill ``buf`` completely by calling ``sys_fill`` repeatedly.

    ``sys_fill`` receives a writable view of the part still to be filled and
    returns how many bytes it wrote, or raises ``OSError``. Interrupted calls
    are retried; a zero, negative or too large count is ``Error.UNEXPECTED``.
    """
    view = _writable_view(buf)
    while len(view) > 0:
        try:
            written = sys_fill(view)
        except InterruptedError:
            continue
        except OSError as exc:
            if exc.errno == _errno.EINTR:
                continue
            raise error_from_errno(exc.errno) from exc
        if written <= 0 or written > len(view):
            raise Error.UNEXPECTED
        view = view[written:]


def fill_zero(buf: bytearray | memoryview) -> bytearray | memoryview:
    """Set every byte of ``buf`` to zero and return it."""
    view = _writable_view(buf)
    view[:] = bytes(len(view))
    return buf


def open_readonly(path: str | os.PathLike[str]) -> int:
    """Open ``path`` read-only and close-on-exec, retrying if interrupted.

    The caller owns the returned descriptor and must close it.
    """
    flags = os.O_RDONLY | getattr(os, "O_CLOEXEC", 0)
    while True:
        try:
            return os.open(path, flags)
        except InterruptedError:
            continue
        except OSError as exc:
            if exc.errno == _errno.EINTR:
                continue
            raise error_from_errno(exc.errno) from exc


_UNINIT = object()

# Operating-system functions that may or may not exist at runtime.
_OPTIONAL_FUNCTIONS: dict[str, Callable[[], Any]] = {
    "getrandom": lambda: getattr(os, "getrandom", None),
    "getentropy": lambda: getattr(os, "getentropy", None),
    "urandom": lambda: getattr(os, "urandom", None),
}


class Weak:
    """A lazily resolved, optional operating-system function.

    ``ptr()`` returns the function from the ``os`` module if this platform
    provides it, otherwise None. The lookup result is cached.
    """

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("function name must not be empty")
        self.name = name
        self._addr: Any = _UNINIT
        self._lock = threading.Lock()

    def ptr(self) -> Callable[..., Any] | None:
        """Return the function if present at runtime, otherwise None."""
        addr = self._addr
        if addr is _UNINIT:
            lookup = _OPTIONAL_FUNCTIONS.get(self.name)
            found = lookup() if lookup is not None else None
            addr = found if callable(found) else None
            with self._lock:
                self._addr = addr
        return addr