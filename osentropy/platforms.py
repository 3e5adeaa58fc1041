"""Random sources for the individual operating-system families."""

from __future__ import annotations

import errno as _errno
import os
from typing import Any, Callable, Iterator

from osentropy import use_file
from osentropy.error import Error
from osentropy.lazy import LazyBool
from osentropy.util import Weak, error_from_errno, sys_fill_exact

_GRND_NONBLOCK = getattr(os, "GRND_NONBLOCK", 0x0001)
_GRND_RANDOM = getattr(os, "GRND_RANDOM", 0x0002)
_CHUNK = 256
_WINDOWS_CHUNK = (1 << 32) - 1

_HAS_GETRANDOM = LazyBool()
_GETRANDOM = Weak("getrandom")


def _writable(dest: bytearray | memoryview) -> memoryview:
    view = memoryview(dest)
    if view.readonly:
        raise TypeError("buffer must be writable")
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def _chunks(view: memoryview, size: int) -> Iterator[memoryview]:
    for start in range(0, len(view), size):
        yield view[start : start + size]


def _getrandom_filler(func: Callable[..., Any], flags: int) -> Callable[[memoryview], int]:
    def fill(view: memoryview) -> int:
        data = func(len(view), flags)
        view[: len(data)] = data
        return len(data)

    return fill


def _urandom_exact(chunk: memoryview) -> None:
    try:
        data = os.urandom(len(chunk))
    except OSError as exc:
        raise error_from_errno(exc.errno) from exc
    if len(data) != len(chunk):
        raise Error.UNEXPECTED
    chunk[:] = data


def is_getrandom_available() -> bool:
    """Report whether the ``getrandom`` system call can be used."""
    func = getattr(os, "getrandom", None)
    if func is None:
        return False
    try:
        func(0, _GRND_NONBLOCK)
    except OSError as exc:
        # No kernel support, or blocked by seccomp.
        return exc.errno not in (_errno.ENOSYS, _errno.EPERM)
    return True


def linux_android_fill(dest: bytearray | memoryview) -> None:
    """Fill ``dest`` using ``getrandom`` if available, else the device file."""
    if _HAS_GETRANDOM.unsync_init(is_getrandom_available):
        sys_fill_exact(dest, _getrandom_filler(os.getrandom, 0))
    else:
        use_file.getrandom_inner(dest)


def solaris_illumos_fill(dest: bytearray | memoryview) -> None:
    """Fill ``dest`` from ``getrandom`` with ``GRND_RANDOM`` in 256-byte requests.

    Falls back to reading the device file when ``getrandom`` is missing.
    """
    func = _GETRANDOM.ptr()
    if func is None:
        use_file.getrandom_inner(dest)
        return
    fill = _getrandom_filler(func, _GRND_RANDOM)
    for chunk in _chunks(_writable(dest), _CHUNK):
        sys_fill_exact(chunk, fill)


def bsd_fill(dest: bytearray | memoryview) -> None:
    """Fill ``dest`` using ``getrandom`` if present.

    Otherwise the kernel source is asked for at most 256 bytes at a time,
    which older kernels require.
    """
    func = _GETRANDOM.ptr()
    if func is not None:
        sys_fill_exact(dest, _getrandom_filler(func, 0))
        return
    for chunk in _chunks(_writable(dest), _CHUNK):
        _urandom_exact(chunk)


def dragonfly_fill(dest: bytearray | memoryview) -> None:
    """Fill ``dest`` using ``getrandom`` if present, else the device file."""
    func = _GETRANDOM.ptr()
    if func is not None:
        sys_fill_exact(dest, _getrandom_filler(func, 0))
    else:
        use_file.getrandom_inner(dest)


def getentropy_fill(dest: bytearray | memoryview) -> None:
    """Fill ``dest`` from the ``getentropy`` source, 256 bytes per request."""
    for chunk in _chunks(_writable(dest), _CHUNK):
        _urandom_exact(chunk)


def _windows_error(exc: OSError) -> Error:
    status = getattr(exc, "winerror", None)
    if status is not None:
        status &= 0xFFFFFFFF
        # NTSTATUS failure codes have both severity bits set; clearing the
        # top bit moves the code into the OS error range.
        if status >> 30 == 0b11:
            return Error(status ^ (1 << 31))
    return error_from_errno(exc.errno)


def windows_fill(dest: bytearray | memoryview) -> None:
    """Fill ``dest`` from the system-preferred RNG, in chunks that fit 32 bits."""
    for chunk in _chunks(_writable(dest), _WINDOWS_CHUNK):
        try:
            data = os.urandom(len(chunk))
        except OSError as exc:
            raise _windows_error(exc) from exc
        if len(data) != len(chunk):
            raise Error.UNEXPECTED
        chunk[:] = data