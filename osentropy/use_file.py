"""Random bytes read from a device file such as ``/dev/urandom``."""

from __future__ import annotations

import errno as _errno
import os
import select
import sys
import threading
from functools import partial

from osentropy.util import error_from_errno, open_readonly, sys_fill_exact

# /dev/urandom is preferred; /dev/random is used only where the platform
# documents /dev/urandom as the weaker device.
if sys.platform.startswith("sunos"):
    FILE_PATH = "/dev/random"
else:
    FILE_PATH = "/dev/urandom"

_NEEDS_READY_CHECK = sys.platform.startswith("linux") or hasattr(sys, "getandroidapilevel")

_fd: int | None = None
_fd_lock = threading.Lock()


def _read_into(fd: int, view: memoryview) -> int:
    if hasattr(os, "readv"):
        return os.readv(fd, [view])
    data = os.read(fd, len(view))
    view[: len(data)] = data
    return len(data)


def getrandom_inner(dest: bytearray | memoryview) -> None:
    """Fill ``dest`` completely with bytes read from the random device."""
    fd = get_rng_fd()
    sys_fill_exact(dest, partial(_read_into, fd))


def get_rng_fd() -> int:
    """Return the descriptor of the random device, opening it on first use.

    The device is opened once; the same descriptor is returned afterwards
    and is never closed.
    """
    global _fd
    fd = _fd
    if fd is not None:
        return fd
    with _fd_lock:
        if _fd is not None:
            return _fd
        if _NEEDS_READY_CHECK:
            wait_until_rng_ready()
        _fd = open_readonly(FILE_PATH)
        return _fd


def wait_until_rng_ready() -> None:
    """Block until ``/dev/random`` is readable, so ``/dev/urandom`` is seeded."""
    fd = open_readonly("/dev/random")
    try:
        poller = select.poll()
        poller.register(fd, select.POLLIN)
        while True:
            try:
                poller.poll()
                return
            except InterruptedError:
                continue
            except OSError as exc:
                if exc.errno in (_errno.EINTR, _errno.EAGAIN):
                    continue
                raise error_from_errno(exc.errno) from exc
    finally:
        os.close(fd)