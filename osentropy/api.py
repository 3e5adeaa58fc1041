"""Entry points for filling buffers from the system random number source."""

from __future__ import annotations

import re
import sys
from typing import Callable

from osentropy import custom, platforms, use_file

Backend = Callable[["bytearray | memoryview"], None]

_BACKENDS: dict[str, Backend] = {
    "haiku": use_file.getrandom_inner,
    "redox": use_file.getrandom_inner,
    "nto": use_file.getrandom_inner,
    "qnx": use_file.getrandom_inner,
    "aix": use_file.getrandom_inner,
    "linux": platforms.linux_android_fill,
    "android": platforms.linux_android_fill,
    "sunos": platforms.solaris_illumos_fill,
    "solaris": platforms.solaris_illumos_fill,
    "illumos": platforms.solaris_illumos_fill,
    "freebsd": platforms.bsd_fill,
    "netbsd": platforms.bsd_fill,
    "dragonfly": platforms.dragonfly_fill,
    "darwin": platforms.getentropy_fill,
    "macos": platforms.getentropy_fill,
    "openbsd": platforms.getentropy_fill,
    "win32": platforms.windows_fill,
    "windows": platforms.windows_fill,
}

_VERSION_SUFFIX = re.compile(r"[\d.]+$")


def select_backend(platform_name: str, force_custom: bool = False) -> Backend:
    """Return the fill function used on the named platform.

    ``platform_name`` may be a ``sys.platform`` value, with or without a
    version suffix. Platforms without a known source, and any platform when
    ``force_custom`` is set, use the application-registered source.
    """
    if force_custom:
        return custom.custom_fill
    name = platform_name.lower()
    backend = _BACKENDS.get(name)
    if backend is None:
        backend = _BACKENDS.get(_VERSION_SUFFIX.sub("", name), custom.custom_fill)
    return backend


def getrandom(dest: bytearray | memoryview) -> None:
    """Fill the writable buffer ``dest`` with random bytes from the system.

    An empty buffer returns at once without touching the system source.
    Any failure, including a partial fill, raises ``Error``; the contents of
    ``dest`` are then unspecified.
    """
    view = memoryview(dest)
    if view.readonly:
        raise TypeError("buffer must be writable")
    if view.nbytes == 0:
        return
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    select_backend(sys.platform)(view)


def random_bytes(size: int) -> bytes:
    """Return ``size`` random bytes from the system source."""
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    buf = bytearray(size)
    getrandom(buf)
    return bytes(buf)