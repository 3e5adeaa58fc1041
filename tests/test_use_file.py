import errno
import os
from unittest import mock

import pytest

from osentropy.error import Error
from osentropy.use_file import get_rng_fd, getrandom_inner, wait_until_rng_ready


def _diff_bits(a, b):
    assert len(a) == len(b)
    return sum((x ^ y).bit_count() for x, y in zip(a, b))


def test_fd_is_cached_and_open():
    first = get_rng_fd()
    second = get_rng_fd()
    assert first == second
    assert os.fstat(first).st_size == 0


def test_fills_large_buffers_differently():
    v1 = bytearray(1000)
    v2 = bytearray(1000)
    getrandom_inner(v1)
    getrandom_inner(v2)
    d = _diff_bits(v1, v2)
    assert 3500 < d < 4500


def test_huge_buffer_is_filled():
    huge = bytearray(100_000)
    getrandom_inner(huge)
    assert huge.count(0) < 2000


def test_memoryview_slice_is_filled_in_place():
    buf = bytearray(64)
    getrandom_inner(memoryview(buf)[16:48])
    assert buf[:16] == bytearray(16)
    assert buf[48:] == bytearray(16)


def test_readonly_buffer_rejected():
    with pytest.raises(TypeError):
        getrandom_inner(b"\x00" * 8)


def test_wait_reports_open_failure():
    failure = FileNotFoundError(errno.ENOENT, "missing")
    with mock.patch("os.open", side_effect=failure):
        with pytest.raises(Error) as info:
            wait_until_rng_ready()
    assert info.value.raw_os_error() == errno.ENOENT


def test_wait_retries_on_eagain_and_closes():
    poller = mock.Mock()
    poller.poll.side_effect = [OSError(errno.EAGAIN, "again"), [(3, 1)]]
    with mock.patch("select.poll", return_value=poller), mock.patch(
        "os.close", wraps=os.close
    ) as closer:
        result = wait_until_rng_ready()
    assert result is None
    assert poller.poll.call_count == 2
    assert closer.call_count == 1


def test_wait_reports_poll_failure():
    poller = mock.Mock()
    poller.poll.side_effect = OSError(errno.EBADF, "bad")
    with mock.patch("select.poll", return_value=poller), mock.patch(
        "os.close", wraps=os.close
    ) as closer:
        with pytest.raises(Error) as info:
            wait_until_rng_ready()
    assert info.value.raw_os_error() == errno.EBADF
    assert closer.call_count == 1