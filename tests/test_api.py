import sys
import threading
from array import array
from unittest import mock

import pytest

from osentropy import custom, platforms, use_file
from osentropy.api import getrandom, random_bytes, select_backend
from osentropy.error import Error


def num_diff_bits(s1, s2):
    assert len(s1) == len(s2)
    return sum(bin(a ^ b).count("1") for a, b in zip(s1, s2))


@pytest.fixture
def no_custom():
    custom.clear_custom_getrandom()
    yield
    custom.clear_custom_getrandom()


def test_zero():
    buf = bytearray()
    assert getrandom(buf) is None
    assert buf == bytearray()


def test_diff():
    v1 = bytearray(1000)
    getrandom(v1)
    v2 = bytearray(1000)
    getrandom(v2)
    d = num_diff_bits(v1, v2)
    assert d > 3500
    assert d < 4500


def test_small():
    for size in range(1, 65):
        num_bytes = 0
        diff_bits = 0
        while num_bytes < 256:
            s1 = bytearray(size)
            getrandom(s1)
            s2 = bytearray(size)
            getrandom(s2)
            num_bytes += size
            diff_bits += num_diff_bits(s1, s2)
        assert diff_bits > 3 * num_bytes
        assert diff_bits < 5 * num_bytes


def test_huge():
    huge = bytearray(100_000)
    getrandom(huge)
    assert len(huge) == 100_000
    assert huge.count(0) < 1000


def test_multithreading():
    barrier = threading.Barrier(20)
    errors = []
    counts = []
    finals = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        v = bytearray(1000)
        done = 0
        try:
            for _ in range(100):
                getrandom(v)
                done += 1
        except Exception as exc:  # noqa: BLE001
            with lock:
                errors.append(exc)
        with lock:
            counts.append(done)
            finals.append(bytes(v))

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
    assert counts == [100] * 20
    assert len(set(finals + [random_bytes(1000)])) == 21


def test_non_byte_buffer_is_filled():
    arr = array("I", [0] * 64)
    getrandom(arr)
    d = num_diff_bits(arr.tobytes(), bytes(256))
    assert d > 600


def test_readonly_buffer_rejected():
    with pytest.raises(TypeError):
        getrandom(b"\x00" * 8)


def test_random_bytes_length_and_difference():
    a = random_bytes(32)
    b = random_bytes(32)
    assert len(a) == 32
    assert len(b) == 32
    assert a != b


def test_random_bytes_zero():
    assert random_bytes(0) == b""


def test_random_bytes_negative():
    with pytest.raises(ValueError):
        random_bytes(-1)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("linux", platforms.linux_android_fill),
        ("android", platforms.linux_android_fill),
        ("win32", platforms.windows_fill),
        ("darwin", platforms.getentropy_fill),
        ("openbsd7", platforms.getentropy_fill),
        ("freebsd14", platforms.bsd_fill),
        ("netbsd10", platforms.bsd_fill),
        ("dragonfly6", platforms.dragonfly_fill),
        ("sunos5", platforms.solaris_illumos_fill),
        ("illumos", platforms.solaris_illumos_fill),
        ("aix", use_file.getrandom_inner),
        ("haiku", use_file.getrandom_inner),
        ("plan9", custom.custom_fill),
    ],
)
def test_select_backend(name, expected):
    assert select_backend(name, False) is expected


def test_force_custom_overrides_platform():
    assert select_backend("linux", True) is custom.custom_fill


def test_unsupported_platform_without_custom(no_custom):
    with mock.patch.object(sys, "platform", "plan9"):
        with pytest.raises(Error) as info:
            getrandom(bytearray(4))
    assert info.value == Error.UNSUPPORTED


def test_unsupported_platform_uses_registered_source(no_custom):
    len7_err = Error(Error.INTERNAL_START + 7)

    def super_insecure_rng(buf):
        assert len(buf) > 0
        if len(buf) == 7:
            raise len7_err
        start = len(buf) & 0xFF
        for i in range(len(buf)):
            buf[i] = start
            start = (start * 3) & 0xFF

    custom.register_custom_getrandom(super_insecure_rng)
    with mock.patch.object(sys, "platform", "plan9"):
        buf = bytearray(4)
        getrandom(buf)
        assert list(buf) == [4, 12, 36, 108]
        buf = bytearray(3)
        getrandom(buf)
        assert list(buf) == [3, 9, 27]
        empty = bytearray()
        getrandom(empty)
        assert empty == bytearray()
        with pytest.raises(Error) as info:
            getrandom(bytearray(7))
        assert info.value == len7_err
        assert random_bytes(2) == bytes([2, 6])