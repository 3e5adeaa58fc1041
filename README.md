# osentropy

Random bytes from the operating system's random number generator, taken
the way each platform family recommends. `osentropy.api.select_backend`
maps a `sys.platform` name to one of these sources:

- Linux and Android: `os.getrandom` when the kernel supports it (checked
  once, with `GRND_NONBLOCK`; `ENOSYS` or `EPERM` mean "not available"),
  otherwise `/dev/urandom`, opened only after a poll on `/dev/random`
  reports it readable.
- Solaris and illumos: `os.getrandom` with `GRND_RANDOM`, 256 bytes per
  request, otherwise `/dev/random`.
- FreeBSD and NetBSD: `os.getrandom` when present, otherwise `os.urandom`,
  256 bytes per request.
- DragonFly BSD: `os.getrandom` when present, otherwise `/dev/urandom`.
- macOS and OpenBSD: `os.urandom`, 256 bytes per request.
- Windows: `os.urandom`, in requests that fit in 32 bits. NTSTATUS failure
  codes are turned into OS error codes.
- Haiku, Redox, QNX and AIX: `/dev/urandom`.
- Any other platform: a source registered by the application (see below).

The random device file is opened once and its descriptor kept open for the
life of the process. Interrupted system calls are retried. Any failure,
including a short or empty read, is an error; the package never hands back
bytes it cannot vouch for.

## Installing

```
pip install osentropy
```

## Using it

```python
from osentropy.api import getrandom, random_bytes

key = random_bytes(32)          # 32 fresh bytes

buf = bytearray(16)
getrandom(buf)                  # fills buf in place
```

`getrandom` takes any writable buffer (`bytearray`, `memoryview`, ...). A
read-only buffer raises `TypeError`. An empty buffer returns at once without
touching the operating system. `random_bytes` raises `ValueError` for a
negative size.

### Errors

Failures raise `osentropy.error.Error`, an `Exception` carrying a non-zero
32-bit `code`:

- codes below `Error.INTERNAL_START` are operating-system error numbers,
  returned by `raw_os_error()` (which gives `None` for any other code);
- codes from `Error.INTERNAL_START` up to `Error.CUSTOM_START` are reserved
  for this package, such as `Error.UNSUPPORTED`, `Error.UNEXPECTED` and
  `Error.ERRNO_NOT_POSITIVE`;
- codes at or above `Error.CUSTOM_START` are free for your own sources.

`str()` of an error gives the OS description, the internal description, or
`Unknown Error: <code>`. Errors compare equal by code. `to_os_error()`
returns a built-in `OSError`, with the errno set where there is one.

```python
from osentropy.api import random_bytes
from osentropy.error import Error

try:
    data = random_bytes(64)
except Error as exc:
    print(exc.raw_os_error(), exc)
```

### Custom sources

On a platform with no supported source, register your own function. It
receives a writable byte `memoryview`, already zeroed, must fill all of it,
and raises `Error` on failure:

```python
from osentropy.custom import register_custom_getrandom, clear_custom_getrandom
from osentropy.error import Error

@register_custom_getrandom
def my_source(buf):
    ...

clear_custom_getrandom()        # remove it again
```

The registered function is only used on platforms that have no supported
source, or when `select_backend(name, force_custom=True)` is asked for it.
With nothing registered, such platforms raise `Error.UNSUPPORTED`.

### Smaller pieces

- `osentropy.util`: `sys_fill_exact` (fill a buffer by repeated calls),
  `open_readonly`, `fill_zero`, `error_from_errno`, and `Weak`, a cached
  lookup of an optional `os` function.
- `osentropy.lazy`: `LazyUsize` and `LazyBool`, values computed on first
  use and cached.

## What it does not do

There is no command-line tool. Only the platform families listed above have
their own sources: there is no CPU-instruction source, no browser or
JavaScript-runtime source and no embedded-system sources. `Error` still
defines codes such as `NO_RDRAND` and `WEB_CRYPTO`, but nothing in the
package raises them.

## Running the tests

```
pip install -e ".[test]"
pytest
```