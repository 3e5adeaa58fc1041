"""Compact error type for failures of the system random number source."""

from __future__ import annotations

import os

_U32_MAX = (1 << 32) - 1


class Error(Exception):
    """An error carrying a non-zero 32-bit code.

    Codes below ``INTERNAL_START`` are operating-system error numbers.
    Codes in ``[INTERNAL_START, CUSTOM_START)`` are reserved for this
    package. Codes at or above ``CUSTOM_START`` are free for custom sources.
    """

    INTERNAL_START = 1 << 31
    CUSTOM_START = (1 << 31) + (1 << 30)

    # Populated below, once the class exists.
    UNSUPPORTED: Error
    ERRNO_NOT_POSITIVE: Error
    UNEXPECTED: Error
    IOS_SEC_RANDOM: Error
    WINDOWS_RTL_GEN_RANDOM: Error
    FAILED_RDRAND: Error
    NO_RDRAND: Error
    WEB_CRYPTO: Error
    WEB_GET_RANDOM_VALUES: Error
    VXWORKS_RAND_SECURE: Error
    NODE_CRYPTO: Error
    NODE_RANDOM_FILL_SYNC: Error
    NODE_ES_MODULE: Error

    def __init__(self, code: int) -> None:
        if not isinstance(code, int) or isinstance(code, bool):
            raise TypeError(f"error code must be an int, not {type(code).__name__}")
        if not 0 < code <= _U32_MAX:
            raise ValueError(f"error code must be a non-zero 32-bit value, got {code}")
        super().__init__(code)
        self.code = code

    def raw_os_error(self) -> int | None:
        """Return the OS error number, or None if the error is not from the OS."""
        if self.code < self.INTERNAL_START:
            return self.code
        return None

    def to_os_error(self) -> OSError:
        """Convert to a built-in ``OSError``, keeping the errno where there is one."""
        errno = self.raw_os_error()
        if errno is not None:
            return OSError(errno, os.strerror(errno))
        return OSError(str(self))

    def __str__(self) -> str:
        errno = self.raw_os_error()
        if errno is not None:
            description = _os_description(errno)
            return description if description is not None else f"OS Error: {errno}"
        description = internal_desc(self)
        if description is not None:
            return description
        return f"Unknown Error: {self.code}"

    def __repr__(self) -> str:
        errno = self.raw_os_error()
        if errno is not None:
            description = _os_description(errno)
            if description is None:
                return f"Error(os_error={errno})"
            return f"Error(os_error={errno}, description={description!r})"
        description = internal_desc(self)
        if description is not None:
            return f"Error(internal_code={self.code}, description={description!r})"
        return f"Error(unknown_code={self.code})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Error):
            return self.code == other.code
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)

    def __reduce__(self):
        return (type(self), (self.code,))


def _os_description(errno: int) -> str | None:
    try:
        return os.strerror(errno)
    except (ValueError, OverflowError):
        return None


def internal_error(n: int) -> Error:
    """Build the error with internal code ``INTERNAL_START + n``."""
    if not 0 <= n <= 0xFFFF:
        raise ValueError(f"internal error index must fit in 16 bits, got {n}")
    return Error(Error.INTERNAL_START + n)


Error.UNSUPPORTED = internal_error(0)
Error.ERRNO_NOT_POSITIVE = internal_error(1)
Error.UNEXPECTED = internal_error(2)
Error.IOS_SEC_RANDOM = internal_error(3)
Error.WINDOWS_RTL_GEN_RANDOM = internal_error(4)
Error.FAILED_RDRAND = internal_error(5)
Error.NO_RDRAND = internal_error(6)
Error.WEB_CRYPTO = internal_error(7)
Error.WEB_GET_RANDOM_VALUES = internal_error(8)
Error.VXWORKS_RAND_SECURE = internal_error(11)
Error.NODE_CRYPTO = internal_error(12)
Error.NODE_RANDOM_FILL_SYNC = internal_error(13)
Error.NODE_ES_MODULE = internal_error(14)

_INTERNAL_DESCRIPTIONS: dict[int, str] = {
    Error.UNSUPPORTED.code: "getrandom: this target is not supported",
    Error.ERRNO_NOT_POSITIVE.code: "errno: did not return a positive value",
    Error.UNEXPECTED.code: "unexpected situation",
    Error.IOS_SEC_RANDOM.code: "SecRandomCopyBytes: iOS Security framework failure",
    Error.WINDOWS_RTL_GEN_RANDOM.code: "RtlGenRandom: Windows system function failure",
    Error.FAILED_RDRAND.code: "RDRAND: failed multiple times: CPU issue likely",
    Error.NO_RDRAND.code: "RDRAND: instruction not supported",
    Error.WEB_CRYPTO.code: "Web Crypto API is unavailable",
    Error.WEB_GET_RANDOM_VALUES.code: "Calling Web API crypto.getRandomValues failed",
    Error.VXWORKS_RAND_SECURE.code: "randSecure: VxWorks RNG module is not initialized",
    Error.NODE_CRYPTO.code: "Node.js crypto CommonJS module is unavailable",
    Error.NODE_RANDOM_FILL_SYNC.code: "Calling Node.js API crypto.randomFillSync failed",
    Error.NODE_ES_MODULE.code: "Node.js ES modules are not directly supported",
}


def internal_desc(error: Error) -> str | None:
    """Return the description of a known internal error, or None."""
    return _INTERNAL_DESCRIPTIONS.get(error.code)