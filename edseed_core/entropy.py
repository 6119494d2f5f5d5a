"""
Injectable randomness for mnemonic and key generation.

Anything with a ``random_bytes(n) -> bytes`` method can be passed where a
``RandomSource`` is expected.  Production code uses the operating system
CSPRNG; tests plug in ``FixedRandomSource`` to get reproducible phrases.
"""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    def random_bytes(self, n: int) -> bytes: ...


class SystemRandomSource:
    """Operating-system CSPRNG (``os.urandom``)."""

    def random_bytes(self, n: int) -> bytes:
        return os.urandom(n)

    def __repr__(self) -> str:
        return "SystemRandomSource()"


class FixedRandomSource:
    """
    Replays a fixed byte string, cycling when exhausted.

    Only meant for tests and reproducible demos; never use it for real keys.
    """

    def __init__(self, data: bytes):
        if not data:
            raise ValueError("FixedRandomSource needs at least one byte")
        self._data = bytes(data)
        self._pos = 0

    def random_bytes(self, n: int) -> bytes:
        out = bytearray()
        while len(out) < n:
            take = min(n - len(out), len(self._data) - self._pos)
            out += self._data[self._pos : self._pos + take]
            self._pos = (self._pos + take) % len(self._data)
        return bytes(out)


_DEFAULT_SOURCE = SystemRandomSource()


def default_random_source() -> RandomSource:
    return _DEFAULT_SOURCE
