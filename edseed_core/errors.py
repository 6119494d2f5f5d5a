"""
Exception hierarchy for edseed.

Every error derives from ``KeyDerivationError`` which is itself a
``ValueError``, so callers that only care about "bad input" can keep
catching ``ValueError``.

Signature verification never raises: a failed check is reported as
``False`` by :func:`edseed_core.ed25519.verify`.
"""

from __future__ import annotations


class KeyDerivationError(ValueError):
    """Base class for all edseed input errors."""


class InvalidEntropyLength(KeyDerivationError):
    """Entropy is not 128/160/192/224/256 bits long."""


class InvalidMnemonic(KeyDerivationError):
    """Phrase has the wrong word count or contains unknown words."""


class ChecksumMismatch(InvalidMnemonic):
    """Phrase words are valid but the embedded checksum does not match."""


class InvalidPathSyntax(KeyDerivationError):
    """Derivation path string is malformed."""


class NonHardenedIndexRejected(InvalidPathSyntax):
    """A path segment lacks the hardening marker (ed25519 is hardened-only)."""


class IndexOutOfRange(KeyDerivationError):
    """Child index is negative or >= 2**31 before the hardening offset."""


class InvalidKeyLength(KeyDerivationError):
    """Key, seed or signature material has the wrong length."""

    def __init__(self, what: str, expected: int | str, actual: int):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} must be {expected} bytes, got {actual}")


class KeyPairMismatch(KeyDerivationError):
    """Public key is not the one derived from the private key."""
