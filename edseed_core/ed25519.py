"""
Ed25519 key generation, signing and verification.

Thin, strictly-typed layer over libsodium (via PyNaCl):
  - ``generate_keypair``  32-byte seed -> KeyPair (RFC 8032 key generation)
  - ``sign``              deterministic 64-byte signature
  - ``verify``            boolean predicate, never raises on bad input

The 32-byte "private key" used throughout edseed is the RFC 8032 seed,
i.e. the leaf key produced by SLIP-0010 derivation.  libsodium's 64-byte
secret key (``seed || public``) is exposed as ``KeyPair.secret_key``.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass

from nacl.exceptions import CryptoError
from nacl.signing import SigningKey, VerifyKey

from edseed_core.entropy import RandomSource, default_random_source
from edseed_core.errors import InvalidKeyLength, KeyPairMismatch

PRIVATE_KEY_SIZE = 32
PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64


@dataclass(frozen=True, repr=False)
class KeyPair:
    """
    An Ed25519 private/public key pair (32 bytes each).

    The public key must be the one derived from the private key; a
    mismatched pair raises KeyPairMismatch.
    """

    private_key: bytes
    public_key: bytes

    def __post_init__(self):
        _check_length("private key", self.private_key, PRIVATE_KEY_SIZE)
        _check_length("public key", self.public_key, PUBLIC_KEY_SIZE)
        if not hmac.compare_digest(bytes(self.public_key), public_key_from_private(self.private_key)):
            raise KeyPairMismatch("public key does not belong to the private key")

    @property
    def secret_key(self) -> bytes:
        """64-byte NaCl / Solana secret key: ``private || public``."""
        return self.private_key + self.public_key

    def sign(self, message: bytes) -> bytes:
        return sign(message, self.private_key)

    def verify(self, signature: bytes, message: bytes) -> bool:
        return verify(signature, message, self.public_key)

    def __repr__(self) -> str:
        return f"KeyPair(public_key={self.public_key.hex()})"


def _check_length(what: str, data: bytes, size: int) -> None:
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"{what} must be bytes, got {type(data).__name__}")
    if len(data) != size:
        raise InvalidKeyLength(what, size, len(data))


def _check_message(message) -> None:
    if not isinstance(message, (bytes, bytearray, memoryview)):
        raise TypeError(f"message must be bytes, got {type(message).__name__}")


def public_key_from_private(private_key: bytes) -> bytes:
    _check_length("private key", private_key, PRIVATE_KEY_SIZE)
    return bytes(SigningKey(bytes(private_key)).verify_key)


def generate_keypair(seed32: bytes) -> KeyPair:
    """
    Deterministically build a key pair from a 32-byte seed.

    libsodium hashes the seed with SHA-512, clamps the lower half into a
    scalar and multiplies the curve base point by it.
    """
    _check_length("seed", seed32, PRIVATE_KEY_SIZE)
    sk = SigningKey(bytes(seed32))
    return KeyPair(private_key=bytes(seed32), public_key=bytes(sk.verify_key))


def random_keypair(random_source: RandomSource | None = None) -> KeyPair:
    """Key pair from 32 bytes of the given (or default system) random source."""
    source = random_source or default_random_source()
    return generate_keypair(source.random_bytes(PRIVATE_KEY_SIZE))


def sign(message: bytes, private_key: bytes) -> bytes:
    """RFC 8032 signature; the nonce is derived from the key and message."""
    _check_message(message)
    _check_length("private key", private_key, PRIVATE_KEY_SIZE)
    sk = SigningKey(bytes(private_key))
    return bytes(sk.sign(bytes(message)).signature)


def verify(signature: bytes, message: bytes, public_key: bytes) -> bool:
    """
    Return True iff *signature* is valid for *message* under *public_key*.

    Malformed inputs (wrong lengths, points not on the curve, non-canonical
    signatures) yield False instead of an exception.  *message* must be
    bytes-like; text has to be encoded by the caller.
    """
    _check_message(message)
    if not isinstance(signature, (bytes, bytearray)) or len(signature) != SIGNATURE_SIZE:
        return False
    if not isinstance(public_key, (bytes, bytearray)) or len(public_key) != PUBLIC_KEY_SIZE:
        return False
    try:
        VerifyKey(bytes(public_key)).verify(bytes(message), bytes(signature))
    except CryptoError:
        return False
    return True
