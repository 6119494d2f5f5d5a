"""
Hashing primitives shared by the derivation modules.

  - SHA-256
  - HMAC-SHA512 (BIP-32 / SLIP-0010 tree expansion)
  - RIPEMD-160 / Hash160 (SLIP-0010 key fingerprints)

RIPEMD-160 comes from pycryptodome because OpenSSL 3 builds of
``hashlib`` no longer ship it by default.
"""

from __future__ import annotations

import hashlib
import hmac

from Crypto.Hash import RIPEMD160


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def hmac_sha512(key: bytes, data: bytes) -> bytes:
    """HMAC-SHA512 returning the full 64-byte digest."""
    return hmac.new(key, data, hashlib.sha512).digest()


def ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data).digest()


def hash160(data: bytes) -> bytes:
    """RIPEMD-160(SHA-256(data)), 20 bytes."""
    return ripemd160(sha256(data))
