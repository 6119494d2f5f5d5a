"""
SLIP-0010 hierarchical deterministic derivation for Ed25519.

Ed25519 only supports hardened children, so every index here is an
*unhardened* value in ``[0, 2**31)`` and the hardening offset is added
inside ``derive_child`` and nowhere else.

Path notation: m/44'/501'/account'/change'
"""

from __future__ import annotations

import logging
import re
import struct
from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterator, Optional, Union

from edseed_core.crypto_utils import hash160, hmac_sha512
from edseed_core.ed25519 import KeyPair, generate_keypair, public_key_from_private
from edseed_core.errors import (
    IndexOutOfRange,
    InvalidKeyLength,
    InvalidPathSyntax,
    NonHardenedIndexRejected,
)

logger = logging.getLogger("edseed.slip10")

HARDENED = 0x80000000
CURVE_SEED_KEY = b"ed25519 seed"
MIN_SEED_SIZE = 16
MAX_SEED_SIZE = 64

_SEGMENT_RE = re.compile(r"([0-9]+)(['hH])?")


def _check_index(index: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"index must be int, got {type(index).__name__}")
    if not 0 <= index < HARDENED:
        raise IndexOutOfRange(f"index {index} outside [0, 2**31)")
    return index


# ===================================================================
#  Derivation paths
# ===================================================================

@dataclass(frozen=True)
class DerivationPath:
    """
    An ordered sequence of hardened path levels.

    ``indices`` holds the values as written in the path, without the
    2**31 offset: ``m/44'/501'`` is ``DerivationPath((44, 501))``.
    """

    indices: tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "indices", tuple(_check_index(i) for i in self.indices))

    @classmethod
    def parse(cls, text: str) -> DerivationPath:
        """
        Parse ``m/<n>'/<n>'/...``.  ``'``, ``h`` and ``H`` are accepted as
        hardening markers; a segment without one is rejected because ed25519
        has no public derivation.
        """
        if not isinstance(text, str):
            raise InvalidPathSyntax(f"path must be str, got {type(text).__name__}")
        if text == "m":
            return cls()
        if not text.startswith("m/"):
            raise InvalidPathSyntax(f"path must start with 'm/': {text!r}")

        indices = []
        for segment in text[2:].split("/"):
            match = _SEGMENT_RE.fullmatch(segment)
            if match is None:
                raise InvalidPathSyntax(f"malformed path segment {segment!r} in {text!r}")
            if match.group(2) is None:
                raise NonHardenedIndexRejected(
                    f"segment {segment!r} is not hardened; ed25519 only supports hardened derivation"
                )
            value = int(match.group(1))
            if value >= HARDENED:
                raise IndexOutOfRange(f"index {value} outside [0, 2**31) in {text!r}")
            indices.append(value)
        return cls(tuple(indices))

    def child(self, index: int) -> DerivationPath:
        return DerivationPath(self.indices + (index,))

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices)

    def __len__(self) -> int:
        return len(self.indices)

    def __str__(self) -> str:
        return "/".join(["m"] + [f"{i}'" for i in self.indices])


PathLike = Union[DerivationPath, str]


def _as_path(path: PathLike) -> DerivationPath:
    if isinstance(path, DerivationPath):
        return path
    return DerivationPath.parse(path)


# ===================================================================
#  Extended keys
# ===================================================================

@dataclass(frozen=True, repr=False)
class ExtendedKey:
    """
    A SLIP-0010 node: 32-byte private key plus 32-byte chain code.

    ``index`` is the unhardened index of this node under its parent
    (0 for the master key).  Public key and fingerprints are computed on
    first access only; plain derivation never touches the curve.
    """

    key: bytes
    chain_code: bytes
    depth: int = 0
    index: int = 0
    parent: Optional[ExtendedKey] = field(default=None, compare=False)

    def __post_init__(self):
        if len(self.key) != 32:
            raise InvalidKeyLength("extended key", 32, len(self.key))
        if len(self.chain_code) != 32:
            raise InvalidKeyLength("chain code", 32, len(self.chain_code))

    @property
    def hardened_index(self) -> int:
        """Index as serialised in the derivation HMAC (0 for the master key)."""
        return self.index | HARDENED if self.depth else 0

    @cached_property
    def public_key(self) -> bytes:
        """SLIP-0010 serialised public key: 0x00 || ed25519 public key."""
        return b"\x00" + public_key_from_private(self.key)

    @cached_property
    def fingerprint(self) -> bytes:
        """First 4 bytes of Hash160 of the serialised public key."""
        return hash160(self.public_key)[:4]

    @property
    def parent_fingerprint(self) -> bytes:
        if self.parent is None:
            return b"\x00" * 4
        return self.parent.fingerprint

    def keypair(self) -> KeyPair:
        """Ed25519 key pair for this node; the chain code is not involved."""
        return generate_keypair(self.key)

    def derive_child(self, index: int) -> ExtendedKey:
        return derive_child(self, index)

    def derive_path(self, path: PathLike) -> ExtendedKey:
        """Walk *path* starting from this node instead of the master key."""
        node = self
        for index in _as_path(path):
            node = derive_child(node, index)
        return node

    def __repr__(self) -> str:
        return f"ExtendedKey(depth={self.depth}, index={self.index}, fingerprint={self.fingerprint.hex()})"


def master_key(seed: bytes) -> ExtendedKey:
    """I = HMAC-SHA512("ed25519 seed", seed); I_L is the key, I_R the chain code."""
    if not MIN_SEED_SIZE <= len(seed) <= MAX_SEED_SIZE:
        raise InvalidKeyLength("seed", f"{MIN_SEED_SIZE}..{MAX_SEED_SIZE}", len(seed))
    digest = hmac_sha512(CURVE_SEED_KEY, bytes(seed))
    return ExtendedKey(key=digest[:32], chain_code=digest[32:])


def derive_child(parent: ExtendedKey, index: int) -> ExtendedKey:
    """Hardened child: I = HMAC-SHA512(c_par, 0x00 || k_par || ser32(index + 2**31))."""
    _check_index(index)
    data = b"\x00" + parent.key + struct.pack(">I", index | HARDENED)
    digest = hmac_sha512(parent.chain_code, data)
    return ExtendedKey(
        key=digest[:32],
        chain_code=digest[32:],
        depth=parent.depth + 1,
        index=index,
        parent=parent,
    )


def derive_from_path(seed: bytes, path: PathLike) -> ExtendedKey:
    """
    Master key from *seed*, then one hardened child per path level, left to
    right.  Path strings are parsed before any HMAC is computed.
    """
    parsed = _as_path(path)
    node = master_key(seed).derive_path(parsed)
    logger.debug("Derived %s", parsed)
    return node
