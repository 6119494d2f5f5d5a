"""
Display encodings for derived keys.

Kept apart from the derivation core: nothing in ``bip39``, ``slip10`` or
``wallet`` imports this module.  Uses the Bitcoin base58 alphabet, which is
what Solana addresses and Phantom-style secret keys use.
"""

from __future__ import annotations

from typing import Any

import base58

from edseed_core.ed25519 import PUBLIC_KEY_SIZE, KeyPair
from edseed_core.errors import InvalidKeyLength


def public_key_to_address(public_key: bytes) -> str:
    """Base58 public identifier of a 32-byte Ed25519 public key."""
    if len(public_key) != PUBLIC_KEY_SIZE:
        raise InvalidKeyLength("public key", PUBLIC_KEY_SIZE, len(public_key))
    return base58.b58encode(bytes(public_key)).decode("ascii")


def address_to_public_key(address: str) -> bytes:
    """Decode a base58 address back to its 32 raw bytes."""
    try:
        raw = base58.b58decode(address)
    except ValueError as exc:
        raise ValueError(f"Invalid base58 address: {exc}") from exc
    if len(raw) != PUBLIC_KEY_SIZE:
        raise InvalidKeyLength("public key", PUBLIC_KEY_SIZE, len(raw))
    return raw


def secret_key_to_base58(keypair: KeyPair) -> str:
    """64-byte ``private || public`` secret key, as imported by Phantom."""
    return base58.b58encode(keypair.secret_key).decode("ascii")


def keypair_to_dict(keypair: KeyPair, include_secret: bool = False) -> dict[str, Any]:
    out: dict[str, Any] = {
        "address": public_key_to_address(keypair.public_key),
        "public_key": keypair.public_key.hex(),
    }
    if include_secret:
        out["private_key"] = keypair.private_key.hex()
        out["secret_key_b58"] = secret_key_to_base58(keypair)
    return out
