"""
edseed - deterministic Ed25519 wallets from a BIP-39 mnemonic.

Key features:
- BIP-39 mnemonic generation, checksum validation and seed stretching
- SLIP-0010 hardened-only Ed25519 derivation (m/44'/501'/account'/change')
- Deterministic RFC 8032 signing and non-throwing verification (libsodium)
- Parallel-safe batch wallet derivation
"""

__version__ = "1.0.0"
__all__ = [
    "errors",
    "crypto_utils",
    "entropy",
    "ed25519",
    "bip39",
    "slip10",
    "wallet",
    "encoding",
    "config",
    "logging_config",
]
