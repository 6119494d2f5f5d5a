"""
Wallet derivation for edseed.

A ``WalletFactory`` wraps one BIP-39 seed and turns account indices into
Ed25519 key pairs along the Solana-style path

    m/44'/501'/account'/change'

Every wallet depends only on (seed, index), so a batch can be computed in
any order, on any number of threads, and always comes back in index order.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator

from edseed_core.bip39 import MnemonicCodec
from edseed_core.ed25519 import KeyPair
from edseed_core.slip10 import DerivationPath, derive_from_path

logger = logging.getLogger("edseed.wallet")

PURPOSE = 44
SOLANA_COIN_TYPE = 501


def solana_path(account: int, change: int = 0,
                coin_type: int = SOLANA_COIN_TYPE) -> DerivationPath:
    """Canonical BIP-44 style path: m/44'/coin'/account'/change'."""
    return DerivationPath((PURPOSE, coin_type, account, change))


def derive_wallet_from_seed(seed: bytes, account_index: int,
                            change: int = 0,
                            coin_type: int = SOLANA_COIN_TYPE) -> KeyPair:
    """Key pair for one account; the leaf chain code is discarded."""
    node = derive_from_path(seed, solana_path(account_index, change, coin_type))
    return node.keypair()


def derive_wallets_from_seed(seed: bytes, count: int, **kwargs) -> list[KeyPair]:
    return WalletFactory(seed, **kwargs).derive_wallets(count)


class WalletFactory:
    """Derives indexed Ed25519 wallets from a single 64-byte seed."""

    def __init__(self, seed: bytes, coin_type: int = SOLANA_COIN_TYPE,
                 change: int = 0, max_workers: int | None = None):
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._seed = bytes(seed)
        self.coin_type = coin_type
        self.change = change
        self.max_workers = max_workers

    # ---- factory methods ----

    @classmethod
    def from_mnemonic(cls, mnemonic: str, passphrase: str = "",
                      codec: MnemonicCodec | None = None, **kwargs) -> WalletFactory:
        """
        Validate *mnemonic* and build a factory from its seed.

        Raises InvalidMnemonic / ChecksumMismatch for a bad phrase.
        """
        codec = codec or MnemonicCodec()
        seed = codec.to_seed_checked(mnemonic, passphrase)
        return cls(seed, **kwargs)

    @classmethod
    def create(cls, strength: int = 128, passphrase: str = "",
               codec: MnemonicCodec | None = None,
               **kwargs) -> tuple[str, WalletFactory]:
        """
        Generate a fresh phrase and its factory.
        Returns (mnemonic_phrase, factory).
        """
        codec = codec or MnemonicCodec()
        mnemonic = codec.generate(strength)
        return mnemonic, cls(codec.to_seed(mnemonic, passphrase), **kwargs)

    # ---- derivation ----

    def path_for(self, account_index: int) -> DerivationPath:
        return solana_path(account_index, self.change, self.coin_type)

    def derive_wallet(self, account_index: int) -> KeyPair:
        return derive_wallet_from_seed(self._seed, account_index,
                                       self.change, self.coin_type)

    def iter_wallets(self, count: int) -> Iterator[KeyPair]:
        """Lazily yield wallets 0..count-1; call again to restart."""
        _check_count(count)
        return (self.derive_wallet(index) for index in range(count))

    def derive_wallets(self, count: int) -> list[KeyPair]:
        """
        Wallets for indices 0..count-1, in index order.

        With ``max_workers`` > 1 the indices are spread over a thread pool.
        """
        _check_count(count)
        if not self.max_workers or self.max_workers == 1 or count < 2:
            wallets = list(self.iter_wallets(count))
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                wallets = list(pool.map(self.derive_wallet, range(count)))
        logger.debug("Derived %d wallet(s) under m/%d'/%d'", count, PURPOSE, self.coin_type)
        return wallets

    async def derive_wallets_async(self, count: int) -> list[KeyPair]:
        """Run each derivation in the loop's default executor."""
        _check_count(count)
        loop = asyncio.get_running_loop()
        futures = [
            loop.run_in_executor(None, functools.partial(self.derive_wallet, index))
            for index in range(count)
        ]
        return list(await asyncio.gather(*futures))

    def __repr__(self) -> str:
        return f"WalletFactory(coin_type={self.coin_type}, change={self.change})"


def _check_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError(f"count must be int, got {type(count).__name__}")
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
