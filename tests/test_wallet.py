"""
Test suite for edseed_core.wallet — indexed wallet derivation.

Covers:
  - Canonical path m/44'/501'/account'/change'
  - derive_wallet == path walk + Ed25519 key generation
  - Index independence (derive_wallets vs derive_wallet)
  - Threaded and async batches return index order
  - from_mnemonic validation and passphrase sensitivity
  - create() with injected randomness
  - Sign/verify with derived wallets
"""

import unittest

import pytest

from edseed_core.bip39 import MnemonicCodec, mnemonic_to_seed
from edseed_core.ed25519 import KeyPair, generate_keypair, verify
from edseed_core.encoding import public_key_to_address
from edseed_core.entropy import FixedRandomSource
from edseed_core.errors import ChecksumMismatch, IndexOutOfRange, InvalidMnemonic
from edseed_core.slip10 import derive_from_path
from edseed_core.wallet import (
    WalletFactory,
    derive_wallet_from_seed,
    derive_wallets_from_seed,
    solana_path,
)

ABANDON_ABOUT = "abandon " * 11 + "about"
SEED = mnemonic_to_seed(ABANDON_ABOUT)
# Phantom / Solflare account 0 for the all-zero-entropy phrase
ABANDON_ACCOUNT_0 = "HAgk14JpMQLgt6rVgv7cBQFJWFto5Dqxi472uT3DKpqk"


class TestSolanaPath(unittest.TestCase):

    def test_default(self):
        self.assertEqual(str(solana_path(0)), "m/44'/501'/0'/0'")

    def test_account_and_change(self):
        self.assertEqual(str(solana_path(7, change=1)), "m/44'/501'/7'/1'")

    def test_coin_type(self):
        self.assertEqual(str(solana_path(0, coin_type=607)), "m/44'/607'/0'/0'")

    def test_out_of_range_account(self):
        with self.assertRaises(IndexOutOfRange):
            solana_path(2 ** 31)


class TestDeriveWallet(unittest.TestCase):

    def setUp(self):
        self.factory = WalletFactory(SEED)

    def test_returns_keypair(self):
        kp = self.factory.derive_wallet(0)
        self.assertIsInstance(kp, KeyPair)
        self.assertEqual(len(kp.public_key), 32)

    def test_matches_path_walk(self):
        node = derive_from_path(SEED, "m/44'/501'/3'/0'")
        self.assertEqual(self.factory.derive_wallet(3), generate_keypair(node.key))

    def test_functional_form(self):
        self.assertEqual(derive_wallet_from_seed(SEED, 1), self.factory.derive_wallet(1))

    def test_deterministic(self):
        self.assertEqual(WalletFactory(SEED).derive_wallet(2), WalletFactory(SEED).derive_wallet(2))

    def test_different_accounts(self):
        self.assertNotEqual(self.factory.derive_wallet(0), self.factory.derive_wallet(1))

    def test_change_level(self):
        other = WalletFactory(SEED, change=1)
        self.assertNotEqual(self.factory.derive_wallet(0), other.derive_wallet(0))
        self.assertEqual(str(other.path_for(0)), "m/44'/501'/0'/1'")

    def test_negative_index(self):
        with self.assertRaises(IndexOutOfRange):
            self.factory.derive_wallet(-1)


class TestDeriveWallets(unittest.TestCase):

    def setUp(self):
        self.factory = WalletFactory(SEED)

    def test_four_distinct_public_keys(self):
        wallets = self.factory.derive_wallets(4)
        self.assertEqual(len(wallets), 4)
        self.assertEqual(len({w.public_key for w in wallets}), 4)

    def test_index_independence(self):
        wallets = self.factory.derive_wallets(4)
        self.assertEqual(self.factory.derive_wallet(2), wallets[2])

    def test_zero_count(self):
        self.assertEqual(self.factory.derive_wallets(0), [])

    def test_negative_count(self):
        with self.assertRaises(ValueError):
            self.factory.derive_wallets(-1)

    def test_non_int_count(self):
        with self.assertRaises(TypeError):
            self.factory.derive_wallets(2.0)

    def test_threaded_matches_sequential(self):
        threaded = WalletFactory(SEED, max_workers=4).derive_wallets(8)
        self.assertEqual(threaded, self.factory.derive_wallets(8))

    def test_invalid_workers(self):
        with self.assertRaises(ValueError):
            WalletFactory(SEED, max_workers=0)

    def test_iter_wallets_restartable(self):
        first = list(self.factory.iter_wallets(3))
        second = list(self.factory.iter_wallets(3))
        self.assertEqual(first, second)
        self.assertEqual(first, self.factory.derive_wallets(3))

    def test_iter_wallets_checks_count_eagerly(self):
        with self.assertRaises(ValueError):
            self.factory.iter_wallets(-5)

    def test_functional_batch(self):
        self.assertEqual(derive_wallets_from_seed(SEED, 2), self.factory.derive_wallets(2))


class TestFromMnemonic(unittest.TestCase):

    def test_known_solana_address(self):
        kp = WalletFactory.from_mnemonic(ABANDON_ABOUT).derive_wallet(0)
        self.assertEqual(public_key_to_address(kp.public_key), ABANDON_ACCOUNT_0)
        self.assertEqual(derive_wallet_from_seed(SEED, 0), kp)

    def test_matches_seed_factory(self):
        f = WalletFactory.from_mnemonic(ABANDON_ABOUT)
        self.assertEqual(f.derive_wallet(0), WalletFactory(SEED).derive_wallet(0))

    def test_passphrase_changes_wallets(self):
        a = WalletFactory.from_mnemonic(ABANDON_ABOUT).derive_wallet(0)
        b = WalletFactory.from_mnemonic(ABANDON_ABOUT, passphrase="secure").derive_wallet(0)
        self.assertNotEqual(a, b)

    def test_bad_checksum_rejected(self):
        with self.assertRaises(ChecksumMismatch):
            WalletFactory.from_mnemonic("abandon " * 12)

    def test_bad_word_count_rejected(self):
        with self.assertRaises(InvalidMnemonic):
            WalletFactory.from_mnemonic("one two three")

    def test_kwargs_forwarded(self):
        f = WalletFactory.from_mnemonic(ABANDON_ABOUT, coin_type=607, max_workers=2)
        self.assertEqual(f.coin_type, 607)
        self.assertEqual(f.max_workers, 2)


class TestCreate(unittest.TestCase):

    def test_create_with_injected_randomness(self):
        codec = MnemonicCodec(random_source=FixedRandomSource(b"\x00"))
        mnemonic, factory = WalletFactory.create(codec=codec)
        self.assertEqual(mnemonic, ABANDON_ABOUT)
        self.assertEqual(factory.derive_wallet(0), WalletFactory(SEED).derive_wallet(0))

    def test_create_new_mnemonic(self):
        mnemonic, factory = WalletFactory.create(strength=256)
        self.assertEqual(len(mnemonic.split()), 24)
        self.assertTrue(MnemonicCodec().validate(mnemonic))
        self.assertIsInstance(factory, WalletFactory)

    def test_repr_hides_seed(self):
        _, factory = WalletFactory.create()
        self.assertNotIn(SEED.hex(), repr(factory))
        self.assertEqual(repr(factory), "WalletFactory(coin_type=501, change=0)")


class TestWalletSigning(unittest.TestCase):

    def test_sign_verify_round_trip(self):
        for kp in WalletFactory(SEED).derive_wallets(3):
            sig = kp.sign(b"hello world")
            self.assertTrue(verify(sig, b"hello world", kp.public_key))
            self.assertFalse(verify(sig, b"hello world!", kp.public_key))

    def test_signature_not_valid_for_sibling(self):
        w0, w1 = WalletFactory(SEED).derive_wallets(2)
        self.assertFalse(w1.verify(w0.sign(b"msg"), b"msg"))


class TestAsyncDerivation:

    @pytest.mark.asyncio
    async def test_async_matches_sync(self, factory):
        assert await factory.derive_wallets_async(4) == factory.derive_wallets(4)

    @pytest.mark.asyncio
    async def test_async_negative_count(self, factory):
        with pytest.raises(ValueError):
            await factory.derive_wallets_async(-1)

    def test_fixture_seed_is_abandon_seed(self, abandon_seed):
        assert abandon_seed == SEED


if __name__ == "__main__":
    unittest.main()
