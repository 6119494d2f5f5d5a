"""
Shared pytest fixtures for the edseed test suite.
"""

import pytest

from edseed_core.bip39 import MnemonicCodec, mnemonic_to_seed
from edseed_core.entropy import FixedRandomSource
from edseed_core.wallet import WalletFactory

ABANDON_ABOUT = "abandon " * 11 + "about"


@pytest.fixture
def codec():
    """English codec with system randomness."""
    return MnemonicCodec("english")


@pytest.fixture
def zero_codec():
    """English codec whose 'random' entropy is all zero bytes."""
    return MnemonicCodec("english", random_source=FixedRandomSource(b"\x00"))


@pytest.fixture
def abandon_seed():
    """BIP-39 seed of the all-zero-entropy phrase, empty passphrase."""
    return mnemonic_to_seed(ABANDON_ABOUT)


@pytest.fixture
def factory(abandon_seed):
    """Wallet factory over the all-zero-entropy phrase."""
    return WalletFactory(abandon_seed)
