"""
BIP-39 mnemonic phrases for edseed.

  - Entropy <-> mnemonic encoding with the SHA-256 checksum
  - Checksum validation (reject a mistyped phrase instead of deriving
    a different wallet from it)
  - Phrase -> 64-byte seed via PBKDF2-HMAC-SHA512 (2048 rounds)

Word lists are the reference lists shipped by the ``mnemonic`` package.
Randomness is injected through a ``RandomSource`` so generation can be
made reproducible in tests.
"""

from __future__ import annotations

import asyncio
import functools
import hashlib
import hmac
import logging
import unicodedata

from mnemonic import Mnemonic

from edseed_core.crypto_utils import sha256
from edseed_core.entropy import RandomSource, default_random_source
from edseed_core.errors import ChecksumMismatch, InvalidEntropyLength, InvalidMnemonic

logger = logging.getLogger("edseed.bip39")

VALID_STRENGTHS = (128, 160, 192, 224, 256)
VALID_WORD_COUNTS = (12, 15, 18, 21, 24)
WORDLIST_SIZE = 2048
PBKDF2_ROUNDS = 2048
SEED_SIZE = 64


def _nfkd(text: str) -> str:
    return unicodedata.normalize("NFKD", text)


class MnemonicCodec:
    """
    Encode, validate and stretch BIP-39 phrases for one word-list language.

    The codec holds no secret state; the same instance can be shared
    between threads.
    """

    def __init__(self, language: str = "english",
                 random_source: RandomSource | None = None):
        if language not in Mnemonic.list_languages():
            raise ValueError(f"Unsupported mnemonic language: {language!r}")
        words = list(Mnemonic(language).wordlist)
        if len(words) != WORDLIST_SIZE:
            raise ValueError(
                f"{language} word list has {len(words)} entries, expected {WORDLIST_SIZE}"
            )
        self.language = language
        self.random_source = random_source or default_random_source()
        self._wordlist = tuple(words)
        self._index = {_nfkd(w): i for i, w in enumerate(words)}
        # BIP-39 joins Japanese phrases with an ideographic space
        self._delimiter = "\u3000" if language == "japanese" else " "

    @property
    def wordlist(self) -> tuple[str, ...]:
        return self._wordlist

    # ---- encoding ----

    def generate(self, strength: int = 128) -> str:
        """Generate a new phrase from *strength* bits of fresh entropy."""
        if strength not in VALID_STRENGTHS:
            raise InvalidEntropyLength(
                f"Strength must be one of {VALID_STRENGTHS} bits, got {strength}"
            )
        entropy = self.random_source.random_bytes(strength // 8)
        phrase = self.entropy_to_mnemonic(entropy)
        logger.debug("Generated %d-word %s mnemonic", len(phrase.split()), self.language)
        return phrase

    def entropy_to_mnemonic(self, entropy: bytes) -> str:
        """Encode 16/20/24/28/32 bytes of entropy as a phrase."""
        entropy_bits = len(entropy) * 8
        if entropy_bits not in VALID_STRENGTHS:
            raise InvalidEntropyLength(
                f"Entropy must be 16/20/24/28/32 bytes, got {len(entropy)}"
            )
        checksum_bits = entropy_bits // 32
        checksum = sha256(bytes(entropy))[0] >> (8 - checksum_bits)
        value = (int.from_bytes(entropy, "big") << checksum_bits) | checksum

        count = (entropy_bits + checksum_bits) // 11
        words = [
            self._wordlist[(value >> (11 * (count - 1 - i))) & 0x7FF]
            for i in range(count)
        ]
        return self._delimiter.join(words)

    def mnemonic_to_entropy(self, mnemonic: str) -> bytes:
        """
        Decode a phrase back to its entropy, checking the checksum.

        Raises InvalidMnemonic for a bad word count or an unknown word and
        ChecksumMismatch when the checksum bits disagree.  Error messages
        only carry word positions, never the words themselves.
        """
        words = self._split(mnemonic)
        if len(words) not in VALID_WORD_COUNTS:
            raise InvalidMnemonic(
                f"Invalid mnemonic: expected 12/15/18/21/24 words, got {len(words)}"
            )
        value = 0
        for pos, word in enumerate(words, start=1):
            idx = self._index.get(word)
            if idx is None:
                raise InvalidMnemonic(
                    f"Invalid mnemonic: word #{pos} is not in the {self.language} word list"
                )
            value = (value << 11) | idx

        total_bits = len(words) * 11
        checksum_bits = total_bits // 33
        entropy_bits = total_bits - checksum_bits
        entropy = (value >> checksum_bits).to_bytes(entropy_bits // 8, "big")
        checksum = value & ((1 << checksum_bits) - 1)
        expected = sha256(entropy)[0] >> (8 - checksum_bits)
        if not hmac.compare_digest(bytes([checksum]), bytes([expected])):
            raise ChecksumMismatch("Invalid mnemonic: checksum mismatch")
        return entropy

    def validate(self, mnemonic: str) -> bool:
        """True iff every word is known, the count is legal and the checksum holds."""
        try:
            self.mnemonic_to_entropy(mnemonic)
        except (InvalidMnemonic, TypeError):
            return False
        return True

    # ---- seed derivation ----

    @staticmethod
    def to_seed(mnemonic: str, passphrase: str = "") -> bytes:
        """
        Stretch a phrase into the 64-byte BIP-39 seed.

        The phrase is used exactly as given (after NFKD), so it is not
        checked here; see ``to_seed_checked``.
        """
        password = _nfkd(mnemonic).encode("utf-8")
        salt = ("mnemonic" + _nfkd(passphrase)).encode("utf-8")
        return hashlib.pbkdf2_hmac("sha512", password, salt, PBKDF2_ROUNDS, dklen=SEED_SIZE)

    def to_seed_checked(self, mnemonic: str, passphrase: str = "") -> bytes:
        """Like ``to_seed`` but refuses phrases that fail validation."""
        self.mnemonic_to_entropy(mnemonic)
        return self.to_seed(mnemonic, passphrase)

    async def generate_async(self, strength: int = 128) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(self.generate, strength))

    async def to_seed_async(self, mnemonic: str, passphrase: str = "") -> bytes:
        """Run the PBKDF2 stretch in the loop's default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(self.to_seed, mnemonic, passphrase),
        )

    # ---- helpers ----

    @staticmethod
    def _split(mnemonic: str) -> list[str]:
        if not isinstance(mnemonic, str):
            raise TypeError(f"mnemonic must be str, got {type(mnemonic).__name__}")
        return _nfkd(mnemonic).split()

    def __repr__(self) -> str:
        return f"MnemonicCodec({self.language!r})"


# ===================================================================
#  Module-level shortcuts (English word list, system randomness)
# ===================================================================

_CODEC: MnemonicCodec | None = None


def _get_codec() -> MnemonicCodec:
    global _CODEC
    if _CODEC is None:
        _CODEC = MnemonicCodec("english")
    return _CODEC


def generate_mnemonic(strength: int = 128) -> str:
    return _get_codec().generate(strength)


def entropy_to_mnemonic(entropy: bytes) -> str:
    return _get_codec().entropy_to_mnemonic(entropy)


def mnemonic_to_entropy(mnemonic: str) -> bytes:
    return _get_codec().mnemonic_to_entropy(mnemonic)


def validate_mnemonic(mnemonic: str) -> bool:
    return _get_codec().validate(mnemonic)


def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> bytes:
    """Convert a mnemonic phrase to a 64-byte seed (BIP-39)."""
    return MnemonicCodec.to_seed(mnemonic, passphrase)
