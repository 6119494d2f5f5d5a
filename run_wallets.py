#!/usr/bin/env python3
"""
edseed wallet runner — derives and prints wallets from a mnemonic.

  - Generates a new mnemonic when none is supplied
  - Validates the phrase checksum before deriving anything
  - Prints each wallet's path and base58 address
  - Optionally signs a message with every wallet and verifies it

Usage:
    python run_wallets.py --count 4
    python run_wallets.py --mnemonic "abandon ... about" --sign "hello world"

Environment variables (alternative to flags):
    EDSEED_MNEMONIC, EDSEED_PASSPHRASE, EDSEED_WALLET_COUNT, EDSEED_WORKERS
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

# ---------------------------------------------------------------------------
# Ensure the project root is in sys.path so imports work before pip install
# ---------------------------------------------------------------------------
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from edseed_core.bip39 import MnemonicCodec  # noqa: E402
from edseed_core.config import EdSeedConfig, load_config  # noqa: E402
from edseed_core.encoding import keypair_to_dict  # noqa: E402
from edseed_core.logging_config import setup_logging  # noqa: E402
from edseed_core.wallet import WalletFactory  # noqa: E402

logger = logging.getLogger("edseed.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Derive Ed25519 wallets from a BIP-39 mnemonic")
    p.add_argument("--config", default=None, help="Path to edseed.toml config file")
    p.add_argument("--mnemonic", default=os.environ.get("EDSEED_MNEMONIC"),
                   help="Existing phrase (a new one is generated when omitted)")
    p.add_argument("--passphrase", default=os.environ.get("EDSEED_PASSPHRASE", ""),
                   help="Optional BIP-39 passphrase")
    p.add_argument("--count", type=int, default=None, help="Number of wallets to derive")
    p.add_argument("--strength", type=int, default=None,
                   help="Entropy bits for a generated phrase (128/160/192/224/256)")
    p.add_argument("--workers", type=int, default=None,
                   help="Derive wallets on this many threads")
    p.add_argument("--sign", metavar="TEXT", default=None,
                   help="Sign TEXT (UTF-8) with each wallet and verify the signature")
    p.add_argument("--show-secret", action="store_true",
                   help="Also print private keys")
    p.add_argument("--json", action="store_true", help="Print results as JSON")
    p.add_argument("--log-level", default=None, help="Override the configured log level")
    return p.parse_args(argv)


def run(args: argparse.Namespace, cfg: EdSeedConfig) -> dict:
    derivation = cfg.derivation
    count = args.count if args.count is not None else derivation.wallet_count
    strength = args.strength if args.strength is not None else derivation.strength
    workers = args.workers if args.workers is not None else derivation.max_workers

    codec = MnemonicCodec(derivation.language)
    generated = args.mnemonic is None
    mnemonic = codec.generate(strength) if generated else args.mnemonic

    factory = WalletFactory.from_mnemonic(
        mnemonic,
        args.passphrase,
        codec=codec,
        coin_type=derivation.coin_type,
        change=derivation.change,
        max_workers=workers,
    )
    logger.info("Deriving %d wallet(s)", count)

    message = args.sign.encode("utf-8") if args.sign is not None else None
    wallets = []
    for index, keypair in enumerate(factory.derive_wallets(count)):
        row = {"index": index, "path": str(factory.path_for(index))}
        row.update(keypair_to_dict(keypair, include_secret=args.show_secret))
        if message is not None:
            signature = keypair.sign(message)
            row["signature"] = signature.hex()
            row["verified"] = keypair.verify(signature, message)
        wallets.append(row)

    result: dict = {"wallets": wallets}
    if generated:
        result["mnemonic"] = mnemonic
    return result


def _print_human(result: dict) -> None:
    if "mnemonic" in result:
        print(f"Mnemonic = {result['mnemonic']}")
    for row in result["wallets"]:
        print(f"Wallet {row['index'] + 1} ({row['path']}) Public Key = {row['address']}")
        if "private_key" in row:
            print(f"    private key = {row['private_key']}")
            print(f"    secret key (base58) = {row['secret_key_b58']}")
        if "signature" in row:
            print(f"    signature = {row['signature']}")
            print(f"    verified = {row['verified']}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = load_config(args.config)
    setup_logging(
        level=args.log_level or cfg.logging.level,
        fmt=cfg.logging.format,
        log_file=cfg.logging.file,
    )
    try:
        result = run(args, cfg)
    except ValueError as exc:
        # bad phrase, path or config value
        logger.error("%s", exc)
        return 2

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        _print_human(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
