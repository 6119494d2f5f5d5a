"""
TOML-based configuration for edseed.

Loads settings from a TOML file and/or environment variables.
Environment variables take precedence over file values.  Secrets (the
mnemonic and its passphrase) are deliberately not part of the file format.

Usage:
    from edseed_core.config import load_config
    cfg = load_config("edseed.toml")
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


@dataclass
class DerivationConfig:
    """Mnemonic and wallet derivation settings."""
    language: str = "english"
    strength: int = 128            # entropy bits for newly generated phrases
    coin_type: int = 501           # SLIP-0044 coin type (501 = Solana)
    change: int = 0
    wallet_count: int = 4
    max_workers: int = 1           # >1 derives wallets on a thread pool


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    format: str = "human"   # "human" or "json"
    file: str | None = None


@dataclass
class EdSeedConfig:
    """Top-level configuration container."""
    derivation: DerivationConfig = field(default_factory=DerivationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _merge(dc: Any, raw: dict[str, Any]) -> None:
    """Merge a raw dict into a dataclass instance (in-place)."""
    for key, value in raw.items():
        key_under = key.replace("-", "_")
        if hasattr(dc, key_under):
            setattr(dc, key_under, value)


def _env_int(name: str) -> int | None:
    v = os.environ.get(name)
    if not v:
        return None
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {v!r}") from None


def load_config(path: str | None = None) -> EdSeedConfig:
    """
    Load configuration from a TOML file, then overlay environment variables.

    Env-var mapping:
        EDSEED_LANGUAGE      -> derivation.language
        EDSEED_STRENGTH      -> derivation.strength
        EDSEED_COIN_TYPE     -> derivation.coin_type
        EDSEED_WALLET_COUNT  -> derivation.wallet_count
        EDSEED_WORKERS       -> derivation.max_workers
        EDSEED_LOG_LEVEL     -> logging.level
        EDSEED_LOG_FMT       -> logging.format
    """
    cfg = EdSeedConfig()

    # ── TOML file ────────────────────────────────────────────────
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                data = tomllib.load(f)
            for section_name, section_dc in [
                ("derivation", cfg.derivation),
                ("logging", cfg.logging),
            ]:
                if isinstance(data.get(section_name), dict):
                    _merge(section_dc, data[section_name])

    # ── Environment variable overrides ───────────────────────────
    if v := os.environ.get("EDSEED_LANGUAGE"):
        cfg.derivation.language = v
    if (n := _env_int("EDSEED_STRENGTH")) is not None:
        cfg.derivation.strength = n
    if (n := _env_int("EDSEED_COIN_TYPE")) is not None:
        cfg.derivation.coin_type = n
    if (n := _env_int("EDSEED_WALLET_COUNT")) is not None:
        cfg.derivation.wallet_count = n
    if (n := _env_int("EDSEED_WORKERS")) is not None:
        cfg.derivation.max_workers = n
    if v := os.environ.get("EDSEED_LOG_LEVEL"):
        cfg.logging.level = v.upper()
    if v := os.environ.get("EDSEED_LOG_FMT"):
        cfg.logging.format = v

    return cfg
