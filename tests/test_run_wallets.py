"""
Tests for run_wallets.py — the command-line wallet runner.
"""

import io
import json
import logging
import os
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

import run_wallets
from edseed_core.encoding import public_key_to_address
from edseed_core.ed25519 import verify
from edseed_core.wallet import WalletFactory

ABANDON_ABOUT = "abandon " * 11 + "about"


@patch.dict(os.environ, {}, clear=True)
class TestRunWallets(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self.saved = (root.level, list(root.handlers))

    def tearDown(self):
        root = logging.getLogger()
        root.setLevel(self.saved[0])
        root.handlers[:] = self.saved[1]

    def _run(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = run_wallets.main(list(argv))
        return code, out.getvalue()

    def test_json_output_for_known_mnemonic(self):
        code, out = self._run("--mnemonic", ABANDON_ABOUT, "--count", "3", "--json")
        self.assertEqual(code, 0)
        result = json.loads(out)
        self.assertNotIn("mnemonic", result)
        expected = WalletFactory.from_mnemonic(ABANDON_ABOUT).derive_wallets(3)
        self.assertEqual(
            [row["address"] for row in result["wallets"]],
            [public_key_to_address(kp.public_key) for kp in expected],
        )
        self.assertEqual(result["wallets"][2]["path"], "m/44'/501'/2'/0'")
        self.assertNotIn("private_key", result["wallets"][0])

    def test_generated_mnemonic_is_printed(self):
        code, out = self._run("--count", "1", "--json")
        self.assertEqual(code, 0)
        result = json.loads(out)
        self.assertEqual(len(result["mnemonic"].split()), 12)
        self.assertEqual(len(result["wallets"]), 1)

    def test_sign_and_verify(self):
        code, out = self._run("--mnemonic", ABANDON_ABOUT, "--count", "2",
                              "--sign", "hello world", "--json")
        self.assertEqual(code, 0)
        for row in json.loads(out)["wallets"]:
            self.assertTrue(row["verified"])
            self.assertTrue(verify(bytes.fromhex(row["signature"]), b"hello world",
                                   bytes.fromhex(row["public_key"])))

    def test_show_secret(self):
        code, out = self._run("--mnemonic", ABANDON_ABOUT, "--count", "1",
                              "--show-secret", "--json")
        self.assertEqual(code, 0)
        self.assertIn("secret_key_b58", json.loads(out)["wallets"][0])

    def test_human_output(self):
        code, out = self._run("--mnemonic", ABANDON_ABOUT, "--count", "2", "--workers", "2")
        self.assertEqual(code, 0)
        self.assertIn("Wallet 1 (m/44'/501'/0'/0') Public Key = ", out)
        self.assertIn("Wallet 2 (m/44'/501'/1'/0') Public Key = ", out)

    def test_bad_checksum_exit_code(self):
        code, out = self._run("--mnemonic", "abandon " * 12)
        self.assertEqual(code, 2)
        self.assertEqual(out, "")

    def test_bad_strength_exit_code(self):
        code, _ = self._run("--strength", "100")
        self.assertEqual(code, 2)

    @patch.dict(os.environ, {"EDSEED_MNEMONIC": ABANDON_ABOUT, "EDSEED_WALLET_COUNT": "1"})
    def test_environment(self):
        code, out = self._run("--json")
        self.assertEqual(code, 0)
        self.assertEqual(len(json.loads(out)["wallets"]), 1)


if __name__ == "__main__":
    unittest.main()
