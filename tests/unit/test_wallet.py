"""
Wallet Manager Tests
"""

import base58
import pytest

from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey

from jito_swap.execution.wallet import WalletManager
from jito_swap.shared.execution.execution_result import ErrorCode, SwapError


class TestKeyLoading:

    def test_json_byte_array(self, payer_keypair, payer_secret_json):
        wallet = WalletManager(payer_secret_json)
        assert wallet.pubkey == payer_keypair.pubkey()

    def test_base58_string(self, payer_keypair):
        secret = base58.b58encode(bytes(payer_keypair)).decode()
        wallet = WalletManager(secret)
        assert str(wallet.pubkey) == str(payer_keypair.pubkey())

    @pytest.mark.parametrize("secret", ["", "   "])
    def test_missing_key(self, secret):
        with pytest.raises(SwapError) as exc:
            WalletManager(secret)
        assert exc.value.code == ErrorCode.VALIDATION

    @pytest.mark.parametrize("secret", ["[1, 2, 3]", "[not json", "0OIl"])
    def test_malformed_key(self, secret):
        with pytest.raises(SwapError) as exc:
            WalletManager(secret)
        assert exc.value.code == ErrorCode.VALIDATION


class TestSigning:

    def test_signature_verifies_against_payer(self, payer_secret_json):
        wallet = WalletManager(payer_secret_json)
        ix = Instruction(Pubkey.new_unique(), b"\x01", [AccountMeta(wallet.pubkey, True, True)])
        message = MessageV0.try_compile(wallet.pubkey, [ix], [], Hash.new_unique())

        tx = wallet.sign(message)

        assert len(tx.signatures) == 1
        assert tx.verify_with_results() == [True]

    def test_foreign_signer_is_refused(self, payer_secret_json):
        wallet = WalletManager(payer_secret_json)
        other = Keypair().pubkey()
        ix = Instruction(Pubkey.new_unique(), b"\x01", [AccountMeta(other, True, True)])
        message = MessageV0.try_compile(other, [ix], [], Hash.new_unique())

        with pytest.raises(Exception):
            wallet.sign(message)
