import json
from typing import Optional

import base58
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from config.settings import Settings
from jito_swap.shared.execution.execution_result import ErrorCode, SwapError
from jito_swap.shared.system.logging import Logger


class WalletManager:
    """
    Keypair loading and transaction signing.

    The secret key is read from WALLET_PRIVATE_KEY, either as a JSON
    byte array (`[12, 34, ...]`, the Solana CLI keyfile format) or as
    a base58 string.
    """

    def __init__(self, private_key: Optional[str] = None):
        self.keypair = self._load_keypair(private_key if private_key is not None else Settings.WALLET_PRIVATE_KEY)
        Logger.info(f"[WALLET] Loaded wallet {self.pubkey}")

    @staticmethod
    def _load_keypair(secret: str) -> Keypair:
        secret = (secret or "").strip()
        if not secret:
            raise SwapError(ErrorCode.VALIDATION, "WALLET_PRIVATE_KEY is not set")

        try:
            if secret.startswith("["):
                secret_bytes = bytes(json.loads(secret))
            else:
                secret_bytes = base58.b58decode(secret)
            return Keypair.from_bytes(secret_bytes)
        except (ValueError, TypeError) as e:
            raise SwapError(ErrorCode.VALIDATION, f"Invalid wallet key format: {e}") from e

    @property
    def pubkey(self) -> Pubkey:
        return self.keypair.pubkey()

    def sign(self, message: MessageV0) -> VersionedTransaction:
        return VersionedTransaction(message, [self.keypair])
