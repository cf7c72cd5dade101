"""
Jito Swap Test Configuration
============================
Shared fixtures and pytest markers for the test suite.
"""

import base64
import json

import pytest
import os
import sys

from solders.keypair import Keypair
from solders.pubkey import Pubkey

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ============================================================================
# PYTEST MARKERS
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "network: marks tests that require network access"
    )


# ============================================================================
# SHARED FIXTURES
# ============================================================================

WSOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


@pytest.fixture
def payer_keypair():
    return Keypair()


@pytest.fixture
def payer_secret_json(payer_keypair):
    """Secret key in the Solana CLI keyfile format."""
    return json.dumps(list(bytes(payer_keypair)))


def make_wire_instruction(payer: Pubkey, data: bytes = b"\x01\x02\x03") -> dict:
    """Jupiter-style instruction JSON with the payer as signer."""
    return {
        "programId": str(Pubkey.new_unique()),
        "accounts": [
            {"pubkey": str(payer), "isSigner": True, "isWritable": True},
            {"pubkey": str(Pubkey.new_unique()), "isSigner": False, "isWritable": True},
        ],
        "data": base64.b64encode(data).decode("utf-8"),
    }


@pytest.fixture
def wire_instruction():
    """Factory for wire-format instructions."""
    return make_wire_instruction


@pytest.fixture
def swap_instructions_response(payer_keypair):
    """Golden path /swap-instructions response."""
    payer = payer_keypair.pubkey()
    return {
        "tokenLedgerInstruction": None,
        "computeBudgetInstructions": [],
        "setupInstructions": [make_wire_instruction(payer, b"\x0a")],
        "swapInstruction": make_wire_instruction(payer, b"\x0b\x0c"),
        "cleanupInstruction": make_wire_instruction(payer, b"\x0d"),
        "otherInstructions": [],
        "addressLookupTableAddresses": [],
    }


@pytest.fixture
def quote_response():
    """Golden path /quote response (WSOL -> USDC)."""
    return {
        "inputMint": WSOL_MINT,
        "inAmount": "10000000",
        "outputMint": USDC_MINT,
        "outAmount": "1500000",
        "otherAmountThreshold": "1485000",
        "swapMode": "ExactIn",
        "slippageBps": 100,
        "priceImpactPct": "0",
        "routePlan": [
            {
                "swapInfo": {
                    "ammKey": "AMM_KEY",
                    "label": "Raydium",
                    "inputMint": WSOL_MINT,
                    "outputMint": USDC_MINT,
                    "inAmount": "10000000",
                    "outAmount": "1500000",
                    "feeAmount": "2500",
                    "feeMint": WSOL_MINT,
                },
                "percent": 100,
            }
        ],
    }
