"""
Unit Test Configuration
=======================
Fixtures for pure logic tests - NO I/O ALLOWED.

All unit tests should be completely isolated from:
- Network (RPC, HTTP, block engine)
- File system (except tmp_path)

Collaborators are MagicMock/AsyncMock doubles; keys, instructions,
messages and signatures are real solders objects.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from solders.hash import Hash


# ============================================================================
# AUTOUSE: ENFORCE I/O ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def isolate_unit_tests(monkeypatch):
    """
    Automatically disable real HTTP verbs for unit tests.
    Any test that accidentally tries to make a network call will fail.
    """
    def block_network(*args, **kwargs):
        raise RuntimeError(
            "Network I/O detected in unit test! "
            "Unit tests must be pure logic with no external dependencies. "
            "Pass a mock client or an httpx.MockTransport instead."
        )

    monkeypatch.setattr("httpx.AsyncClient.get", block_network)
    monkeypatch.setattr("httpx.AsyncClient.post", block_network)


# ============================================================================
# COLLABORATOR DOUBLES
# ============================================================================


@pytest.fixture
def mock_ledger():
    """LedgerClient double: fresh blockhash, 100k units, no fee samples."""
    ledger = MagicMock()
    ledger.get_latest_blockhash = AsyncMock(side_effect=lambda *a, **kw: Hash.new_unique())
    ledger.get_account_data = AsyncMock(return_value=None)
    ledger.get_parsed_account = AsyncMock(return_value=None)
    ledger.simulate_transaction = AsyncMock(
        return_value={"err": None, "logs": [], "unitsConsumed": 100_000}
    )
    ledger.get_recent_prioritization_fees = AsyncMock(return_value=[])
    return ledger


@pytest.fixture
def mock_jito():
    """JitoAdapter double."""
    jito = MagicMock()
    jito.submit_bundle = AsyncMock(return_value="bundle-1")
    jito.get_bundle_status = AsyncMock()
    jito.get_random_tip_account = AsyncMock(return_value="96gYZGLnJYVFmbjzopPSU6QiEV5fGqZNyN9nmNhvrZU5")
    return jito
