"""
Priority Fee Estimator Tests
"""

import pytest
from unittest.mock import AsyncMock

from jito_swap.shared.execution.priority_fee import PriorityFeeEstimator


class TestPriorityFeeEstimator:

    @pytest.mark.asyncio
    async def test_no_samples_uses_default(self, mock_ledger):
        fee = await PriorityFeeEstimator(mock_ledger).estimate()

        assert fee.micro_lamports == 10_000
        assert fee.sol_amount == 0.00001

    @pytest.mark.asyncio
    async def test_mean_rounded_up(self, mock_ledger):
        mock_ledger.get_recent_prioritization_fees = AsyncMock(return_value=[1, 2, 2])

        fee = await PriorityFeeEstimator(mock_ledger).estimate()

        assert fee.micro_lamports == 2  # 5/3 -> 2
        assert fee.sol_amount == 2 / 1e6 / 1e3

    @pytest.mark.asyncio
    async def test_only_last_samples_count(self, mock_ledger):
        # 50 huge old samples followed by 150 recent ones
        mock_ledger.get_recent_prioritization_fees = AsyncMock(return_value=[1_000_000] * 50 + [100] * 150)

        fee = await PriorityFeeEstimator(mock_ledger, sample_size=150).estimate()

        assert fee.micro_lamports == 100

    @pytest.mark.asyncio
    async def test_zero_fees_average_to_zero(self, mock_ledger):
        mock_ledger.get_recent_prioritization_fees = AsyncMock(return_value=[0, 0, 0])

        fee = await PriorityFeeEstimator(mock_ledger).estimate()

        assert fee.micro_lamports == 0

    @pytest.mark.asyncio
    async def test_explicit_zero_default_is_kept(self, mock_ledger):
        fee = await PriorityFeeEstimator(mock_ledger, default_micro_lamports=0, default_sol=0.0).estimate()

        assert fee.micro_lamports == 0
        assert fee.sol_amount == 0.0
