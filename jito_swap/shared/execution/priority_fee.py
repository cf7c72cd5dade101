"""
Priority Fee Estimator
======================
Picks a compute-unit price from the node's recent prioritization fees.

The estimate is the mean of the most recent samples, rounded up. With no
samples at all the default price is used.

Usage:
    from jito_swap.shared.execution.priority_fee import PriorityFeeEstimator

    fee = await PriorityFeeEstimator(ledger).estimate()
    # PriorityFee(micro_lamports=12500, sol_amount=1.25e-05)
"""

import math
from typing import Optional

from config.settings import Settings
from jito_swap.shared.execution.schemas import PriorityFee
from jito_swap.shared.system.logging import Logger


class PriorityFeeEstimator:

    def __init__(
        self,
        ledger,
        sample_size: Optional[int] = None,
        default_micro_lamports: Optional[int] = None,
        default_sol: Optional[float] = None,
    ):
        self.ledger = ledger
        self.sample_size = sample_size if sample_size is not None else Settings.PRIORITY_FEE_SAMPLE_SIZE
        self.default_micro_lamports = (
            default_micro_lamports if default_micro_lamports is not None
            else Settings.DEFAULT_PRIORITY_FEE_MICRO_LAMPORTS
        )
        self.default_sol = default_sol if default_sol is not None else Settings.DEFAULT_PRIORITY_FEE_SOL

    async def estimate(self) -> PriorityFee:
        fees = await self.ledger.get_recent_prioritization_fees()
        recent = fees[-self.sample_size:]

        if not recent:
            Logger.info(f"[FEE] No recent fee samples, using default {self.default_micro_lamports} microLamports")
            return PriorityFee(micro_lamports=self.default_micro_lamports, sol_amount=self.default_sol)

        micro_lamports = math.ceil(sum(recent) / len(recent))
        sol_amount = micro_lamports / 1e6 / 1e3

        Logger.info(f"[FEE] Priority fee: {micro_lamports} microLamports ({sol_amount:.9f} SOL) from {len(recent)} samples")
        return PriorityFee(micro_lamports=micro_lamports, sol_amount=sol_amount)
