"""
Swap Orchestrator
=================
Drives one swap from quote to landed bundle.

Per attempt:
    asset info -> quote -> swap instructions -> lookup tables
    -> simulate (with table fallback) -> priority fee -> blockhash
    -> compile (with table fallback) -> sign -> bundle -> poll

Any failure aborts the attempt. The next attempt starts from a fresh
quote with a wider slippage: base * (1 + attempt * 0.5). A rent
rejection during simulation ends the whole swap with no result, since
more slippage cannot fix an underfunded wallet.

Usage:
    orchestrator = SwapOrchestrator(jupiter, ledger, jito, wallet)
    result = await orchestrator.execute_swap(SwapRequest(
        input_mint=Settings.WSOL_MINT,
        output_mint=Settings.USDC_MINT,
        amount=0.01,
    ))
"""

import asyncio
import math
from dataclasses import dataclass
from typing import Optional

from solana.rpc.commitment import Finalized

from config.settings import Settings
from jito_swap.execution.bundle_submitter import BundleSubmitter, JitoBundle, SubmitterConfig
from jito_swap.execution.fallback import with_lookup_table_fallback
from jito_swap.execution.instruction_factory import build_swap_instructions, build_tip_instruction
from jito_swap.execution.lookup_tables import LookupTableResolver
from jito_swap.execution.simulator import TransactionSimulator
from jito_swap.execution.transaction_builder import TransactionBuilder
from jito_swap.execution.validation import validate_swap_request
from jito_swap.shared.execution.execution_result import (
    ErrorCode, SimulationKind, SwapError, SwapFailedError, SwapResult,
)
from jito_swap.shared.execution.priority_fee import PriorityFeeEstimator
from jito_swap.shared.execution.schemas import SwapRequest
from jito_swap.shared.infrastructure.jupiter_client import to_atomic_amount
from jito_swap.shared.system.logging import Logger


# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SwapConfig:
    """Retry bounds and delays for one swap."""

    # Simulation
    simulation_max_retries: int = Settings.SIMULATION_MAX_RETRIES
    simulation_fallback_retries: int = Settings.SIMULATION_FALLBACK_RETRIES
    simulation_retry_delay_sec: float = Settings.SIMULATION_RETRY_DELAY_SEC
    compute_unit_margin_pct: int = Settings.COMPUTE_UNIT_MARGIN_PCT

    # Outer loop
    slippage_escalation: float = Settings.SLIPPAGE_ESCALATION
    max_slippage_bps: int = Settings.MAX_SLIPPAGE_BPS
    outer_retry_delay_sec: float = Settings.OUTER_RETRY_DELAY_SEC

    # Jito tip transaction (0 = none)
    tip_lamports: int = Settings.JITO_TIP_LAMPORTS


def escalate_slippage(base_bps: float, attempt: int, factor: float = 0.5, cap: int = 10_000) -> int:
    """Slippage for 0-based `attempt`, rounded up and capped."""
    return min(math.ceil(base_bps * (1 + attempt * factor)), cap)


# ═══════════════════════════════════════════════════════════════════════════════
# ORCHESTRATOR
# ═══════════════════════════════════════════════════════════════════════════════

class SwapOrchestrator:

    def __init__(
        self,
        jupiter,
        ledger,
        jito,
        wallet,
        config: Optional[SwapConfig] = None,
        submitter_config: Optional[SubmitterConfig] = None,
        resolver: Optional[LookupTableResolver] = None,
    ):
        self.jupiter = jupiter
        self.ledger = ledger
        self.jito = jito
        self.wallet = wallet
        self.config = config or SwapConfig()

        self.resolver = resolver or LookupTableResolver(ledger)
        self.simulator = TransactionSimulator(
            ledger,
            margin_pct=self.config.compute_unit_margin_pct,
            retry_delay_sec=self.config.simulation_retry_delay_sec,
        )
        self.fee_estimator = PriorityFeeEstimator(ledger)
        self.builder = TransactionBuilder()
        self.submitter = BundleSubmitter(jito, submitter_config)

    async def execute_swap(self, request: SwapRequest) -> Optional[SwapResult]:
        """
        Returns:
            SwapResult once a bundle lands, or None when the wallet cannot
            cover rent for the accounts the swap creates.

        Raises:
            ValidationError: malformed request (before any network call)
            SwapFailedError: every attempt failed
        """
        validate_swap_request(request)

        last_error: Optional[BaseException] = None
        for attempt in range(request.max_retries):
            try:
                result = await self._attempt(request, attempt)
                if result is None:
                    Logger.warning("[SWAP] Insufficient funds for rent. Skipping this swap.")
                return result
            except Exception as e:
                last_error = e
                Logger.error(f"[SWAP] Error executing swap (attempt {attempt + 1}/{request.max_retries}): {e}")
                if attempt + 1 < request.max_retries:
                    Logger.info(f"[SWAP] Retrying in {self.config.outer_retry_delay_sec} seconds...")
                    await asyncio.sleep(self.config.outer_retry_delay_sec)

        Logger.critical(f"[SWAP] Failed to execute swap after {request.max_retries} attempts.")
        raise SwapFailedError(request.max_retries, last_error)

    async def _attempt(self, request: SwapRequest, attempt: int) -> Optional[SwapResult]:
        Logger.section("INITIATING SWAP")
        payer = self.wallet.pubkey

        # 1. Token info
        input_info = await self.jupiter.get_asset_info(request.input_mint)
        output_info = await self.jupiter.get_asset_info(request.output_mint)
        Logger.info(f"[SWAP] Decimals: input={input_info.decimals} output={output_info.decimals}")

        amount_atomic = to_atomic_amount(request.amount, input_info.decimals)
        slippage_bps = escalate_slippage(
            request.slippage_bps, attempt, self.config.slippage_escalation, self.config.max_slippage_bps
        )

        # 2. Quote and instructions
        quote = await self.jupiter.get_quote(request.input_mint, request.output_mint, amount_atomic, slippage_bps)
        payload = await self.jupiter.get_swap_instructions(quote, str(payer))
        instructions = build_swap_instructions(payload)
        lookup_tables = await self.resolver.resolve(payload.address_lookup_table_addresses)

        # 3. Simulate, dropping the lookup tables if they get in the way
        retry_bounds = iter([self.config.simulation_max_retries, self.config.simulation_fallback_retries])

        async def simulate_with(tables):
            outcome = await self.simulator.simulate(instructions, payer, tables, next(retry_bounds))
            if outcome.kind == SimulationKind.FAILED:
                raise SwapError(ErrorCode.SIMULATION_FAILED, f"Failed to simulate transaction: {outcome.reason}")
            return outcome

        outcome = await with_lookup_table_fallback(simulate_with, lookup_tables, "Simulation")
        if outcome.is_rent_rejection:
            return None
        compute_units = outcome.compute_units

        # 4. Fee, blockhash, message
        priority_fee = await self.fee_estimator.estimate()
        Logger.info(
            f"[FEE] Compute units: {compute_units}, priority fee: {priority_fee.micro_lamports} "
            f"microLamports ({priority_fee.sol_amount:.9f} SOL)"
        )
        blockhash = await self.ledger.get_latest_blockhash(Finalized)

        message = await with_lookup_table_fallback(
            lambda tables: self.builder.build_message(
                instructions, payer, tables, blockhash, compute_units, priority_fee
            ),
            lookup_tables,
            "Transaction build",
        )

        # 5. Sign and bundle
        swap_tx = self.wallet.sign(message)
        bundle = JitoBundle(transactions=[swap_tx])

        if self.config.tip_lamports > 0:
            tip_account = await self.jito.get_random_tip_account()
            tip_ix = build_tip_instruction(payer, self.config.tip_lamports, tip_account)
            bundle.transactions.append(self.wallet.sign(self.builder.build_tip_message(tip_ix, payer, blockhash)))
            Logger.debug(f"[JITO] Tip of {self.config.tip_lamports} lamports to {tip_account}")

        Logger.info(f"[JITO] Sending bundle with {len(bundle.transactions)} transaction(s)...")
        bundle_status = await self.submitter.submit_and_confirm(bundle)

        signature = str(swap_tx.signatures[0])
        Logger.success(f"[SWAP] Swap executed successfully: {signature}")
        return SwapResult(
            bundle_status=bundle_status,
            signature=signature,
            attempts=attempt + 1,
            slippage_bps=slippage_bps,
            compute_units=compute_units,
            priority_fee_micro_lamports=priority_fee.micro_lamports,
        )
