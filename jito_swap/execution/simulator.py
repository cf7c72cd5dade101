"""
Transaction Simulator
=====================
Dry-runs an instruction set to estimate its compute cost.

The estimate is the units consumed plus a safety margin (20% by default),
rounded up. A rent rejection is reported as its own outcome, straight
away and without retry, since no retry can fix it.
"""

import asyncio
import json
from typing import List, Optional

from solana.rpc.commitment import Confirmed
from solders.address_lookup_table_account import AddressLookupTableAccount
from solders.instruction import Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from config.settings import Settings
from jito_swap.execution.instruction_factory import strip_empty
from jito_swap.shared.execution.execution_result import SimulationOutcome
from jito_swap.shared.system.logging import Logger

RENT_ERROR = "InsufficientFundsForRent"


def apply_compute_margin(units_consumed: int, margin_pct: int) -> int:
    """ceil(units * (1 + pct/100)) in integer arithmetic."""
    return (units_consumed * (100 + margin_pct) + 99) // 100


class SimulationError(Exception):
    """A single simulation try failed; carries the node's error text."""


class TransactionSimulator:

    def __init__(
        self,
        ledger,
        margin_pct: Optional[int] = None,
        retry_delay_sec: Optional[float] = None,
    ):
        self.ledger = ledger
        self.margin_pct = Settings.COMPUTE_UNIT_MARGIN_PCT if margin_pct is None else margin_pct
        self.retry_delay_sec = Settings.SIMULATION_RETRY_DELAY_SEC if retry_delay_sec is None else retry_delay_sec

    async def simulate(
        self,
        instructions: List[Instruction],
        payer: Pubkey,
        lookup_tables: List[AddressLookupTableAccount],
        max_retries: int = Settings.SIMULATION_MAX_RETRIES,
    ) -> SimulationOutcome:
        """
        Estimate compute units for `instructions`.

        Returns:
            SimulationOutcome: units with margin, rent rejection, or
            failure with the last error text once retries run out.
        """
        Logger.info("[SIM] Simulating transaction to estimate compute units...")
        blockhash = await self.ledger.get_latest_blockhash(Confirmed)

        instructions = strip_empty(instructions)
        if not instructions:
            Logger.error("[SIM] No valid instructions found for simulation")
            return SimulationOutcome.failed("no instructions to simulate")

        last_reason = ""
        for attempt in range(1, max_retries + 1):
            try:
                Logger.debug(
                    f"[SIM] Try {attempt}/{max_retries}: {len(instructions)} instructions, "
                    f"{len(lookup_tables)} lookup tables"
                )
                units = await self._simulate_once(instructions, payer, lookup_tables, blockhash)
                estimate = apply_compute_margin(units, self.margin_pct)
                Logger.info(f"[SIM] Simulation successful. Units consumed: {units}, limit: {estimate}")
                return SimulationOutcome.units(estimate)
            except Exception as e:
                last_reason = str(e)
                Logger.error(f"[SIM] Error during simulation: {last_reason}")
                if "addresses" in last_reason:
                    Logger.warning("[SIM] This looks like an address lookup table problem. Check their validity.")
                if RENT_ERROR in last_reason:
                    return SimulationOutcome.insufficient_funds_for_rent(last_reason)

            if attempt < max_retries:
                Logger.info(f"[SIM] Retrying simulation (attempt {attempt + 1})...")
                await asyncio.sleep(self.retry_delay_sec)

        Logger.error("[SIM] Max retries reached. Simulation failed.")
        return SimulationOutcome.failed(last_reason)

    async def _simulate_once(self, instructions, payer, lookup_tables, blockhash) -> int:
        message = MessageV0.try_compile(payer, instructions, lookup_tables, blockhash)
        placeholders = [Signature.default()] * message.header.num_required_signatures
        tx = VersionedTransaction.populate(message, placeholders)

        value = await self.ledger.simulate_transaction(tx)
        err = value.get("err")
        if err:
            logs = value.get("logs") or []
            if logs:
                Logger.debug(f"[SIM] Simulation logs: {logs}")
            raise SimulationError(f"Simulation failed: {json.dumps(err)}")

        return int(value.get("unitsConsumed") or 0)
