"""
Transaction Builder
===================
Compiles the final v0 message: compute budget first, then the swap.
Signing is left to the wallet.
"""

from typing import List

from solders.address_lookup_table_account import AddressLookupTableAccount
from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey

from jito_swap.execution.instruction_factory import build_compute_budget_instructions, strip_empty
from jito_swap.shared.execution.execution_result import ErrorCode, SwapError
from jito_swap.shared.execution.schemas import PriorityFee
from jito_swap.shared.system.logging import Logger


class TransactionBuilder:

    def build_message(
        self,
        instructions: List[Instruction],
        payer: Pubkey,
        lookup_tables: List[AddressLookupTableAccount],
        blockhash: Hash,
        compute_units: int,
        priority_fee: PriorityFee,
    ) -> MessageV0:
        """
        Raises:
            SwapError(TRANSACTION_BUILD): the message does not compile
        """
        final_instructions = build_compute_budget_instructions(compute_units, priority_fee.micro_lamports)
        final_instructions.extend(strip_empty(instructions))

        Logger.info(
            f"[BUILD] Creating versioned transaction with {len(final_instructions)} instructions "
            f"and {len(lookup_tables)} lookup tables"
        )
        try:
            return MessageV0.try_compile(payer, final_instructions, lookup_tables, blockhash)
        except Exception as e:
            raise SwapError(ErrorCode.TRANSACTION_BUILD, f"Failed to compile transaction message: {e}") from e

    def build_tip_message(
        self,
        tip_instruction: Instruction,
        payer: Pubkey,
        blockhash: Hash,
    ) -> MessageV0:
        try:
            return MessageV0.try_compile(payer, [tip_instruction], [], blockhash)
        except Exception as e:
            raise SwapError(ErrorCode.TRANSACTION_BUILD, f"Failed to compile tip message: {e}") from e
