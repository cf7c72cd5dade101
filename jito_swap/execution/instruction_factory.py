"""
Instruction Factory
===================
Pure, deterministic Solana instruction building.

Testable without RPC or wallet connections.

Responsibilities:
- Decode Jupiter wire-format instructions
- Order setup / swap / cleanup instructions
- Set ComputeBudget limits
- Build Jito tip instructions
"""

from __future__ import annotations

import base64
import binascii
from typing import List, Optional

from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey
from solders.system_program import transfer, TransferParams
from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price

from jito_swap.shared.execution.execution_result import ErrorCode, SwapError
from jito_swap.shared.execution.schemas import SerializedInstruction, SwapInstructionsPayload
from jito_swap.shared.system.logging import Logger


def deserialize_instruction(wire: SerializedInstruction) -> Instruction:
    """Convert a wire-format instruction into a solders Instruction."""
    try:
        accounts = [
            AccountMeta(
                pubkey=Pubkey.from_string(meta.pubkey),
                is_signer=meta.is_signer,
                is_writable=meta.is_writable,
            )
            for meta in wire.accounts
        ]
        data = base64.b64decode(wire.data, validate=True)
        program_id = Pubkey.from_string(wire.program_id)
    except (ValueError, binascii.Error) as e:
        raise SwapError(ErrorCode.INSTRUCTION_FETCH, f"Undecodable instruction: {e}") from e

    return Instruction(program_id, data, accounts)


def build_swap_instructions(payload: SwapInstructionsPayload) -> List[Instruction]:
    """
    Order: setup instructions, the swap, then cleanup when present.
    """
    instructions = [deserialize_instruction(ix) for ix in payload.setup_instructions]
    instructions.append(deserialize_instruction(payload.swap_instruction))
    if payload.cleanup_instruction is not None:
        instructions.append(deserialize_instruction(payload.cleanup_instruction))

    Logger.debug(f"[BUILD] Decoded {len(instructions)} swap instructions")
    return instructions


def build_compute_budget_instructions(units: int, priority_fee: int) -> List[Instruction]:
    """
    Args:
        units: Compute unit limit
        priority_fee: Priority fee in micro-lamports per CU

    Returns:
        [SetComputeUnitLimit, SetComputeUnitPrice]
    """
    return [
        set_compute_unit_limit(units),
        set_compute_unit_price(priority_fee),
    ]


def build_tip_instruction(payer: Pubkey, lamports: int, tip_account: str) -> Instruction:
    """SOL transfer from the payer to a Jito tip account."""
    return transfer(
        TransferParams(
            from_pubkey=payer,
            to_pubkey=Pubkey.from_string(tip_account),
            lamports=lamports,
        )
    )


def strip_empty(instructions: List[Optional[Instruction]]) -> List[Instruction]:
    return [ix for ix in instructions if ix is not None]
