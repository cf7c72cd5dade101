"""
Execution Schemas
==================
Pydantic models for the routing service wire format, plus the plain
request/value types passed between pipeline stages.

The wire models mirror the camelCase JSON returned by Jupiter's
`/swap-instructions` endpoint. Unknown fields (computeBudgetInstructions,
otherInstructions, ...) are ignored.
"""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SerializedAccountMeta(BaseModel):
    """One account reference of a wire-format instruction."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    pubkey: str = Field(..., description="Account address (base58)")
    is_signer: bool = Field(..., alias="isSigner")
    is_writable: bool = Field(..., alias="isWritable")


class SerializedInstruction(BaseModel):
    """
    Wire-format instruction.

    Example:
        SerializedInstruction(
            programId="JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4",
            accounts=[{"pubkey": "...", "isSigner": False, "isWritable": True}],
            data="AQID",  # base64
        )
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    program_id: str = Field(..., alias="programId")
    accounts: List[SerializedAccountMeta] = Field(default_factory=list)
    data: str = Field(default="", description="Instruction data, base64 encoded")


class SwapInstructionsPayload(BaseModel):
    """Instruction set returned for a quote."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    setup_instructions: List[SerializedInstruction] = Field(default_factory=list, alias="setupInstructions")
    swap_instruction: SerializedInstruction = Field(..., alias="swapInstruction")
    cleanup_instruction: Optional[SerializedInstruction] = Field(default=None, alias="cleanupInstruction")
    address_lookup_table_addresses: List[str] = Field(
        default_factory=list, alias="addressLookupTableAddresses"
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PIPELINE VALUE TYPES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SwapRequest:
    """A swap as asked for by the caller. `amount` is in human units."""

    input_mint: str
    output_mint: str
    amount: float
    slippage_bps: float = 100
    max_retries: int = 5


@dataclass(frozen=True)
class AssetInfo:
    decimals: int


@dataclass(frozen=True)
class PriorityFee:
    micro_lamports: int
    sol_amount: float
