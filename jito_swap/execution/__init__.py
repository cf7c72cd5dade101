"""
Execution Pipeline
==================
Swap execution layer.

Components:
- Validation: request checks before any network call
- InstructionFactory: pure instruction building
- LookupTableResolver: best-effort lookup table fetch
- TransactionSimulator: compute unit estimation
- TransactionBuilder: v0 message compilation
- BundleSubmitter: Jito submission and polling
- SwapOrchestrator: the outer retry loop
"""

from jito_swap.execution.validation import (
    validate_mint,
    validate_amount,
    validate_slippage,
    validate_retries,
    validate_swap_request,
)

from jito_swap.execution.instruction_factory import (
    deserialize_instruction,
    build_swap_instructions,
    build_compute_budget_instructions,
    build_tip_instruction,
)

from jito_swap.execution.lookup_tables import LookupTableResolver
from jito_swap.execution.simulator import TransactionSimulator
from jito_swap.execution.fallback import with_lookup_table_fallback
from jito_swap.execution.transaction_builder import TransactionBuilder

from jito_swap.execution.bundle_submitter import (
    BundleSubmitter,
    SubmitterConfig,
    JitoBundle,
)

from jito_swap.execution.wallet import WalletManager

from jito_swap.execution.swap_orchestrator import (
    SwapOrchestrator,
    SwapConfig,
    escalate_slippage,
)


__all__ = [
    # Validation
    "validate_mint",
    "validate_amount",
    "validate_slippage",
    "validate_retries",
    "validate_swap_request",
    # Factory
    "deserialize_instruction",
    "build_swap_instructions",
    "build_compute_budget_instructions",
    "build_tip_instruction",
    # Preparation
    "LookupTableResolver",
    "TransactionSimulator",
    "with_lookup_table_fallback",
    "TransactionBuilder",
    # Submitter
    "BundleSubmitter",
    "SubmitterConfig",
    "JitoBundle",
    # Wallet
    "WalletManager",
    # Orchestrator
    "SwapOrchestrator",
    "SwapConfig",
    "escalate_slippage",
]
