"""
Unified Execution Result
========================
Standardized result and error types for the swap pipeline.

Every stage either returns one of these values or raises a SwapError
tagged with an ErrorCode, so the orchestrator can log and retry
without caring which stage failed.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum
import time


class ErrorCode(Enum):
    """Standardized error codes for swap failures."""

    # Input errors (never retried)
    VALIDATION = "VALIDATION"

    # Routing service errors
    ASSET_LOOKUP = "ASSET_LOOKUP"
    NO_ROUTE = "NO_ROUTE"
    INSTRUCTION_FETCH = "INSTRUCTION_FETCH"

    # Transaction preparation errors
    SIMULATION_FAILED = "SIMULATION_FAILED"
    TRANSACTION_BUILD = "TRANSACTION_BUILD"

    # Jito bundle errors
    BUNDLE_REJECTED = "BUNDLE_REJECTED"
    BUNDLE_LANDING_TIMEOUT = "BUNDLE_LANDING_TIMEOUT"

    # Network errors
    TRANSPORT = "TRANSPORT"


class SwapError(Exception):
    """
    Tagged swap error.

    The `code` discriminates the failure kind; `message` is human-readable.
    """

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"SwapError({self.code.value}: {self.message})"


class ValidationError(SwapError):
    """Malformed request parameter. Raised before any network call."""

    def __init__(self, field_name: str, message: str):
        super().__init__(ErrorCode.VALIDATION, message)
        self.field = field_name


class SwapFailedError(SwapError):
    """Terminal failure after every outer attempt was used up."""

    def __init__(self, attempts: int, last_error: Optional[BaseException]):
        reason = str(last_error) if last_error else "unknown error"
        code = last_error.code if isinstance(last_error, SwapError) else ErrorCode.TRANSPORT
        super().__init__(code, f"Failed to execute swap after {attempts} attempts: {reason}")
        self.attempts = attempts
        self.last_error = last_error


# ═══════════════════════════════════════════════════════════════════════════════
# SIMULATION OUTCOME
# ═══════════════════════════════════════════════════════════════════════════════

class SimulationKind(Enum):
    COMPUTE_UNITS = "COMPUTE_UNITS"
    INSUFFICIENT_FUNDS_FOR_RENT = "INSUFFICIENT_FUNDS_FOR_RENT"
    FAILED = "FAILED"


@dataclass(frozen=True)
class SimulationOutcome:
    """Result of a dry run: compute units, rent rejection, or failure."""

    kind: SimulationKind
    compute_units: Optional[int] = None
    reason: Optional[str] = None

    @classmethod
    def units(cls, compute_units: int) -> "SimulationOutcome":
        return cls(SimulationKind.COMPUTE_UNITS, compute_units=compute_units)

    @classmethod
    def insufficient_funds_for_rent(cls, reason: str = "") -> "SimulationOutcome":
        return cls(SimulationKind.INSUFFICIENT_FUNDS_FOR_RENT, reason=reason or None)

    @classmethod
    def failed(cls, reason: str) -> "SimulationOutcome":
        return cls(SimulationKind.FAILED, reason=reason)

    @property
    def succeeded(self) -> bool:
        return self.kind == SimulationKind.COMPUTE_UNITS

    @property
    def is_rent_rejection(self) -> bool:
        return self.kind == SimulationKind.INSUFFICIENT_FUNDS_FOR_RENT


# ═══════════════════════════════════════════════════════════════════════════════
# BUNDLE STATUS
# ═══════════════════════════════════════════════════════════════════════════════

class BundleState(Enum):
    """Relay-side state of a submitted bundle."""
    PENDING = "Pending"
    LANDED = "Landed"
    FAILED = "Failed"


@dataclass(frozen=True)
class BundleStatus:
    bundle_id: Optional[str]
    state: BundleState = BundleState.PENDING
    landed_slot: Optional[int] = None

    @property
    def landed(self) -> bool:
        return self.state == BundleState.LANDED

    def to_dict(self) -> Dict[str, Any]:
        data = {"bundleId": self.bundle_id, "status": self.state.value}
        if self.landed_slot is not None:
            data["landedSlot"] = self.landed_slot
        return data


# ═══════════════════════════════════════════════════════════════════════════════
# SWAP RESULT
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class SwapResult:
    """
    Terminal success artifact of a swap.

    `signature` is the base58 form of the transaction's first signature,
    which stays its on-chain identity across bundle resubmissions.
    """

    bundle_status: BundleStatus
    signature: str
    attempts: int = 1
    slippage_bps: int = 0
    compute_units: int = 0
    priority_fee_micro_lamports: int = 0
    timestamp: float = field(default_factory=time.time)

    @property
    def explorer_url(self) -> str:
        return f"https://solscan.io/tx/{self.signature}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/display."""
        return {
            "bundleStatus": self.bundle_status.to_dict(),
            "signature": self.signature,
            "attempts": self.attempts,
            "slippageBps": self.slippage_bps,
            "computeUnits": self.compute_units,
            "priorityFeeMicroLamports": self.priority_fee_micro_lamports,
        }

    def __repr__(self) -> str:
        return (
            f"SwapResult({self.bundle_status.state.value}, slot={self.bundle_status.landed_slot}, "
            f"tx={self.signature[:12]}...)"
        )
