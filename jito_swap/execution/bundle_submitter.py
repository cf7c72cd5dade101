"""
Bundle Submitter
================
Jito bundle submission and confirmation handling.

Handles the messy real-world interaction with the relay.

States:
    Built -> Submitted -> Landed | Failed | Pending

- Each poll cycle waits `poll_interval_sec`, then asks the relay.
- Landed ends the loop with the landing slot.
- Failed resubmits the *same* signed transactions under a new bundle id.
- Anything else stays pending.
- After `max_poll_cycles` without landing: BUNDLE_LANDING_TIMEOUT.
"""

from __future__ import annotations

import base64
import asyncio
from typing import List, Optional
from dataclasses import dataclass, field

from solders.transaction import VersionedTransaction

from config.settings import Settings
from jito_swap.shared.execution.execution_result import (
    BundleState, BundleStatus, ErrorCode, SwapError,
)
from jito_swap.shared.infrastructure.jito_adapter import JitoAdapter
from jito_swap.shared.system.logging import Logger


# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SubmitterConfig:
    """Configuration for bundle submission."""

    # Confirmation
    max_poll_cycles: int = Settings.BUNDLE_POLL_CYCLES
    poll_interval_sec: float = Settings.BUNDLE_POLL_INTERVAL_SEC


@dataclass
class JitoBundle:
    """Signed transactions submitted together, plus the relay-assigned id."""

    transactions: List[VersionedTransaction] = field(default_factory=list)
    bundle_id: Optional[str] = None

    def serialize(self) -> List[str]:
        return [base64.b64encode(bytes(tx)).decode("utf-8") for tx in self.transactions]


# ═══════════════════════════════════════════════════════════════════════════════
# BUNDLE SUBMITTER
# ═══════════════════════════════════════════════════════════════════════════════

class BundleSubmitter:
    """
    Usage:
        submitter = BundleSubmitter(jito_adapter)
        status = await submitter.submit_and_confirm(JitoBundle([signed_tx]))
    """

    def __init__(self, jito: JitoAdapter, config: Optional[SubmitterConfig] = None):
        self.jito = jito
        self.config = config or SubmitterConfig()

        # Statistics
        self._submissions = 0
        self._resubmissions = 0
        self._confirmations = 0
        self._timeouts = 0

    async def submit_and_confirm(self, bundle: JitoBundle) -> BundleStatus:
        """
        Submit `bundle` and poll until it lands.

        Raises:
            SwapError(BUNDLE_REJECTED): the relay refused a (re)submission
            SwapError(BUNDLE_LANDING_TIMEOUT): no landing within the cycle budget
        """
        encoded = bundle.serialize()
        bundle.bundle_id = await self.jito.submit_bundle(encoded)
        self._submissions += 1

        for cycle in range(1, self.config.max_poll_cycles + 1):
            Logger.info(
                f"[JITO] Waiting {self.config.poll_interval_sec}s before status check "
                f"({cycle}/{self.config.max_poll_cycles})..."
            )
            await asyncio.sleep(self.config.poll_interval_sec)

            status = await self._poll(bundle.bundle_id)

            if status.state == BundleState.LANDED:
                self._confirmations += 1
                Logger.success(f"[JITO] Bundle landed in slot {status.landed_slot}")
                return status

            if status.state == BundleState.FAILED:
                Logger.warning("[JITO] Bundle failed. Resubmitting...")
                bundle.bundle_id = await self.jito.submit_bundle(encoded)
                self._resubmissions += 1
                Logger.info(f"[JITO] Resubmitted with bundle id {bundle.bundle_id}")
                continue

            Logger.info("[JITO] Bundle still pending")

        self._timeouts += 1
        raise SwapError(
            ErrorCode.BUNDLE_LANDING_TIMEOUT,
            f"Bundle did not land after {self.config.max_poll_cycles} status checks",
        )

    async def _poll(self, bundle_id: str) -> BundleStatus:
        try:
            return await self.jito.get_bundle_status(bundle_id)
        except SwapError as e:
            Logger.debug(f"[JITO] Status check error: {e}")
            return BundleStatus(bundle_id=bundle_id)

    def get_stats(self) -> dict:
        """Get submission statistics."""
        success_rate = (
            self._confirmations / self._submissions * 100
            if self._submissions > 0
            else 0
        )

        return {
            "submissions": self._submissions,
            "resubmissions": self._resubmissions,
            "confirmations": self._confirmations,
            "timeouts": self._timeouts,
            "success_rate_pct": round(success_rate, 2),
        }
