"""
Jito Block Engine Adapter (Async)
=================================
Bundle submission and status lookup via the Jito block engine.

Features:
- Async HTTP through a caller-owned httpx client
- Regional failover: rotates to the next region after a failure
- Tip account discovery with a short-lived cache

No inline retry: one request per call. The bundle submitter owns the
poll/resubmit loop.
"""

import time
import random
import httpx
from typing import List, Optional, Dict

from jito_swap.shared.execution.execution_result import (
    BundleState, BundleStatus, ErrorCode, SwapError,
)
from jito_swap.shared.system.logging import Logger


# Known Jito tip accounts, used until getTipAccounts answers
JITO_TIP_ACCOUNTS = [
    "96gYZGLnJYVFmbjzopPSU6QiEV5fGqZNyN9nmNhvrZU5",
    "HFqU5x63VTqvQss8hp11i4wVV8bD44PvwucfZ2bU7gRe",
    "Cw8CFyM9FkoMi7K7Crf6HNQqf4uEMzpKw6QNghXLvLkY",
    "ADaUMid9yfUytqMBgopwjb2DTLSokTSzL1zt6iGPaS49",
    "DfXygSm4jCyNCybVYYK6DwvWqjKee8pbDmJGcLWNDXjh",
    "ADuUkR4vqLUMWXxW9gh6D6L8pMSawimctcNZ5pGwDcEt",
    "DttWaMuVvTiduZRnguLF7jNxTgiMBZ1hyAumKUiL2KRL",
    "3AVi9Tg9Uo68tJfuvoKvqKNWKkC5wPdSSdeBnizKZ6jT",
]


class JitoAdapter:
    # Block Engine endpoints
    MAINNET_API = "https://mainnet.block-engine.jito.wtf/api/v1/bundles"

    REGIONAL_ENDPOINTS = {
        "mainnet": "https://mainnet.block-engine.jito.wtf/api/v1/bundles",
        "frankfurt": "https://frankfurt.mainnet.block-engine.jito.wtf/api/v1/bundles",
        "amsterdam": "https://amsterdam.mainnet.block-engine.jito.wtf/api/v1/bundles",
        "ny": "https://ny.mainnet.block-engine.jito.wtf/api/v1/bundles",
        "tokyo": "https://tokyo.mainnet.block-engine.jito.wtf/api/v1/bundles",
    }

    TIP_CACHE_TTL = 300

    def __init__(self, http: httpx.AsyncClient, region: str = "mainnet", bundle_url: Optional[str] = None):
        self.http = http
        if bundle_url:
            self._endpoints = [bundle_url]
        else:
            all_endpoints = list(self.REGIONAL_ENDPOINTS.values())
            preferred = self.REGIONAL_ENDPOINTS.get(region, self.MAINNET_API)
            fallback = [ep for ep in all_endpoints if ep != preferred]
            random.shuffle(fallback)
            self._endpoints = [preferred] + fallback
        self._current_endpoint_idx = 0
        self.api_url = self._endpoints[0]

        self._tip_accounts: List[str] = []
        self._tip_accounts_fetched = 0.0
        self._bundles_submitted = 0
        self._bundles_landed = 0

    def _rotate_endpoint(self):
        if len(self._endpoints) < 2:
            return
        self._current_endpoint_idx = (self._current_endpoint_idx + 1) % len(self._endpoints)
        self.api_url = self._endpoints[self._current_endpoint_idx]
        Logger.info(f"[JITO] Rotating endpoint to: {self.api_url.split('//')[1].split('.')[0]}...")

    async def _rpc_call(self, method: str, params: list = None) -> Optional[Dict]:
        """Single JSON-RPC request. Returns the decoded body, or None on failure."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params or []}

        try:
            response = await self.http.post(self.api_url, json=payload)
        except httpx.HTTPError as e:
            Logger.debug(f"[JITO] RPC Error on {method}: {e}")
            self._rotate_endpoint()
            return None

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError:
                Logger.debug(f"[JITO] Invalid JSON from {method}")
                return None
        elif response.status_code == 429:
            Logger.warning(f"[JITO] Rate Limit (429) on {self.api_url}")
        else:
            Logger.debug(f"[JITO] HTTP {response.status_code} on {method}")
        self._rotate_endpoint()
        return None

    async def get_tip_accounts(self, force_refresh: bool = False) -> List[str]:
        now = time.time()
        if not force_refresh and self._tip_accounts:
            if now - self._tip_accounts_fetched < self.TIP_CACHE_TTL:
                return self._tip_accounts

        response = await self._rpc_call("getTipAccounts")
        if response and isinstance(response, dict):
            accounts = response.get("result", [])
            if isinstance(accounts, list) and len(accounts) > 0:
                self._tip_accounts = accounts
                self._tip_accounts_fetched = now
                Logger.debug(f"[JITO] Cached {len(accounts)} tip accounts")
                return accounts
        return self._tip_accounts or list(JITO_TIP_ACCOUNTS)

    async def get_random_tip_account(self) -> str:
        accounts = await self.get_tip_accounts()
        return random.choice(accounts)

    async def submit_bundle(self, serialized_transactions: List[str]) -> str:
        """
        Submit base64-encoded transactions as one bundle.

        Returns:
            The relay-assigned bundle id

        Raises:
            SwapError(BUNDLE_REJECTED): transport failure or relay error
        """
        if not serialized_transactions:
            raise SwapError(ErrorCode.BUNDLE_REJECTED, "Bundle has no transactions")

        response = await self._rpc_call("sendBundle", [serialized_transactions, {"encoding": "base64"}])
        self._bundles_submitted += 1

        if response and isinstance(response, dict):
            bundle_id = response.get("result")
            if bundle_id:
                Logger.info(f"[JITO] Bundle submitted: {bundle_id[:16]}...")
                return bundle_id
            error = response.get("error", {})
            Logger.warning(f"[JITO] Submit failed: {error}")
            raise SwapError(ErrorCode.BUNDLE_REJECTED, f"Bundle rejected by relay: {error}")
        raise SwapError(ErrorCode.BUNDLE_REJECTED, "Bundle submission failed: relay unreachable")

    async def get_bundle_status(self, bundle_id: str) -> BundleStatus:
        """
        Look up an in-flight bundle.

        Only "Landed" and "Failed" are terminal. Everything else, including
        "Invalid", an unknown id, or a failed request, reads as PENDING.
        """
        response = await self._rpc_call("getInflightBundleStatuses", [[bundle_id]])
        if not response or not isinstance(response, dict):
            return BundleStatus(bundle_id=bundle_id)

        result = response.get("result") or {}
        values = result.get("value") if isinstance(result, dict) else None
        if not values:
            return BundleStatus(bundle_id=bundle_id)

        entry = values[0] if isinstance(values, list) else values
        if not isinstance(entry, dict):
            return BundleStatus(bundle_id=bundle_id)

        state = entry.get("status", "")
        if state == "Landed":
            self._bundles_landed += 1
            return BundleStatus(bundle_id=bundle_id, state=BundleState.LANDED, landed_slot=entry.get("landed_slot"))
        if state == "Failed":
            return BundleStatus(bundle_id=bundle_id, state=BundleState.FAILED)
        return BundleStatus(bundle_id=bundle_id)

    def get_stats(self) -> Dict[str, int]:
        return {
            "bundles_submitted": self._bundles_submitted,
            "bundles_landed": self._bundles_landed
        }
