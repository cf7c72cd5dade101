"""
Ledger Client
=============
Thin async access to a Solana RPC node.

Blockhashes and raw account bytes go through solana-py's AsyncClient.
Calls that need options the SDK does not expose (simulation with
blockhash replacement, jsonParsed mint accounts, prioritization fees)
are sent as raw JSON-RPC over the shared httpx client.

No retry policy lives here: every failure surfaces as SwapError(TRANSPORT)
and the caller decides.
"""

import base64
from typing import Any, Dict, List, Optional

import httpx
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from jito_swap.shared.execution.execution_result import ErrorCode, SwapError
from jito_swap.shared.system.logging import Logger


class LedgerClient:
    """
    Usage:
        async with httpx.AsyncClient(timeout=30) as http:
            ledger = LedgerClient(http, Settings.RPC_URL)
            blockhash = await ledger.get_latest_blockhash()
    """

    def __init__(self, http: httpx.AsyncClient, rpc_url: str, rpc_client: Optional[AsyncClient] = None):
        self.http = http
        self.rpc_url = rpc_url
        self.rpc = rpc_client or AsyncClient(rpc_url)
        self._request_id = 0

    async def _rpc_call(self, method: str, params: Optional[list] = None) -> Any:
        """POST a JSON-RPC request and return its `result` member."""
        self._request_id += 1
        payload = {"jsonrpc": "2.0", "id": self._request_id, "method": method, "params": params or []}

        try:
            response = await self.http.post(self.rpc_url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise SwapError(ErrorCode.TRANSPORT, f"{method} request failed: {e}") from e
        except ValueError as e:
            raise SwapError(ErrorCode.TRANSPORT, f"{method} returned invalid JSON: {e}") from e

        if not isinstance(body, dict):
            raise SwapError(ErrorCode.TRANSPORT, f"{method} returned an unexpected body")
        if body.get("error"):
            raise SwapError(ErrorCode.TRANSPORT, f"{method} RPC error: {body['error']}")
        return body.get("result")

    # ═══════════════════════════════════════════════════════════════════
    # SDK-BACKED CALLS
    # ═══════════════════════════════════════════════════════════════════

    async def get_latest_blockhash(self, commitment: Commitment = Confirmed) -> Hash:
        try:
            resp = await self.rpc.get_latest_blockhash(commitment)
        except Exception as e:
            raise SwapError(ErrorCode.TRANSPORT, f"getLatestBlockhash failed: {e}") from e
        return resp.value.blockhash

    async def get_account_data(self, pubkey: Pubkey) -> Optional[bytes]:
        """Raw account bytes, or None when the account does not exist."""
        try:
            resp = await self.rpc.get_account_info(pubkey)
        except Exception as e:
            raise SwapError(ErrorCode.TRANSPORT, f"getAccountInfo failed for {pubkey}: {e}") from e
        if resp.value is None:
            return None
        return bytes(resp.value.data)

    # ═══════════════════════════════════════════════════════════════════
    # RAW JSON-RPC CALLS
    # ═══════════════════════════════════════════════════════════════════

    async def get_parsed_account(self, address: str) -> Optional[Dict]:
        """Account info with jsonParsed encoding (`value` member), or None."""
        result = await self._rpc_call("getAccountInfo", [address, {"encoding": "jsonParsed"}])
        if not result:
            return None
        return result.get("value")

    async def simulate_transaction(self, tx: VersionedTransaction) -> Dict:
        """
        Dry-run a transaction.

        Signatures are not verified and the blockhash is replaced by the
        node, so placeholder signatures are fine.

        Returns:
            The `value` member: {"err", "logs", "unitsConsumed", ...}
        """
        encoded = base64.b64encode(bytes(tx)).decode("utf-8")
        config = {"encoding": "base64", "sigVerify": False, "replaceRecentBlockhash": True}
        result = await self._rpc_call("simulateTransaction", [encoded, config])
        if not result or "value" not in result:
            raise SwapError(ErrorCode.TRANSPORT, "simulateTransaction returned no value")
        return result["value"]

    async def get_recent_prioritization_fees(self) -> List[int]:
        """Per-slot prioritization fees, oldest first."""
        result = await self._rpc_call("getRecentPrioritizationFees", [])
        fees = []
        for entry in result or []:
            fee = entry.get("prioritizationFee") if isinstance(entry, dict) else None
            if isinstance(fee, (int, float)):
                fees.append(fee)
        return fees

    async def close(self) -> None:
        await self.rpc.close()
        Logger.debug("[RPC] Ledger client closed")
