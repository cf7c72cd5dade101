"""
Jupiter Route Client
====================
Quote and swap-instruction retrieval from the Jupiter v6 API.

One request per call and no retry: the orchestrator's outer loop owns
retrying, with a wider slippage each time.

Usage:
    client = JupiterClient(http, ledger)
    info = await client.get_asset_info(Settings.USDC_MINT)
    quote = await client.get_quote(input_mint, output_mint, 1_000_000, 100)
    payload = await client.get_swap_instructions(quote, str(wallet.pubkey))
"""

import math
from decimal import Decimal
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from config.settings import Settings
from jito_swap.shared.execution.execution_result import ErrorCode, SwapError
from jito_swap.shared.execution.schemas import AssetInfo, SwapInstructionsPayload
from jito_swap.shared.infrastructure.ledger_client import LedgerClient
from jito_swap.shared.system.logging import Logger


def to_atomic_amount(amount: float, decimals: int) -> int:
    """Scale a human amount into base units, truncating any remainder."""
    return int(Decimal(str(amount)) * (Decimal(10) ** decimals))


class JupiterClient:
    """Jupiter Aggregator v6 client bound to an explicit httpx handle."""

    def __init__(self, http: httpx.AsyncClient, ledger: LedgerClient, base_url: Optional[str] = None):
        self.http = http
        self.ledger = ledger
        self.base_url = (base_url or Settings.JUPITER_API_URL).rstrip("/")

    def _get_headers(self) -> dict:
        return {"Accept": "application/json"}

    async def get_asset_info(self, mint: str) -> AssetInfo:
        """Read the mint's decimals from its jsonParsed account."""
        try:
            value = await self.ledger.get_parsed_account(mint)
        except SwapError as e:
            raise SwapError(ErrorCode.ASSET_LOOKUP, f"Failed to fetch token info for {mint}: {e.message}") from e

        try:
            decimals = value["data"]["parsed"]["info"]["decimals"]
        except (KeyError, TypeError):
            raise SwapError(ErrorCode.ASSET_LOOKUP, f"Failed to fetch token info for {mint}") from None

        if not isinstance(decimals, int) or isinstance(decimals, bool):
            raise SwapError(ErrorCode.ASSET_LOOKUP, f"Unexpected decimals for {mint}: {decimals!r}")
        return AssetInfo(decimals=decimals)

    async def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount_atomic: int,
        slippage_bps: float,
    ) -> Dict[str, Any]:
        """
        Request a route for `amount_atomic` base units of `input_mint`.

        Fractional slippage is rounded up before sending.

        Raises:
            SwapError(NO_ROUTE): the response carries no routePlan
            SwapError(TRANSPORT): network failure or non-2xx status
        """
        params = {
            "inputMint": input_mint,
            "outputMint": output_mint,
            "amount": str(amount_atomic),
            "slippageBps": str(math.ceil(slippage_bps)),
        }
        Logger.info(f"[QUOTE] Requesting route {input_mint[:6]}.. -> {output_mint[:6]}.. ({params['slippageBps']} bps)")

        data = await self._request("GET", f"{self.base_url}/quote", params=params)

        if not isinstance(data, dict) or not data.get("routePlan"):
            raise SwapError(ErrorCode.NO_ROUTE, "No valid routes found in the quote response")

        Logger.debug(f"[QUOTE] outAmount={data.get('outAmount')} hops={len(data['routePlan'])}")
        return data

    async def get_swap_instructions(self, quote: Dict[str, Any], user_public_key: str) -> SwapInstructionsPayload:
        """
        Raises:
            SwapError(INSTRUCTION_FETCH): empty body, `error` field, or malformed payload
            SwapError(TRANSPORT): network failure or non-2xx status
        """
        body = {
            "quoteResponse": quote,
            "userPublicKey": user_public_key,
            "wrapAndUnwrapSol": True,
        }
        data = await self._request("POST", f"{self.base_url}/swap-instructions", json=body)

        if not data:
            raise SwapError(ErrorCode.INSTRUCTION_FETCH, "Empty swap-instructions response")
        if isinstance(data, dict) and data.get("error"):
            raise SwapError(ErrorCode.INSTRUCTION_FETCH, f"Failed to get swap instructions: {data['error']}")

        try:
            payload = SwapInstructionsPayload.model_validate(data)
        except PydanticValidationError as e:
            raise SwapError(ErrorCode.INSTRUCTION_FETCH, f"Malformed swap-instructions response: {e}") from e

        Logger.info(
            f"[QUOTE] Instructions received: {len(payload.setup_instructions)} setup, "
            f"{len(payload.address_lookup_table_addresses)} lookup tables"
        )
        return payload

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self.http.request(method, url, headers=self._get_headers(), **kwargs)
        except httpx.HTTPError as e:
            raise SwapError(ErrorCode.TRANSPORT, f"Jupiter request failed: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            raise SwapError(ErrorCode.TRANSPORT, f"Jupiter API error: {response.status_code} - {response.text}")

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise SwapError(ErrorCode.TRANSPORT, f"Jupiter returned invalid JSON: {e}") from e
