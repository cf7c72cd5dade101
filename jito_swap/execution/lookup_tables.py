"""
Address Lookup Table Resolution
===============================
Best-effort, concurrent fetch of the lookup tables a swap references.

A table that is missing, malformed, or whose fetch fails is dropped and
the swap goes on with the rest. Order of the requested addresses is kept.
"""

import asyncio
from typing import List, Optional

from solders.address_lookup_table_account import AddressLookupTable, AddressLookupTableAccount
from solders.pubkey import Pubkey

from jito_swap.shared.system.logging import Logger


def decode_lookup_table(key: Pubkey, data: bytes) -> AddressLookupTableAccount:
    table = AddressLookupTable.deserialize(data)
    return AddressLookupTableAccount(key=key, addresses=list(table.addresses))


class LookupTableResolver:

    def __init__(self, ledger):
        self.ledger = ledger

    async def resolve(self, addresses: List[str]) -> List[AddressLookupTableAccount]:
        """Fetch every table concurrently; return the resolvable ones."""
        if not addresses:
            return []

        results = await asyncio.gather(
            *(self._fetch(address) for address in addresses),
            return_exceptions=True,
        )

        tables = []
        for address, result in zip(addresses, results):
            if isinstance(result, BaseException):
                Logger.warning(f"[ALT] Failed to fetch lookup table {address}: {result}")
            elif result is None:
                Logger.warning(f"[ALT] Lookup table not found: {address}")
            else:
                tables.append(result)

        if not tables:
            Logger.warning(f"[ALT] None of the {len(addresses)} lookup tables could be resolved")
        else:
            Logger.info(f"[ALT] Resolved {len(tables)}/{len(addresses)} lookup tables")
        return tables

    async def _fetch(self, address: str) -> Optional[AddressLookupTableAccount]:
        key = Pubkey.from_string(address)
        data = await self.ledger.get_account_data(key)
        if not data:
            return None
        return decode_lookup_table(key, data)
