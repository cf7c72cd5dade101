"""
Lookup Table Fallback
=====================
Run a step with the resolved lookup tables; if it fails, run it once
more without any. Shared by simulation and message compilation.
"""

import inspect
from typing import Any, Callable, List

from solders.address_lookup_table_account import AddressLookupTableAccount

from jito_swap.shared.system.logging import Logger


async def with_lookup_table_fallback(
    attempt: Callable[[List[AddressLookupTableAccount]], Any],
    lookup_tables: List[AddressLookupTableAccount],
    label: str = "step",
) -> Any:
    """
    Args:
        attempt: callable taking the table list; may be sync or async
        lookup_tables: resolved tables for the first try
        label: name used in log lines

    Raises:
        The first failure when no tables were attached, otherwise the
        failure of the table-less retry.
    """
    try:
        return await _call(attempt, lookup_tables)
    except Exception as e:
        if not lookup_tables:
            raise
        Logger.warning(f"[ALT] {label} failed with {len(lookup_tables)} lookup tables ({e}), retrying without them")

    return await _call(attempt, [])


async def _call(attempt, lookup_tables):
    result = attempt(lookup_tables)
    if inspect.isawaitable(result):
        result = await result
    return result
