"""
Input Validation
================
Pure checks run once, before any network call. Each raises a
ValidationError naming the offending field.
"""

import math
import re
from numbers import Real

from jito_swap.shared.execution.execution_result import ValidationError
from jito_swap.shared.execution.schemas import SwapRequest

# Base58 alphabet (no 0, O, I, l), 32 to 44 characters
MINT_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")

MAX_SLIPPAGE_BPS = 10_000


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_mint(value, field_name: str = "mint") -> None:
    if not isinstance(value, str) or not MINT_PATTERN.match(value):
        raise ValidationError(field_name, f"Invalid {field_name} address: {value!r}")


def validate_amount(value) -> None:
    if not _is_number(value) or not math.isfinite(value) or value <= 0:
        raise ValidationError("amount", f"Amount must be a positive finite number, got {value!r}")


def validate_slippage(value) -> None:
    if not _is_number(value) or not math.isfinite(value) or value < 0 or value > MAX_SLIPPAGE_BPS:
        raise ValidationError(
            "slippage_bps", f"Slippage must be between 0 and {MAX_SLIPPAGE_BPS} bps, got {value!r}"
        )


def validate_retries(value) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ValidationError("max_retries", f"Max retries must be a positive integer, got {value!r}")


def validate_swap_request(request: SwapRequest) -> None:
    validate_mint(request.input_mint, "input_mint")
    validate_mint(request.output_mint, "output_mint")
    validate_amount(request.amount)
    validate_slippage(request.slippage_bps)
    validate_retries(request.max_retries)
