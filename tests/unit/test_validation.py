"""
Input Validation Tests
======================
Every malformed field is rejected by name; valid requests pass.
"""

import math

import pytest

from jito_swap.execution.validation import (
    validate_amount,
    validate_mint,
    validate_retries,
    validate_slippage,
    validate_swap_request,
)
from jito_swap.shared.execution.execution_result import ErrorCode, ValidationError
from jito_swap.shared.execution.schemas import SwapRequest

WSOL = "So11111111111111111111111111111111111111112"
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


class TestMintValidation:

    @pytest.mark.parametrize("mint", [WSOL, USDC, "1" * 32, "z" * 44])
    def test_accepts_base58_addresses(self, mint):
        validate_mint(mint)

    @pytest.mark.parametrize("mint", [
        "",
        "1" * 31,              # too short
        "1" * 45,              # too long
        "0" + "1" * 40,        # 0 is not base58
        "O" + "1" * 40,        # neither is O
        "I" + "1" * 40,        # nor I
        "l" + "1" * 40,        # nor l
        None,
        12345,
    ])
    def test_rejects_malformed_addresses(self, mint):
        with pytest.raises(ValidationError) as exc:
            validate_mint(mint, "input_mint")
        assert exc.value.field == "input_mint"
        assert exc.value.code == ErrorCode.VALIDATION


class TestAmountValidation:

    @pytest.mark.parametrize("amount", [0.01, 1, 1_000_000, 1e-9])
    def test_accepts_positive_finite(self, amount):
        validate_amount(amount)

    @pytest.mark.parametrize("amount", [0, -1, -0.5, math.inf, math.nan, "1", None, True])
    def test_rejects_invalid(self, amount):
        with pytest.raises(ValidationError) as exc:
            validate_amount(amount)
        assert exc.value.field == "amount"


class TestSlippageValidation:

    @pytest.mark.parametrize("bps", [0, 1, 50, 100, 10_000, 12.5])
    def test_accepts_range(self, bps):
        validate_slippage(bps)

    @pytest.mark.parametrize("bps", [-1, 10_001, math.nan, "100", None])
    def test_rejects_out_of_range(self, bps):
        with pytest.raises(ValidationError) as exc:
            validate_slippage(bps)
        assert exc.value.field == "slippage_bps"


class TestRetryValidation:

    @pytest.mark.parametrize("retries", [1, 5, 100])
    def test_accepts_positive_integers(self, retries):
        validate_retries(retries)

    @pytest.mark.parametrize("retries", [0, -1, 1.5, 2.0, True, "3", None])
    def test_rejects_non_positive_or_non_integer(self, retries):
        with pytest.raises(ValidationError) as exc:
            validate_retries(retries)
        assert exc.value.field == "max_retries"


class TestSwapRequestValidation:

    def test_valid_request_passes(self):
        validate_swap_request(SwapRequest(WSOL, USDC, 0.01, 100, 5))

    @pytest.mark.parametrize("kwargs,field", [
        ({"input_mint": "bad"}, "input_mint"),
        ({"output_mint": "bad"}, "output_mint"),
        ({"amount": 0}, "amount"),
        ({"slippage_bps": 20_000}, "slippage_bps"),
        ({"max_retries": 0}, "max_retries"),
    ])
    def test_names_offending_field(self, kwargs, field):
        params = {"input_mint": WSOL, "output_mint": USDC, "amount": 0.01, "slippage_bps": 100, "max_retries": 5}
        params.update(kwargs)
        with pytest.raises(ValidationError) as exc:
            validate_swap_request(SwapRequest(**params))
        assert exc.value.field == field
