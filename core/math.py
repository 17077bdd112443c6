# PATH: core/math.py
"""
Integer math utilities for ROUTESIM.

Amounts are plain Python ints in the asset's smallest unit. Floats are
rejected outright: a float amount is always a caller bug.
"""

from typing import Any

from core.constants import BPS_DENOMINATOR, ErrorCode
from core.exceptions import ValidationError


def validate_amount(value: Any, name: str = "amount") -> int:
    """
    Check that value is a non-negative int amount.

    Args:
        value: Candidate amount
        name: Field name for the error message

    Returns:
        The amount unchanged

    Raises:
        ValidationError: float, bool, non-int or negative input
    """
    if isinstance(value, float):
        raise ValidationError(
            f"Float values are not allowed for {name}: {value}",
            ErrorCode.VALIDATION_INVALID_AMOUNT,
            {name: value},
        )
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"{name} must be an int, got {type(value).__name__}",
            ErrorCode.VALIDATION_INVALID_AMOUNT,
            {name: value},
        )
    if value < 0:
        raise ValidationError(
            f"{name} must be non-negative, got {value}",
            ErrorCode.VALIDATION_INVALID_AMOUNT,
            {name: value},
        )
    return value


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator)."""
    if denominator == 0:
        raise ZeroDivisionError("mul_div denominator is zero")
    return (a * b) // denominator


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """ceil(a * b / denominator) for non-negative operands."""
    if denominator == 0:
        raise ZeroDivisionError("mul_div denominator is zero")
    return (a * b + denominator - 1) // denominator


def apply_fee_bps(amount: int, fee_bps: int) -> int:
    """
    Amount left after a proportional fee, rounded down.

    Example: apply_fee_bps(250_000, 100) -> 247_500
    """
    return mul_div(amount, BPS_DENOMINATOR - fee_bps, BPS_DENOMINATOR)


def validate_fee_bps(fee_bps: Any, denominator: int = BPS_DENOMINATOR) -> int:
    """Fee must be an int in [0, denominator)."""
    if not isinstance(fee_bps, int) or isinstance(fee_bps, bool) or not 0 <= fee_bps < denominator:
        raise ValidationError(
            f"fee must be an int in [0, {denominator}), got {fee_bps!r}",
            ErrorCode.VALIDATION_INVALID_POOL_PARAMS,
            {"fee": fee_bps},
        )
    return fee_bps
