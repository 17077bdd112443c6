# PATH: core/ids.py
"""
Identifier handles for assets and pools.

Plain value types: equality and hash come from the wrapped integer (and
the class, so AssetId(1) != PoolId(1)).
"""

from dataclasses import dataclass

from core.constants import ASSET_ID_MAX, POOL_ID_MAX, ErrorCode
from core.exceptions import ValidationError


def _check_id(kind: str, value: object, upper: int) -> None:
    # bool is an int subclass; reject it explicitly
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"{kind} must wrap an int, got {type(value).__name__}",
            ErrorCode.VALIDATION_INVALID_ID,
            {"value": value},
        )
    if value < 0 or value > upper:
        raise ValidationError(
            f"{kind} out of range [0, {upper}]: {value}",
            ErrorCode.VALIDATION_INVALID_ID,
            {"value": value},
        )


@dataclass(frozen=True, order=True)
class AssetId:
    """Handle for a fungible asset (16-bit)."""
    value: int

    def __post_init__(self) -> None:
        _check_id("AssetId", self.value, ASSET_ID_MAX)

    def __str__(self) -> str:
        return f"AssetId({self.value})"


@dataclass(frozen=True, order=True)
class PoolId:
    """Handle for a liquidity pool (32-bit)."""
    value: int

    def __post_init__(self) -> None:
        _check_id("PoolId", self.value, POOL_ID_MAX)

    def __str__(self) -> str:
        return f"PoolId({self.value})"
