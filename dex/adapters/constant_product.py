"""
dex/adapters/constant_product.py - Uniswap V2 style x*y=k pool.

Pricing (fee taken on input, all integer math, rounds down):
    a   = amount_in * (10000 - fee_bps)
    out = a * reserve_out // (reserve_in * 10000 + a)

Reserves are updated in place: reserve_in += amount_in (fee stays in the
pool), reserve_out -= out.
"""

from dataclasses import dataclass

from core.constants import BPS_DENOMINATOR, DEFAULT_V2_FEE_BPS, ErrorCode, PoolKind
from core.exceptions import ValidationError
from core.ids import AssetId, PoolId
from core.math import validate_amount, validate_fee_bps
from dex.pool import Pool


@dataclass
class ReserveState:
    """Pool reserves, in asset0/asset1 order."""
    reserve0: int
    reserve1: int

    def __post_init__(self) -> None:
        validate_amount(self.reserve0, "reserve0")
        validate_amount(self.reserve1, "reserve1")

    @property
    def k(self) -> int:
        return self.reserve0 * self.reserve1


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int) -> int:
    """V2 getAmountOut with a bps fee. Empty reserves quote zero."""
    if amount_in == 0 or reserve_in == 0 or reserve_out == 0:
        return 0
    amount_in_with_fee = amount_in * (BPS_DENOMINATOR - fee_bps)
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * BPS_DENOMINATOR + amount_in_with_fee
    return numerator // denominator


class ConstantProductPool(Pool[ReserveState]):
    """Two-asset constant product market maker."""

    kind = PoolKind.UNISWAP_V2

    def __init__(
        self,
        pool_id: PoolId,
        asset0: AssetId,
        asset1: AssetId,
        fee_bps: int = DEFAULT_V2_FEE_BPS,
    ):
        super().__init__(pool_id, asset0, asset1)
        self.fee_bps = validate_fee_bps(fee_bps)

    def new_state(self, reserve0: int = 0, reserve1: int = 0) -> ReserveState:
        if (reserve0 == 0) != (reserve1 == 0):
            raise ValidationError(
                f"pool {self.identity()} reserves must both be zero or both positive",
                ErrorCode.VALIDATION_INVALID_POOL_PARAMS,
                {"reserve0": reserve0, "reserve1": reserve1},
            )
        return ReserveState(reserve0=reserve0, reserve1=reserve1)

    def swap(self, state: ReserveState, asset_in: AssetId, asset_out: AssetId, amount_in: int) -> int:
        if self.zero_for_one(asset_in):
            amount_out = get_amount_out(amount_in, state.reserve0, state.reserve1, self.fee_bps)
            state.reserve0 += amount_in
            state.reserve1 -= amount_out
        else:
            amount_out = get_amount_out(amount_in, state.reserve1, state.reserve0, self.fee_bps)
            state.reserve1 += amount_in
            state.reserve0 -= amount_out
        return amount_out

    def to_dict(self):
        return {**super().to_dict(), "fee_bps": self.fee_bps}
