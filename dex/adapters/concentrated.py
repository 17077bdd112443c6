"""
dex/adapters/concentrated.py - Uniswap V3 style concentrated liquidity pool.

Models the single active liquidity range: the swap moves sqrt price along
a constant-L curve and never crosses an initialized tick. Fee is in
hundredths of a bip (V3_FEE_TIERS), taken from the input.

Math (Q64.96 sqrt prices, integer only):
  token0 in:  sqrtP' = ceil(L*Q96*sqrtP / (L*Q96 + a*sqrtP))
              out1   = L * (sqrtP - sqrtP') // Q96
  token1 in:  sqrtP' = sqrtP + a*Q96 // L
              out0   = L*Q96*(sqrtP' - sqrtP) // (sqrtP' * sqrtP)
where a is the input net of fee.
"""

from dataclasses import dataclass
from math import isqrt

from core.constants import Q96, V3_FEE_DENOMINATOR, V3_FEE_TIERS, ErrorCode, PoolKind
from core.exceptions import ValidationError
from core.ids import AssetId, PoolId
from core.math import mul_div, mul_div_rounding_up, validate_amount
from dex.pool import Pool


@dataclass
class ConcentratedState:
    """Current sqrt price (Q64.96) and in-range liquidity."""
    sqrt_price_x96: int
    liquidity: int

    def __post_init__(self) -> None:
        validate_amount(self.liquidity, "liquidity")
        if not isinstance(self.sqrt_price_x96, int) or self.sqrt_price_x96 <= 0:
            raise ValidationError(
                f"sqrt_price_x96 must be a positive int, got {self.sqrt_price_x96!r}",
                ErrorCode.VALIDATION_INVALID_POOL_PARAMS,
                {"sqrt_price_x96": self.sqrt_price_x96},
            )


def sqrt_price_x96_from_ratio(amount1: int, amount0: int) -> int:
    """sqrt(amount1 / amount0) in Q64.96, rounded down."""
    if amount0 <= 0 or amount1 <= 0:
        raise ValidationError(
            "price ratio needs two positive amounts",
            ErrorCode.VALIDATION_INVALID_POOL_PARAMS,
            {"amount0": amount0, "amount1": amount1},
        )
    return isqrt((amount1 << 192) // amount0)


def next_sqrt_price_from_amount0(sqrt_price_x96: int, liquidity: int, amount: int) -> int:
    """Price after adding amount of token0 (price goes down, rounds up)."""
    numerator1 = liquidity << 96
    return mul_div_rounding_up(numerator1, sqrt_price_x96, numerator1 + amount * sqrt_price_x96)


def next_sqrt_price_from_amount1(sqrt_price_x96: int, liquidity: int, amount: int) -> int:
    """Price after adding amount of token1 (price goes up, rounds down)."""
    return sqrt_price_x96 + mul_div(amount, Q96, liquidity)


def amount0_delta(sqrt_a: int, sqrt_b: int, liquidity: int) -> int:
    if sqrt_a > sqrt_b:
        sqrt_a, sqrt_b = sqrt_b, sqrt_a
    return mul_div(liquidity << 96, sqrt_b - sqrt_a, sqrt_b * sqrt_a)


def amount1_delta(sqrt_a: int, sqrt_b: int, liquidity: int) -> int:
    if sqrt_a > sqrt_b:
        sqrt_a, sqrt_b = sqrt_b, sqrt_a
    return mul_div(liquidity, sqrt_b - sqrt_a, Q96)


class ConcentratedLiquidityPool(Pool[ConcentratedState]):
    """Single-range concentrated liquidity pool."""

    kind = PoolKind.UNISWAP_V3

    def __init__(self, pool_id: PoolId, asset0: AssetId, asset1: AssetId, fee: int = 3000):
        super().__init__(pool_id, asset0, asset1)
        if fee not in V3_FEE_TIERS:
            raise ValidationError(
                f"fee {fee} is not a V3 fee tier {V3_FEE_TIERS}",
                ErrorCode.VALIDATION_INVALID_POOL_PARAMS,
                {"fee": fee},
            )
        self.fee = fee

    def new_state(
        self,
        liquidity: int = 0,
        sqrt_price_x96: int | None = None,
        price_ratio: tuple[int, int] | None = None,
    ) -> ConcentratedState:
        """
        Build state from an explicit sqrt price or an (amount1, amount0) ratio.

        Defaults to price 1.0 when neither is given.
        """
        if sqrt_price_x96 is None:
            sqrt_price_x96 = sqrt_price_x96_from_ratio(*price_ratio) if price_ratio else Q96
        return ConcentratedState(sqrt_price_x96=sqrt_price_x96, liquidity=liquidity)

    def swap(self, state: ConcentratedState, asset_in: AssetId, asset_out: AssetId, amount_in: int) -> int:
        if state.liquidity == 0:
            return 0

        amount_less_fee = mul_div(amount_in, V3_FEE_DENOMINATOR - self.fee, V3_FEE_DENOMINATOR)
        if amount_less_fee == 0:
            return 0

        sqrt_before = state.sqrt_price_x96
        if self.zero_for_one(asset_in):
            sqrt_after = next_sqrt_price_from_amount0(sqrt_before, state.liquidity, amount_less_fee)
            amount_out = amount1_delta(sqrt_after, sqrt_before, state.liquidity)
        else:
            sqrt_after = next_sqrt_price_from_amount1(sqrt_before, state.liquidity, amount_less_fee)
            amount_out = amount0_delta(sqrt_before, sqrt_after, state.liquidity)

        state.sqrt_price_x96 = sqrt_after
        return amount_out

    def to_dict(self):
        return {**super().to_dict(), "fee": self.fee}
