"""
dex/adapters/ - Pricing model implementations of the Pool contract.

Adapters:
- fixed_fee: proportional bps fee, size independent
- constant_product: Uniswap V2 style x*y=k
- concentrated: Uniswap V3 style single-range concentrated liquidity
"""

from typing import Any, Mapping, Sequence

from core.constants import ErrorCode, PoolKind
from core.exceptions import ValidationError
from core.ids import AssetId, PoolId
from dex.adapters.concentrated import ConcentratedLiquidityPool, ConcentratedState
from dex.adapters.constant_product import ConstantProductPool, ReserveState
from dex.adapters.fixed_fee import FixedFeePool, FixedFeeState
from dex.pool import Pool

# Pricing params go to the constructor, everything else to new_state()
_POOL_CLASSES: dict[PoolKind, tuple[type[Pool], tuple[str, ...]]] = {
    PoolKind.FIXED_FEE: (FixedFeePool, ("fee_bps",)),
    PoolKind.UNISWAP_V2: (ConstantProductPool, ("fee_bps",)),
    PoolKind.UNISWAP_V3: (ConcentratedLiquidityPool, ("fee",)),
}


def build_pool(
    pool_id: PoolId,
    kind: PoolKind | str,
    assets: Sequence[AssetId],
    params: Mapping[str, Any] | None = None,
) -> tuple[Pool, Any]:
    """
    Build a pool implementation and its initial state.

    Args:
        pool_id: Identity of the new pool
        kind: PoolKind (or its string value)
        assets: Exactly two assets, in asset0/asset1 order
        params: Pricing params (fee_bps / fee) and state params
            (reserve0, reserve1, liquidity, sqrt_price_x96, price_ratio)

    Returns:
        (pool, state) pair; seed the state into a World before routing.
    """
    try:
        kind = PoolKind(kind)
    except ValueError:
        raise ValidationError(
            f"unsupported pool kind: {kind}",
            ErrorCode.VALIDATION_UNSUPPORTED_POOL_KIND,
            {"pool": pool_id, "kind": kind},
        ) from None

    if len(assets) != 2:
        raise ValidationError(
            f"pool {pool_id} needs exactly two assets, got {len(assets)}",
            ErrorCode.VALIDATION_INVALID_POOL_PARAMS,
            {"pool": pool_id},
        )

    pool_cls, pricing_keys = _POOL_CLASSES[kind]
    params = dict(params or {})
    pricing = {key: params.pop(key) for key in pricing_keys if key in params}
    if "price_ratio" in params:
        params["price_ratio"] = tuple(params["price_ratio"])

    try:
        pool = pool_cls(pool_id, assets[0], assets[1], **pricing)
        state = pool.new_state(**params)
    except TypeError as e:
        raise ValidationError(
            f"invalid params for {kind.value} pool {pool_id}: {e}",
            ErrorCode.VALIDATION_INVALID_POOL_PARAMS,
            {"pool": pool_id, "params": sorted(params)},
        ) from e
    return pool, state


__all__ = [
    "build_pool",
    "ConcentratedLiquidityPool",
    "ConcentratedState",
    "ConstantProductPool",
    "ReserveState",
    "FixedFeePool",
    "FixedFeeState",
]
