"""
dex/ - Pool capability contract and pricing model adapters.
"""

from dex.pool import Pool
from dex.adapters import (
    ConcentratedLiquidityPool,
    ConstantProductPool,
    FixedFeePool,
    build_pool,
)

__all__ = [
    "Pool",
    "ConcentratedLiquidityPool",
    "ConstantProductPool",
    "FixedFeePool",
    "build_pool",
]
