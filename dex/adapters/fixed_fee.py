"""
dex/adapters/fixed_fee.py - Proportional fee pool.

Output is the input minus a flat fee in basis points, independent of
size. Useful as a price-neutral venue and in backtests.
"""

from dataclasses import dataclass, field
from typing import Dict

from core.constants import PoolKind
from core.ids import AssetId, PoolId
from core.math import apply_fee_bps, validate_fee_bps
from dex.pool import Pool


@dataclass
class FixedFeeState:
    """Fees retained by the pool, per input asset."""
    fees: Dict[AssetId, int] = field(default_factory=dict)


class FixedFeePool(Pool[FixedFeeState]):
    """amount_out = amount_in * (10000 - fee_bps) // 10000"""

    kind = PoolKind.FIXED_FEE

    def __init__(self, pool_id: PoolId, asset0: AssetId, asset1: AssetId, fee_bps: int):
        super().__init__(pool_id, asset0, asset1)
        self.fee_bps = validate_fee_bps(fee_bps)

    def new_state(self) -> FixedFeeState:
        return FixedFeeState()

    def swap(self, state: FixedFeeState, asset_in: AssetId, asset_out: AssetId, amount_in: int) -> int:
        amount_out = apply_fee_bps(amount_in, self.fee_bps)
        state.fees[asset_in] = state.fees.get(asset_in, 0) + (amount_in - amount_out)
        return amount_out

    def to_dict(self):
        return {**super().to_dict(), "fee_bps": self.fee_bps}
