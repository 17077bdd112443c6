"""
dex/pool.py - Pool capability contract.

Every pricing model implements Pool once. The engine is written against
this interface only, so new pool kinds plug in without engine changes.

POOL CONTRACT:
==============
  identity() -> PoolId
      Stable identifier of this pool instance.
  supports(asset_in, asset_out) -> bool
      Whether this pool converts asset_in into asset_out.
  swap(state, asset_in, asset_out, amount_in) -> int
      Pure function of the pool's own state and the direction. May update
      `state` in place. Must not touch anything else, must return a
      non-negative int and must be deterministic for a given state/input.

State objects are owned by World, not by the pool. They must support
copy.deepcopy (simulation works on scratch copies) and compare by value.
==============
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Tuple, TypeVar

from core.constants import ErrorCode, PoolKind
from core.exceptions import ValidationError
from core.ids import AssetId, PoolId

S = TypeVar("S")


class Pool(ABC, Generic[S]):
    """Abstract pricing model bound to one pool identity and two assets."""

    kind: PoolKind

    def __init__(self, pool_id: PoolId, asset0: AssetId, asset1: AssetId):
        if asset0 == asset1:
            raise ValidationError(
                f"pool {pool_id} needs two distinct assets, got {asset0} twice",
                ErrorCode.VALIDATION_INVALID_POOL_PARAMS,
                {"pool": pool_id, "asset": asset0},
            )
        self._pool_id = pool_id
        self.asset0 = asset0
        self.asset1 = asset1

    def identity(self) -> PoolId:
        return self._pool_id

    def assets(self) -> Tuple[AssetId, AssetId]:
        return (self.asset0, self.asset1)

    def supports(self, asset_in: AssetId, asset_out: AssetId) -> bool:
        """Both directions between the pool's two assets."""
        return (asset_in == self.asset0 and asset_out == self.asset1) or (
            asset_in == self.asset1 and asset_out == self.asset0
        )

    def zero_for_one(self, asset_in: AssetId) -> bool:
        """True when asset_in is the pool's asset0."""
        return asset_in == self.asset0

    @abstractmethod
    def new_state(self, **params: Any) -> S:
        """Build an initial state value for this pool kind."""
        pass

    @abstractmethod
    def swap(self, state: S, asset_in: AssetId, asset_out: AssetId, amount_in: int) -> int:
        """Price amount_in against state, updating it in place."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pool": self._pool_id.value,
            "kind": self.kind.value,
            "assets": [self.asset0.value, self.asset1.value],
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._pool_id}, {self.asset0}, {self.asset1})"
