# PATH: core/models.py
"""
Core data models for ROUTESIM.

- Hop: declared (pool, asset_in, asset_out) intention, no amount
- Step: realized hop with actual input/output amounts
- Path: ordered, non-empty trace of Steps
- World: mutable ledger of asset holdings and per-pool state

WORLD CONTRACT:
  - Reading an unknown asset balance yields 0, never an error.
  - Pool state is never defaulted; a missing entry is UnseededPoolStateError.
  - The engine borrows a World for one call and never keeps a reference.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

from core.constants import ErrorCode
from core.exceptions import EmptyRouteError, UnseededPoolStateError, ValidationError
from core.ids import AssetId, PoolId
from core.math import validate_amount


# =============================================================================
# ROUTE MODELS
# =============================================================================

@dataclass(frozen=True)
class Hop:
    """One directed edge of intended travel through a pool."""
    pool: PoolId
    asset_in: AssetId
    asset_out: AssetId

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pool": self.pool.value,
            "asset_in": self.asset_in.value,
            "asset_out": self.asset_out.value,
        }


@dataclass(frozen=True)
class Step:
    """Realized record of one evaluated hop."""
    pool: PoolId
    asset_in: AssetId
    asset_out: AssetId
    amount_in: int
    amount_out: int

    @property
    def hop(self) -> Hop:
        return Hop(self.pool, self.asset_in, self.asset_out)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.hop.to_dict(),
            "amount_in": self.amount_in,
            "amount_out": self.amount_out,
        }


@dataclass(frozen=True)
class Path:
    """Ordered, non-empty sequence of Steps."""
    steps: Tuple[Step, ...]

    def __post_init__(self) -> None:
        if not self.steps:
            raise EmptyRouteError("path must contain at least one step")
        # Accept any sequence, store a tuple
        object.__setattr__(self, "steps", tuple(self.steps))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    @property
    def start_asset(self) -> AssetId:
        return self.steps[0].asset_in

    @property
    def end_asset(self) -> AssetId:
        return self.steps[-1].asset_out

    @property
    def amount_in(self) -> int:
        return self.steps[0].amount_in

    @property
    def amount_out(self) -> int:
        return self.steps[-1].amount_out

    def hops(self) -> List[Hop]:
        return [step.hop for step in self.steps]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_asset": self.start_asset.value,
            "end_asset": self.end_asset.value,
            "amount_in": self.amount_in,
            "amount_out": self.amount_out,
            "steps": [step.to_dict() for step in self.steps],
        }


# =============================================================================
# WORLD
# =============================================================================

@dataclass
class World:
    """
    Mutable ledger: per-asset holdings and per-pool internal state.

    Owned by the caller. Not thread-safe; callers serialize mutating
    engine calls against one World.
    """
    holdings: Dict[AssetId, int] = field(default_factory=dict)
    pool_states: Dict[PoolId, Any] = field(default_factory=dict)

    def balance(self, asset: AssetId) -> int:
        """Held amount of asset (0 if never credited)."""
        return self.holdings.get(asset, 0)

    def set_balance(self, asset: AssetId, amount: int) -> None:
        self.holdings[asset] = validate_amount(amount, "balance")

    def credit(self, asset: AssetId, amount: int) -> int:
        """Add amount to asset's holding. Returns the new balance."""
        validate_amount(amount, "credit")
        new_balance = self.balance(asset) + amount
        self.holdings[asset] = new_balance
        return new_balance

    def debit(self, asset: AssetId, amount: int) -> int:
        """
        Remove amount from asset's holding. Returns the new balance.

        Raises:
            ValidationError: amount exceeds the held balance
        """
        validate_amount(amount, "debit")
        held = self.balance(asset)
        if amount > held:
            raise ValidationError(
                f"debit of {amount} exceeds balance {held} for {asset}",
                ErrorCode.VALIDATION_INSUFFICIENT_BALANCE,
                {"asset": asset, "amount": amount, "balance": held},
            )
        self.holdings[asset] = held - amount
        return held - amount

    def seed_pool(self, pool: PoolId, state: Any) -> None:
        """Insert or replace the state entry for pool."""
        self.pool_states[pool] = state

    def has_pool_state(self, pool: PoolId) -> bool:
        return pool in self.pool_states

    def pool_state(self, pool: PoolId) -> Any:
        """Live (mutable) state for pool."""
        try:
            return self.pool_states[pool]
        except KeyError:
            raise UnseededPoolStateError(pool) from None

    def snapshot(self) -> "World":
        """Deep copy, safe to mutate independently."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "holdings": {asset.value: amount for asset, amount in sorted(self.holdings.items())},
            "pool_states": {pool.value: repr(state) for pool, state in sorted(self.pool_states.items())},
        }
