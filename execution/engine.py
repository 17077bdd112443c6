# PATH: execution/engine.py
"""
Swap execution engine.

SWAP ENGINE CONTRACT:
=====================

apply_swap(world, pool, asset_in, asset_out, amount_in) -> amount_out
  Mutating, single hop. Caps the swapped amount at the held balance of
  asset_in. A zero capped amount returns 0 without pricing. Otherwise:
  debit asset_in, price against the LIVE pool state, credit asset_out.
  No rollback once pricing has returned.

execute_path(world, [(hop, amount), ...]) -> Path
  Mutating, multi hop. Each hop runs through apply_swap with its own
  requested amount. Steps record the REQUESTED amount (not the capped
  one) and the realized output.

simulate_chained(world, hops, first_in, cap_first_hop) -> Path
  Read-only, multi hop. Pricing runs against call-scoped deep copies of
  pool state, seeded lazily per pool. Only the first hop may be capped
  (at the start asset's holding); each later hop takes the previous
  output. A zero flowing amount short-circuits pricing. `world` is left
  unchanged by value.

Validation (all entry points, before any mutation):
  - route non-empty                   EmptyRouteError
  - hop[i].asset_in == hop[i-1].out   PathDiscontinuityError
  - implementation registered         UnknownPoolImplementationError
  - pool state seeded in world        UnseededPoolStateError
  - pool supports the direction       UnsupportedDirectionError

Single-threaded; the engine keeps no reference to `world` across calls.
=====================
"""

import copy
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from core.constants import ErrorCode, RunMode
from core.exceptions import (
    EmptyRouteError,
    PathDiscontinuityError,
    RouteSimError,
    UnknownPoolImplementationError,
    UnseededPoolStateError,
    UnsupportedDirectionError,
    ValidationError,
)
from core.ids import AssetId, PoolId
from core.logging import get_logger, log_error, log_path, log_step
from core.math import validate_amount
from core.models import Hop, Path, Step, World
from dex.pool import Pool

logger = get_logger(__name__)

SizedHop = Tuple[Hop, int]


class SwapEngine:
    """Evaluates routes against a World using a fixed set of pool implementations."""

    def __init__(self, pools: Mapping[PoolId, Pool], cap_first_hop: bool = True):
        self.pools = pools
        self.cap_first_hop = cap_first_hop

    @classmethod
    def from_config(cls, pools: Mapping[PoolId, Pool], config: Any) -> "SwapEngine":
        """Engine with defaults taken from an EngineConfig."""
        return cls(pools, cap_first_hop=config.cap_first_hop)

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def _fail(self, error: RouteSimError) -> None:
        log_error(logger, error.code.value, error.message, **error.details)
        raise error

    def pool(self, pool_id: PoolId) -> Pool:
        """Implementation for pool_id."""
        impl = self.pools.get(pool_id)
        if impl is None:
            self._fail(UnknownPoolImplementationError(pool_id))
        return impl

    def _check_hop(self, world: World, pool_id: PoolId, asset_in: AssetId, asset_out: AssetId) -> Pool:
        impl = self.pool(pool_id)
        if not world.has_pool_state(pool_id):
            self._fail(UnseededPoolStateError(pool_id))
        if not impl.supports(asset_in, asset_out):
            self._fail(UnsupportedDirectionError(pool_id, asset_in, asset_out))
        return impl

    def validate_route(self, world: World, hops: Sequence[Hop]) -> None:
        """
        Check route shape and required state without touching `world`.

        Raises the first violation found, walking hops in order.
        """
        if not hops:
            self._fail(EmptyRouteError())

        last_asset = hops[0].asset_in
        for index, hop in enumerate(hops):
            if hop.asset_in != last_asset:
                self._fail(PathDiscontinuityError(index, last_asset, hop.asset_in))
            self._check_hop(world, hop.pool, hop.asset_in, hop.asset_out)
            last_asset = hop.asset_out

    @staticmethod
    def _check_output(pool_id: PoolId, amount_out: Any) -> int:
        if not isinstance(amount_out, int) or isinstance(amount_out, bool) or amount_out < 0:
            raise ValidationError(
                f"pool {pool_id} returned invalid output {amount_out!r}",
                ErrorCode.POOL_INVALID_OUTPUT,
                {"pool": pool_id, "amount_out": amount_out},
            )
        return amount_out

    # =========================================================================
    # EXECUTION (MUTATING)
    # =========================================================================

    def _swap_live(
        self,
        world: World,
        pool_id: PoolId,
        asset_in: AssetId,
        asset_out: AssetId,
        amount_in: int,
    ) -> int:
        # State is keyed by the hop's pool id, never impl.identity()
        impl = self.pools[pool_id]
        amount = min(amount_in, world.balance(asset_in))
        if amount == 0:
            return 0

        world.debit(asset_in, amount)
        amount_out = impl.swap(world.pool_state(pool_id), asset_in, asset_out, amount)
        world.credit(asset_out, self._check_output(pool_id, amount_out))
        return amount_out

    def apply_swap(
        self,
        world: World,
        pool: PoolId,
        asset_in: AssetId,
        asset_out: AssetId,
        amount_in: int,
    ) -> int:
        """
        Swap up to amount_in of asset_in for asset_out against the live World.

        Args:
            world: Ledger to mutate
            pool: Pool to trade through
            asset_in: Asset debited
            asset_out: Asset credited
            amount_in: Requested input; capped at the held balance

        Returns:
            Output amount credited (0 when nothing is held)
        """
        validate_amount(amount_in, "amount_in")
        self._check_hop(world, pool, asset_in, asset_out)
        return self._swap_live(world, pool, asset_in, asset_out, amount_in)

    def execute_path(self, world: World, plan: Sequence[SizedHop]) -> Path:
        """
        Execute every hop of plan in order, each with its own input amount.

        The whole plan is validated before the first swap, so a bad route
        never leaves a partially applied World behind.
        """
        hops = [hop for hop, _ in plan]
        self.validate_route(world, hops)
        for _, amount in plan:
            validate_amount(amount, "amount_in")

        steps = []
        for index, (hop, amount) in enumerate(plan):
            amount_out = self._swap_live(world, hop.pool, hop.asset_in, hop.asset_out, amount)
            step = Step(hop.pool, hop.asset_in, hop.asset_out, amount, amount_out)
            log_step(logger, step, RunMode.EXECUTE.value, index)
            steps.append(step)

        path = Path(tuple(steps))
        log_path(logger, path, RunMode.EXECUTE.value)
        return path

    # =========================================================================
    # SIMULATION (READ-ONLY)
    # =========================================================================

    def simulate_chained(
        self,
        world: World,
        hops: Sequence[Hop],
        first_in: int,
        cap_first_hop: Optional[bool] = None,
    ) -> Path:
        """
        Evaluate hops with amounts chained from each previous output.

        Args:
            world: Ledger to read (never mutated)
            hops: Route to evaluate
            first_in: Input amount for the first hop
            cap_first_hop: Cap first_in at the start asset's holding
                (None uses the engine default)

        Returns:
            Path mirroring the realized flow through the route
        """
        validate_amount(first_in, "first_in")
        self.validate_route(world, hops)
        if cap_first_hop is None:
            cap_first_hop = self.cap_first_hop

        start_asset = hops[0].asset_in
        amount_in = min(first_in, world.balance(start_asset)) if cap_first_hop else first_in

        scratch: Dict[PoolId, Any] = {}
        steps = []
        for index, hop in enumerate(hops):
            impl = self.pools[hop.pool]
            if hop.pool not in scratch:
                scratch[hop.pool] = copy.deepcopy(world.pool_state(hop.pool))

            if amount_in == 0:
                amount_out = 0
            else:
                amount_out = self._check_output(
                    hop.pool,
                    impl.swap(scratch[hop.pool], hop.asset_in, hop.asset_out, amount_in),
                )

            step = Step(hop.pool, hop.asset_in, hop.asset_out, amount_in, amount_out)
            log_step(logger, step, RunMode.SIMULATE.value, index)
            steps.append(step)
            amount_in = amount_out

        path = Path(tuple(steps))
        log_path(logger, path, RunMode.SIMULATE.value)
        return path
