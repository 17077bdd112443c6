"""
execution/scenario.py - Build a World, pools, graph and route from YAML.

Scenario layout:

    assets: {X: 1, Y: 2, Z: 3}          # symbol -> AssetId
    holdings: {X: 1000000}              # symbol -> amount
    pools:
      - id: 10
        kind: FIXED_FEE                 # FIXED_FEE | UNISWAP_V2 | UNISWAP_V3
        assets: [X, Y]
        params: {fee_bps: 100}
    route:
      - {pool: 10, from: X, to: Y, amount: 250000}

`amount` is required per hop for execution and ignored by simulation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import load_yaml
from core.exceptions import ConfigError, RouteSimError
from core.ids import AssetId, PoolId
from core.logging import get_logger
from core.models import Hop, World
from dex.adapters import build_pool
from dex.pool import Pool
from discovery.graph import PoolGraph

logger = get_logger(__name__)


@dataclass
class Scenario:
    """Everything needed to evaluate one route."""
    world: World
    pools: Dict[PoolId, Pool]
    graph: PoolGraph
    route: List[Hop] = field(default_factory=list)
    amounts: List[Optional[int]] = field(default_factory=list)
    symbols: Dict[str, AssetId] = field(default_factory=dict)

    def asset(self, symbol: str) -> AssetId:
        """Resolve a symbol (or a bare numeric id) to an AssetId."""
        if symbol in self.symbols:
            return self.symbols[symbol]
        if isinstance(symbol, int) or str(symbol).isdigit():
            return AssetId(int(symbol))
        raise ConfigError(f"Unknown asset symbol: {symbol}", details={"symbol": symbol})

    def symbol(self, asset: AssetId) -> str:
        for name, candidate in self.symbols.items():
            if candidate == asset:
                return name
        return str(asset.value)

    def sized_route(self) -> List[tuple[Hop, int]]:
        """Route paired with its per-hop amounts (execution mode)."""
        missing = [i for i, amount in enumerate(self.amounts) if amount is None]
        if missing:
            raise ConfigError(
                f"route hops {missing} have no amount; execution needs one per hop",
                details={"hops": missing},
            )
        return list(zip(self.route, self.amounts))


def scenario_from_dict(data: Dict[str, Any]) -> Scenario:
    """Build a Scenario from parsed YAML."""
    try:
        symbols = {str(name): AssetId(int(raw)) for name, raw in (data.get("assets") or {}).items()}
        scenario = Scenario(world=World(), pools={}, graph=PoolGraph(), symbols=symbols)

        for name, amount in (data.get("holdings") or {}).items():
            scenario.world.set_balance(scenario.asset(name), amount)

        for entry in data.get("pools") or []:
            pool_id = PoolId(int(entry["id"]))
            assets = [scenario.asset(name) for name in entry["assets"]]
            pool, state = build_pool(pool_id, entry["kind"], assets, entry.get("params"))
            scenario.pools[pool_id] = pool
            scenario.world.seed_pool(pool_id, state)
            scenario.graph.link_bidirectional_pair(pool_id, assets[0], assets[1])

        for entry in data.get("route") or []:
            scenario.route.append(Hop(
                pool=PoolId(int(entry["pool"])),
                asset_in=scenario.asset(entry["from"]),
                asset_out=scenario.asset(entry["to"]),
            ))
            scenario.amounts.append(entry.get("amount"))
    except RouteSimError:
        raise
    except (KeyError, ValueError, TypeError) as e:
        raise ConfigError(f"invalid scenario entry: {e}", details={"error": e}) from e

    logger.info(
        "Scenario loaded",
        extra={"context": {
            "assets": len(scenario.symbols),
            "pools": len(scenario.pools),
            "hops": len(scenario.route),
        }},
    )
    return scenario


def load_scenario(path: Path) -> Scenario:
    """Load a Scenario from a YAML file."""
    return scenario_from_dict(load_yaml(path))
