"""
discovery/graph.py - Asset/pool connectivity graph.

Directed multigraph whose nodes are assets and pools:
  asset -> pool   "asset can be fed into pool"
  pool  -> asset  "pool can emit asset"

Node handles are stable integers allocated on first reference; an
identifier -> handle index is consulted before every insertion, so one
identifier always maps to exactly one handle.

Only local adjacency questions are answered here. Route search belongs to
the caller, which expands a frontier with pools_accepting() and
assets_emitted_by().
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Union

import networkx as nx

from core.constants import NodeKind
from core.exceptions import GraphError
from core.ids import AssetId, PoolId
from core.logging import get_logger
from core.models import Hop

if TYPE_CHECKING:
    from discovery.registry import Registry

logger = get_logger(__name__)


@dataclass(frozen=True)
class GraphNode:
    """Tagged node payload: an asset or a pool identifier."""
    kind: NodeKind
    ref: Union[AssetId, PoolId]


class PoolGraph:
    """Deduplicated node set over a networkx MultiDiGraph."""

    def __init__(self) -> None:
        self.g = nx.MultiDiGraph()
        self._asset_idx: dict[AssetId, int] = {}
        self._pool_idx: dict[PoolId, int] = {}
        self._next_handle = 0

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def _add_node(self, node: GraphNode) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.g.add_node(handle, node=node)
        return handle

    def add_asset(self, asset: AssetId) -> int:
        """Handle for asset, inserting the node on first reference."""
        handle = self._asset_idx.get(asset)
        if handle is None:
            handle = self._add_node(GraphNode(NodeKind.ASSET, asset))
            self._asset_idx[asset] = handle
        return handle

    def add_pool(self, pool: PoolId) -> int:
        """Handle for pool, inserting the node on first reference."""
        handle = self._pool_idx.get(pool)
        if handle is None:
            handle = self._add_node(GraphNode(NodeKind.POOL, pool))
            self._pool_idx[pool] = handle
        return handle

    def node(self, handle: int) -> GraphNode:
        try:
            return self.g.nodes[handle]["node"]
        except KeyError:
            raise GraphError(f"unknown node handle {handle}", {"handle": handle}) from None

    def asset_handle(self, asset: AssetId) -> int:
        try:
            return self._asset_idx[asset]
        except KeyError:
            raise GraphError(f"asset {asset} not in graph", {"asset": asset}) from None

    def pool_handle(self, pool: PoolId) -> int:
        try:
            return self._pool_idx[pool]
        except KeyError:
            raise GraphError(f"pool {pool} not in graph", {"pool": pool}) from None

    @property
    def node_count(self) -> int:
        return self.g.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self.g.number_of_edges()

    def has_edge(self, source: int, target: int) -> bool:
        return self.g.has_edge(source, target)

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def link_asset_to_pool(self, asset: AssetId, pool: PoolId) -> None:
        """Add one asset -> pool edge. Repeated calls add parallel edges."""
        self.g.add_edge(self.add_asset(asset), self.add_pool(pool))

    def link_pool_to_asset(self, pool: PoolId, asset: AssetId) -> None:
        """Add one pool -> asset edge. Repeated calls add parallel edges."""
        self.g.add_edge(self.add_pool(pool), self.add_asset(asset))

    def _add_edge_unique(self, source: int, target: int) -> None:
        if not self.g.has_edge(source, target):
            self.g.add_edge(source, target)

    def link_bidirectional_pair(self, pool: PoolId, asset_a: AssetId, asset_b: AssetId) -> None:
        """
        Make asset_a and asset_b tradable both ways through pool.

        Inserts A->pool, pool->B, B->pool, pool->A, skipping edges that
        already exist, so repeating the call is a no-op.
        """
        a = self.add_asset(asset_a)
        b = self.add_asset(asset_b)
        p = self.add_pool(pool)

        self._add_edge_unique(a, p)
        self._add_edge_unique(p, b)

        self._add_edge_unique(b, p)
        self._add_edge_unique(p, a)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _successors_of_kind(self, handle: int, kind: NodeKind) -> Iterator[int]:
        for succ in self.g.successors(handle):
            if self.g.nodes[succ]["node"].kind is kind:
                yield succ

    def pools_accepting(self, asset: AssetId) -> Iterator[int]:
        """Pool nodes one asset -> pool edge away from asset."""
        return self._successors_of_kind(self.asset_handle(asset), NodeKind.POOL)

    def assets_emitted_by(self, pool: PoolId) -> Iterator[int]:
        """Asset nodes one pool -> asset edge away from pool."""
        return self._successors_of_kind(self.pool_handle(pool), NodeKind.ASSET)

    def candidate_hops(self, asset: AssetId) -> Iterator[Hop]:
        """Every single-hop move out of asset: (pool, asset, emitted asset)."""
        for pool_handle in self.pools_accepting(asset):
            pool = self.node(pool_handle).ref
            for asset_handle in self.assets_emitted_by(pool):
                out = self.node(asset_handle).ref
                if out != asset:
                    yield Hop(pool, asset, out)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_registry(cls, registry: "Registry") -> "PoolGraph":
        """Graph with every registered pool linked to its two assets both ways."""
        graph = cls()
        for pool_id, meta in registry.pools():
            graph.link_bidirectional_pair(pool_id, meta.asset0, meta.asset1)
        logger.info(
            "Graph built from registry",
            extra={"context": {"nodes": graph.node_count, "edges": graph.edge_count}},
        )
        return graph
