"""
discovery/ - Route discovery building blocks.

Modules:
- graph: asset/pool connectivity graph (local adjacency queries)
- registry: address <-> identifier metadata lookups
"""

from discovery.graph import GraphNode, PoolGraph
from discovery.registry import (
    AssetMeta,
    PoolMeta,
    Registry,
    load_registry,
    registry_from_dict,
)

__all__ = [
    "GraphNode",
    "PoolGraph",
    "AssetMeta",
    "PoolMeta",
    "Registry",
    "load_registry",
    "registry_from_dict",
]
