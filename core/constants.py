# PATH: core/constants.py
"""
Constants for ROUTESIM.

Contains enums, numeric bounds and pricing constants shared by the
engine, the pool adapters and the connectivity graph.
"""

from enum import Enum
from typing import Final, List


# =============================================================================
# IDENTIFIER BOUNDS
# =============================================================================

# AssetId is a 16-bit handle, PoolId a 32-bit handle
ASSET_ID_MAX: Final[int] = 2**16 - 1
POOL_ID_MAX: Final[int] = 2**32 - 1


# =============================================================================
# PRICING CONSTANTS
# =============================================================================

# Fee denominator for bps-denominated pools (100 bps = 1%)
BPS_DENOMINATOR: Final[int] = 10_000

# Default V2 fee (0.30%)
DEFAULT_V2_FEE_BPS: Final[int] = 30

# V3 fee tiers (in hundredths of a bip)
V3_FEE_TIERS: List[int] = [100, 500, 3000, 10000]
V3_FEE_DENOMINATOR: Final[int] = 1_000_000

# Q64.96 fixed point scale for sqrt prices
Q96: Final[int] = 2**96


class PoolKind(str, Enum):
    """Pricing models with a shipped adapter."""
    FIXED_FEE = "FIXED_FEE"
    UNISWAP_V2 = "UNISWAP_V2"
    UNISWAP_V3 = "UNISWAP_V3"


class NodeKind(str, Enum):
    """Connectivity graph node tag."""
    ASSET = "ASSET"
    POOL = "POOL"


class RunMode(str, Enum):
    """How a route was evaluated."""
    SIMULATE = "SIMULATE"
    EXECUTE = "EXECUTE"


class ErrorCode(str, Enum):
    """
    Canonical error codes.

    Every RouteSimError carries one of these; the value is what shows up
    in logs and in to_dict() output.
    """
    # Route shape
    ROUTE_EMPTY = "ROUTE_EMPTY"
    ROUTE_DISCONTINUITY = "ROUTE_DISCONTINUITY"

    # Pool lookups
    POOL_UNKNOWN_IMPL = "POOL_UNKNOWN_IMPL"
    POOL_STATE_UNSEEDED = "POOL_STATE_UNSEEDED"
    POOL_UNSUPPORTED_DIRECTION = "POOL_UNSUPPORTED_DIRECTION"
    POOL_INVALID_OUTPUT = "POOL_INVALID_OUTPUT"

    # Input validation
    VALIDATION_INVALID_ID = "VALIDATION_INVALID_ID"
    VALIDATION_INVALID_AMOUNT = "VALIDATION_INVALID_AMOUNT"
    VALIDATION_INSUFFICIENT_BALANCE = "VALIDATION_INSUFFICIENT_BALANCE"
    VALIDATION_INVALID_ADDRESS = "VALIDATION_INVALID_ADDRESS"
    VALIDATION_UNSUPPORTED_POOL_KIND = "VALIDATION_UNSUPPORTED_POOL_KIND"
    VALIDATION_INVALID_POOL_PARAMS = "VALIDATION_INVALID_POOL_PARAMS"

    # Graph
    GRAPH_UNKNOWN_NODE = "GRAPH_UNKNOWN_NODE"

    # Config
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"

    UNKNOWN = "UNKNOWN"
