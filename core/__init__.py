"""
core - Core utilities and models for ROUTESIM.

This package contains:
- ids.py: AssetId / PoolId handles
- models.py: Hop, Step, Path, World
- constants.py: Enums and pricing constants
- exceptions.py: Typed exceptions with error codes
- math.py: Integer amount helpers (no float)
- logging.py: Structured JSON logging
"""

from core.constants import (
    ErrorCode,
    NodeKind,
    PoolKind,
    RunMode,
    V3_FEE_TIERS,
)
from core.exceptions import (
    ConfigError,
    EmptyRouteError,
    GraphError,
    PathDiscontinuityError,
    RouteError,
    RouteSimError,
    UnknownPoolImplementationError,
    UnseededPoolStateError,
    UnsupportedDirectionError,
    ValidationError,
)
from core.ids import AssetId, PoolId
from core.logging import get_logger, setup_logging
from core.models import Hop, Path, Step, World

__all__ = [
    # Constants
    "ErrorCode",
    "NodeKind",
    "PoolKind",
    "RunMode",
    "V3_FEE_TIERS",
    # Exceptions
    "ConfigError",
    "EmptyRouteError",
    "GraphError",
    "PathDiscontinuityError",
    "RouteError",
    "RouteSimError",
    "UnknownPoolImplementationError",
    "UnseededPoolStateError",
    "UnsupportedDirectionError",
    "ValidationError",
    # Identifiers
    "AssetId",
    "PoolId",
    # Models
    "Hop",
    "Path",
    "Step",
    "World",
    # Logging
    "get_logger",
    "setup_logging",
]
