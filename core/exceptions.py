# PATH: core/exceptions.py
"""
Typed exceptions for ROUTESIM.

All errors are contract violations by the caller (or by a pool adapter)
and abort the current call. Each carries an ErrorCode and a details dict
so the CLI and logs can report them uniformly.
"""

from typing import Any, Dict, Optional

from core.constants import ErrorCode


class RouteSimError(Exception):
    """Base exception for ROUTESIM."""

    def __init__(
        self,
        message: str = "",
        code: ErrorCode = ErrorCode.UNKNOWN,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self):
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.code.value,
            "message": self.message,
            "details": {k: str(v) for k, v in self.details.items()},
        }


class ValidationError(RouteSimError):
    """Invalid identifier, amount, address or pool parameters."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_INVALID_AMOUNT,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, details)


class ConfigError(RouteSimError):
    """Configuration file missing or malformed."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, details)


class GraphError(RouteSimError):
    """Connectivity graph queried for a node it never saw."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.GRAPH_UNKNOWN_NODE, details)


# =============================================================================
# ROUTE / STATE ERRORS
# =============================================================================

class RouteError(RouteSimError):
    """A route could not be evaluated. Nothing past the failure point ran."""
    pass


class EmptyRouteError(RouteError):
    """Hop list has zero elements."""

    def __init__(self, message: str = "path must have at least one hop", details: Optional[dict] = None):
        super().__init__(message, ErrorCode.ROUTE_EMPTY, details)


class PathDiscontinuityError(RouteError):
    """Hop i's input asset differs from hop i-1's output asset."""

    def __init__(self, index: int, expected: Any, found: Any):
        super().__init__(
            f"path discontinuity at hop {index}: expected from {expected}, got {found}",
            ErrorCode.ROUTE_DISCONTINUITY,
            {"index": index, "expected": expected, "found": found},
        )
        self.index = index
        self.expected = expected
        self.found = found


class UnknownPoolImplementationError(RouteError):
    """Hop references a pool with no registered implementation."""

    def __init__(self, pool_id: Any):
        super().__init__(
            f"missing pool impl for {pool_id}",
            ErrorCode.POOL_UNKNOWN_IMPL,
            {"pool": pool_id},
        )
        self.pool_id = pool_id


class UnseededPoolStateError(RouteError):
    """Hop references a pool with no entry in World.pool_states."""

    def __init__(self, pool_id: Any):
        super().__init__(
            f"missing pool state for {pool_id}",
            ErrorCode.POOL_STATE_UNSEEDED,
            {"pool": pool_id},
        )
        self.pool_id = pool_id


class UnsupportedDirectionError(RouteError):
    """Pool does not claim to convert asset_in into asset_out."""

    def __init__(self, pool_id: Any, asset_in: Any, asset_out: Any):
        super().__init__(
            f"unsupported direction {asset_in} -> {asset_out} on {pool_id}",
            ErrorCode.POOL_UNSUPPORTED_DIRECTION,
            {"pool": pool_id, "asset_in": asset_in, "asset_out": asset_out},
        )
        self.pool_id = pool_id
        self.asset_in = asset_in
        self.asset_out = asset_out
