# PATH: core/logging.py
"""
Structured JSON logging for ROUTESIM.

All contextual fields are passed only via extra={"context": {...}}.

Output format (json_output=True):
{
    "timestamp": "2026-01-04T12:00:00.000+00:00",
    "level": "INFO",
    "logger": "execution.engine",
    "message": "Path executed",
    "context": {"hops": 2, "amount_in": 250000, "amount_out": 196000}
}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.models import Path, Step

# Global context that gets added to all log entries
_global_context: dict[str, Any] = {}


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {}
        context.update(_global_context)

        if hasattr(record, "context") and record.context:
            context.update(record.context)

        if record.exc_info:
            context["exception"] = self.formatException(record.exc_info)

        if context:
            log_entry["context"] = context

        return json.dumps(log_entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        base = f"{timestamp} | {record.levelname:<8} | {record.name} | {record.getMessage()}"

        if hasattr(record, "context") and record.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in list(record.context.items())[:4])
            if len(record.context) > 4:
                ctx_str += f", ... (+{len(record.context) - 4} more)"
            base += f" | {ctx_str}"

        return base


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter that adds default context to all log entries."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        context = {**self.extra, **extra.get("context", {})}

        kwargs["extra"] = {"context": context}
        return msg, kwargs


def set_global_context(**kwargs: Any) -> None:
    """
    Set global context that gets added to all JSON log entries.

    Example:
        set_global_context(run_id="backtest-7", scenario="two_hop")
    """
    _global_context.update(kwargs)


def clear_global_context() -> None:
    """Clear global logging context."""
    _global_context.clear()


def get_logger(name: str, **context: Any) -> ContextAdapter:
    """
    Get a logger with optional default context.

    Args:
        name: Logger name (typically module name)
        **context: Default context for all log entries from this logger

    Example:
        logger = get_logger(__name__, mode="SIMULATE")
        logger.debug("Hop evaluated", extra={"context": {"pool": 10}})
    """
    return ContextAdapter(logging.getLogger(name), context)


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    log_file: str | None = None,
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON formatting (False gives one-line console output)
        log_file: Optional file path for logging (always JSON)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(JSONFormatter() if json_output else ConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def log_step(logger: ContextAdapter, step: "Step", mode: str, index: int) -> None:
    """Log one evaluated hop at DEBUG."""
    logger.debug(
        f"Hop {index}: {step.asset_in} -> {step.asset_out} via {step.pool}",
        extra={
            "context": {
                "mode": mode,
                "index": index,
                "pool": step.pool.value,
                "asset_in": step.asset_in.value,
                "asset_out": step.asset_out.value,
                "amount_in": step.amount_in,
                "amount_out": step.amount_out,
            }
        },
    )


def log_path(logger: ContextAdapter, path: "Path", mode: str, level: int = logging.INFO) -> None:
    """Log a completed path (INFO unless told otherwise)."""
    logger.log(
        level,
        f"Path {mode.lower()}d: {len(path)} hops",
        extra={
            "context": {
                "mode": mode,
                "hops": len(path),
                "start_asset": path.start_asset.value,
                "end_asset": path.end_asset.value,
                "amount_in": path.amount_in,
                "amount_out": path.amount_out,
            }
        },
    )


def log_error(logger: ContextAdapter, error_code: str, message: str, **extra: Any) -> None:
    """Log a contract violation before it is raised."""
    logger.warning(
        f"[{error_code}] {message}",
        extra={"context": {"error_code": error_code, **extra}},
    )
