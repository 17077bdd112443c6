# PATH: tests/unit/test_logging_contract.py
"""
Tests for the logging contract.

No kwargs to logger calls; context goes only via extra={"context": {...}}.
"""

import ast
import json
import logging
import unittest
from pathlib import Path
from typing import Any, Dict, List

from core.ids import AssetId, PoolId
from core.logging import (
    ConsoleFormatter,
    JSONFormatter,
    clear_global_context,
    get_logger,
    log_error,
    log_path,
    set_global_context,
)
from core.models import Path as RoutePath
from core.models import Step

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestLoggingContractEnforcement(unittest.TestCase):
    """AST-based tests for logging contract."""

    ALLOWED_KWARGS = {"exc_info", "extra", "stack_info", "stacklevel"}
    SOURCE_FILES = [
        "config/__init__.py",
        "discovery/graph.py",
        "discovery/registry.py",
        "execution/engine.py",
        "execution/scenario.py",
        "run_route.py",
    ]

    def _find_logger_violations(self, source_code: str) -> List[Dict[str, Any]]:
        """Find logger calls with invalid kwargs using AST."""
        violations = []
        tree = ast.parse(source_code)

        for node in ast.walk(tree):
            if not isinstance(node, ast.Call) or not isinstance(node.func, ast.Attribute):
                continue

            method_name = node.func.attr
            if method_name not in ("debug", "info", "warning", "error", "critical", "exception", "log"):
                continue

            obj = node.func.value
            if isinstance(obj, ast.Name):
                is_logger = "log" in obj.id.lower()
            elif isinstance(obj, ast.Attribute):
                is_logger = "log" in obj.attr.lower()
            else:
                is_logger = False
            if not is_logger:
                continue

            for kw in node.keywords:
                if kw.arg and kw.arg not in self.ALLOWED_KWARGS:
                    violations.append({
                        "line": node.lineno,
                        "method": method_name,
                        "invalid_kwarg": kw.arg,
                    })

        return violations

    def test_sources_have_no_invalid_kwargs(self):
        """Logger calls across the package only pass extra/exc_info."""
        for relative in self.SOURCE_FILES:
            filepath = PROJECT_ROOT / relative
            with self.subTest(file=relative):
                violations = self._find_logger_violations(filepath.read_text(encoding="utf-8"))
                self.assertEqual(violations, [], f"logging violations in {relative}: {violations}")

    def test_detector_flags_kwargs(self):
        violations = self._find_logger_violations("logger.info('x', pool=1)")

        self.assertEqual(violations[0]["invalid_kwarg"], "pool")


class TestLoggingContextCapture(unittest.TestCase):
    """Tests that context is properly captured in log records."""

    def setUp(self):
        self.captured_records = []

        class CapturingHandler(logging.Handler):
            def __init__(self, records_list):
                super().__init__()
                self.records = records_list

            def emit(self, record):
                self.records.append(record)

        self.base = logging.getLogger(f"test_capture_{id(self)}")
        self.base.setLevel(logging.DEBUG)
        self.base.handlers = []
        self.base.propagate = False
        self.base.addHandler(CapturingHandler(self.captured_records))

    def tearDown(self):
        clear_global_context()

    def test_adapter_merges_default_context(self):
        logger = get_logger(self.base.name, mode="SIMULATE")

        logger.info("Hop evaluated", extra={"context": {"pool": 10}})

        record = self.captured_records[0]
        self.assertEqual(record.context, {"mode": "SIMULATE", "pool": 10})

    def test_log_path_context(self):
        logger = get_logger(self.base.name)
        path = RoutePath((Step(PoolId(10), AssetId(1), AssetId(2), 250_000, 247_500),))

        log_path(logger, path, "EXECUTE")

        record = self.captured_records[0]
        self.assertEqual(record.getMessage(), "Path executed: 1 hops")
        self.assertEqual(record.context["amount_out"], 247_500)
        self.assertEqual(record.levelno, logging.INFO)

    def test_log_error_is_warning(self):
        logger = get_logger(self.base.name)

        log_error(logger, "ROUTE_EMPTY", "path must have at least one hop")

        record = self.captured_records[0]
        self.assertEqual(record.levelno, logging.WARNING)
        self.assertEqual(record.context["error_code"], "ROUTE_EMPTY")

    def test_json_formatter_includes_global_context(self):
        set_global_context(service="routesim")
        logger = get_logger(self.base.name)
        logger.info("Scenario loaded", extra={"context": {"pools": 2}})

        entry = json.loads(JSONFormatter().format(self.captured_records[0]))

        self.assertEqual(entry["message"], "Scenario loaded")
        self.assertEqual(entry["level"], "INFO")
        self.assertEqual(entry["context"], {"service": "routesim", "pools": 2})

    def test_json_formatter_serializes_ids(self):
        """Non-JSON values (ids) fall back to str()."""
        logger = get_logger(self.base.name)
        logger.warning("bad", extra={"context": {"pool": PoolId(3)}})

        entry = json.loads(JSONFormatter().format(self.captured_records[0]))

        self.assertEqual(entry["context"]["pool"], "PoolId(3)")

    def test_console_formatter(self):
        logger = get_logger(self.base.name)
        logger.info("Registry loaded", extra={"context": {"assets": 3}})

        line = ConsoleFormatter().format(self.captured_records[0])

        self.assertIn("Registry loaded", line)
        self.assertIn("assets=3", line)


if __name__ == "__main__":
    unittest.main()
