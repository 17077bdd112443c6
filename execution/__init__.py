"""
execution/ - Route evaluation.

Modules:
- engine: SwapEngine (apply_swap, execute_path, simulate_chained)
- scenario: YAML scenario loader used by the CLI and backtests
"""

from execution.engine import SizedHop, SwapEngine
from execution.scenario import Scenario, load_scenario, scenario_from_dict

__all__ = [
    "SizedHop",
    "SwapEngine",
    "Scenario",
    "load_scenario",
    "scenario_from_dict",
]
