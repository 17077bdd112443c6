#!/usr/bin/env python3
"""
run_route.py - CLI entrypoint for route evaluation.

Usage:
    python run_route.py simulate scenario.yaml --amount 250000
    python run_route.py execute scenario.yaml
    python run_route.py neighbors scenario.yaml X
"""

import json
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from config import EngineConfig, load_engine_config
from core.exceptions import RouteSimError
from core.logging import get_logger, set_global_context, setup_logging
from execution.engine import SwapEngine
from execution.scenario import Scenario, load_scenario

logger = get_logger("routesim.cli")


def _emit(payload: dict) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


def _fail(error: RouteSimError) -> NoReturn:
    click.echo(json.dumps(error.to_dict(), sort_keys=True), err=True)
    sys.exit(1)


def _holdings(scenario: Scenario) -> dict:
    return {
        scenario.symbol(asset): amount
        for asset, amount in sorted(scenario.world.holdings.items())
    }


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Engine config YAML (default: config/engine.yaml)",
)
@click.option(
    "--log-level",
    "-l",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level (overrides config)",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON log format (overrides config)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    log_level: Optional[str],
    json_logs: Optional[bool],
) -> None:
    """ROUTESIM route simulation and execution."""
    try:
        config = load_engine_config(config_path)
    except RouteSimError as e:
        _fail(e)

    if log_level is not None:
        config.log_level = log_level
    if json_logs is not None:
        config.json_logs = json_logs

    setup_logging(level=config.log_level, json_output=config.json_logs, log_file=config.log_file)
    set_global_context(service="routesim")
    logger.debug("Engine config loaded", extra={"context": config.to_dict()})
    ctx.obj = config


@cli.command()
@click.argument("scenario_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--amount", "-a", default=None, type=int, help="First hop input (default: first hop's amount)")
@click.option("--cap/--no-cap", default=None, help="Cap the first hop at the start asset's holding")
@click.pass_obj
def simulate(config: EngineConfig, scenario_path: Path, amount: Optional[int], cap: Optional[bool]) -> None:
    """Simulate SCENARIO_PATH's route without changing any state."""
    try:
        scenario = load_scenario(scenario_path)
        if amount is None:
            amount = scenario.amounts[0] if scenario.amounts else None
            if amount is None:
                raise click.UsageError("no --amount given and the route's first hop has none")

        engine = SwapEngine.from_config(scenario.pools, config)
        path = engine.simulate_chained(scenario.world, scenario.route, amount, cap_first_hop=cap)
    except RouteSimError as e:
        _fail(e)

    _emit({"mode": "SIMULATE", "path": path.to_dict(), "holdings": _holdings(scenario)})


@cli.command()
@click.argument("scenario_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def execute(config: EngineConfig, scenario_path: Path) -> None:
    """Execute SCENARIO_PATH's route, each hop with its own amount."""
    try:
        scenario = load_scenario(scenario_path)
        engine = SwapEngine.from_config(scenario.pools, config)
        path = engine.execute_path(scenario.world, scenario.sized_route())
    except RouteSimError as e:
        _fail(e)

    _emit({"mode": "EXECUTE", "path": path.to_dict(), "holdings": _holdings(scenario)})


@cli.command()
@click.argument("scenario_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("asset")
def neighbors(scenario_path: Path, asset: str) -> None:
    """List pools accepting ASSET and what each of them emits."""
    try:
        scenario = load_scenario(scenario_path)
        graph = scenario.graph
        asset_id = scenario.asset(asset)
        result = {}
        for pool_handle in graph.pools_accepting(asset_id):
            pool_id = graph.node(pool_handle).ref
            result[str(pool_id.value)] = sorted(
                scenario.symbol(graph.node(h).ref) for h in graph.assets_emitted_by(pool_id)
            )
    except RouteSimError as e:
        _fail(e)

    _emit({"asset": asset, "pools": result})


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
