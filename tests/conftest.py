# PATH: tests/conftest.py
"""
Pytest configuration and fixtures for ROUTESIM tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.ids import AssetId, PoolId  # noqa: E402
from core.models import Hop, World  # noqa: E402
from dex.adapters import FixedFeePool  # noqa: E402


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


X = AssetId(1)
Y = AssetId(2)
Z = AssetId(3)
P_XY = PoolId(10)
P_YZ = PoolId(11)


@pytest.fixture
def fee_pools():
    """1% pool X<->Y and 2% pool Y<->Z."""
    return {
        P_XY: FixedFeePool(P_XY, X, Y, fee_bps=100),
        P_YZ: FixedFeePool(P_YZ, Y, Z, fee_bps=200),
    }


@pytest.fixture
def fee_world(fee_pools):
    """World holding 1,000,000 X with both fee pools seeded."""
    world = World()
    for pool_id, pool in fee_pools.items():
        world.seed_pool(pool_id, pool.new_state())
    world.set_balance(X, 1_000_000)
    world.set_balance(Y, 0)
    world.set_balance(Z, 0)
    return world


@pytest.fixture
def two_hop_route():
    return [Hop(P_XY, X, Y), Hop(P_YZ, Y, Z)]
