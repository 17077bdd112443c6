# PATH: tests/unit/test_core_models.py
"""
Unit tests for core ids, models and integer math.
"""

import pytest

from core.constants import ASSET_ID_MAX, POOL_ID_MAX, ErrorCode
from core.exceptions import EmptyRouteError, UnseededPoolStateError, ValidationError
from core.ids import AssetId, PoolId
from core.math import (
    apply_fee_bps,
    mul_div,
    mul_div_rounding_up,
    validate_amount,
    validate_fee_bps,
)
from core.models import Hop, Path, Step, World


# =============================================================================
# IDS
# =============================================================================

class TestIds:

    def test_equality_by_value(self):
        assert AssetId(5) == AssetId(5)
        assert hash(PoolId(9)) == hash(PoolId(9))

    def test_asset_and_pool_never_equal(self):
        assert AssetId(1) != PoolId(1)

    def test_ordering(self):
        assert sorted([AssetId(3), AssetId(1)]) == [AssetId(1), AssetId(3)]

    def test_bounds(self):
        AssetId(ASSET_ID_MAX)
        PoolId(POOL_ID_MAX)

        with pytest.raises(ValidationError) as exc_info:
            AssetId(ASSET_ID_MAX + 1)
        assert exc_info.value.code == ErrorCode.VALIDATION_INVALID_ID

        with pytest.raises(ValidationError):
            PoolId(-1)

    @pytest.mark.parametrize("bad", [True, 1.0, "1", None])
    def test_rejects_non_int(self, bad):
        with pytest.raises(ValidationError):
            AssetId(bad)

    def test_str(self):
        assert str(AssetId(2)) == "AssetId(2)"
        assert str(PoolId(11)) == "PoolId(11)"


# =============================================================================
# MATH
# =============================================================================

class TestMath:

    def test_validate_amount_accepts_big_ints(self):
        assert validate_amount(10**40) == 10**40

    def test_validate_amount_rejects_float(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_amount(1.0, "amount_in")
        assert "Float values are not allowed for amount_in" in exc_info.value.message

    @pytest.mark.parametrize("bad", [-1, True, "10", None])
    def test_validate_amount_rejects(self, bad):
        with pytest.raises(ValidationError):
            validate_amount(bad)

    def test_mul_div_rounding(self):
        assert mul_div(7, 3, 2) == 10
        assert mul_div_rounding_up(7, 3, 2) == 11
        assert mul_div_rounding_up(4, 3, 2) == 6

    def test_mul_div_zero_denominator(self):
        with pytest.raises(ZeroDivisionError):
            mul_div(1, 1, 0)

    def test_apply_fee_bps(self):
        assert apply_fee_bps(250_000, 100) == 247_500
        assert apply_fee_bps(247_500, 200) == 242_550
        assert apply_fee_bps(1, 30) == 0

    def test_validate_fee_bps(self):
        assert validate_fee_bps(0) == 0
        assert validate_fee_bps(9_999) == 9_999
        with pytest.raises(ValidationError):
            validate_fee_bps(10_000)


# =============================================================================
# ROUTE MODELS
# =============================================================================

X, Y, Z = AssetId(1), AssetId(2), AssetId(3)


def _path():
    return Path((
        Step(PoolId(10), X, Y, 250_000, 247_500),
        Step(PoolId(11), Y, Z, 247_500, 242_550),
    ))


class TestPath:

    def test_empty_path_rejected(self):
        with pytest.raises(EmptyRouteError):
            Path(())

    def test_accepts_list(self):
        path = Path([Step(PoolId(10), X, Y, 1, 1)])

        assert isinstance(path.steps, tuple)

    def test_endpoints(self):
        path = _path()

        assert path.start_asset == X
        assert path.end_asset == Z
        assert path.amount_in == 250_000
        assert path.amount_out == 242_550
        assert len(path) == 2

    def test_hops(self):
        assert _path().hops() == [Hop(PoolId(10), X, Y), Hop(PoolId(11), Y, Z)]

    def test_to_dict(self):
        data = _path().to_dict()

        assert data["start_asset"] == 1
        assert data["end_asset"] == 3
        assert data["steps"][1] == {
            "pool": 11,
            "asset_in": 2,
            "asset_out": 3,
            "amount_in": 247_500,
            "amount_out": 242_550,
        }


# =============================================================================
# WORLD
# =============================================================================

class TestWorld:

    def test_unknown_balance_is_zero(self):
        assert World().balance(X) == 0

    def test_credit_and_debit(self):
        world = World()

        assert world.credit(X, 100) == 100
        assert world.debit(X, 40) == 60
        assert world.balance(X) == 60

    def test_debit_beyond_balance(self):
        world = World(holdings={X: 10})

        with pytest.raises(ValidationError) as exc_info:
            world.debit(X, 11)
        assert exc_info.value.code == ErrorCode.VALIDATION_INSUFFICIENT_BALANCE
        assert world.balance(X) == 10

    def test_set_balance_rejects_negative(self):
        with pytest.raises(ValidationError):
            World().set_balance(X, -5)

    def test_pool_state_never_defaulted(self):
        with pytest.raises(UnseededPoolStateError):
            World().pool_state(PoolId(1))

    def test_seed_replaces(self):
        world = World()
        world.seed_pool(PoolId(1), {"a": 1})
        world.seed_pool(PoolId(1), {"a": 2})

        assert world.pool_state(PoolId(1)) == {"a": 2}
        assert world.has_pool_state(PoolId(1))

    def test_snapshot_is_deep(self):
        world = World(holdings={X: 1})
        world.seed_pool(PoolId(1), {"reserve": 5})

        copy = world.snapshot()
        copy.pool_state(PoolId(1))["reserve"] = 6
        copy.credit(X, 1)

        assert world.pool_state(PoolId(1)) == {"reserve": 5}
        assert world.balance(X) == 1
        assert copy != world

    def test_equality_by_value(self):
        a = World(holdings={X: 1}, pool_states={PoolId(1): {"k": 1}})
        b = World(holdings={X: 1}, pool_states={PoolId(1): {"k": 1}})

        assert a == b

    def test_to_dict(self):
        world = World(holdings={Y: 2, X: 1})

        assert world.to_dict() == {"holdings": {1: 1, 2: 2}, "pool_states": {}}
