"""
Inventory Domain Tests
======================
Pure update rules and the weeks-of-supply estimate.
"""

import math

import pytest

from app.domain.inventory import (
    InventoryRecord,
    apply_inventory_update,
    consume,
    default_record,
    estimate_weekly_usage,
    refill,
    shopping_list,
    toggle_owned,
)


class TestApplyInventoryUpdate:
    def test_default_record(self):
        record = default_record("bio-grow")
        assert (record.owned, record.bottle_size, record.current_ml) == (False, 1000, 0.0)

    def test_owning_fills_the_bottle(self):
        updated = apply_inventory_update(default_record("bio-grow"), {"owned": True})
        assert updated.owned is True
        assert updated.current_ml == 1000

    def test_owning_with_explicit_volume(self):
        updated = apply_inventory_update(default_record("bio-grow"), {"owned": True, "current_ml": 300})
        assert updated.current_ml == 300

    def test_disowning_empties_the_bottle(self):
        record = InventoryRecord("bio-grow", owned=True, bottle_size=500, current_ml=400)
        updated = apply_inventory_update(record, {"owned": False})
        assert updated.owned is False
        assert updated.current_ml == 0.0

    def test_shrinking_bottle_clamps_volume(self):
        record = InventoryRecord("bio-grow", owned=True, bottle_size=1000, current_ml=800)
        updated = apply_inventory_update(record, {"bottle_size": 500})
        assert (updated.bottle_size, updated.current_ml) == (500, 500)

    def test_growing_bottle_keeps_volume(self):
        record = InventoryRecord("bio-grow", owned=True, bottle_size=500, current_ml=400)
        assert apply_inventory_update(record, {"bottle_size": 1000}).current_ml == 400

    @pytest.mark.parametrize(
        "patch,expected",
        [
            ({"current_ml": 1500}, (1000, 1000)),
            ({"owned": True, "current_ml": 800, "bottle_size": 500}, (500, 500)),
            ({"current_ml": 5000, "bottle_size": 5000}, (5000, 5000)),
        ],
    )
    def test_explicit_volume_is_capped_at_bottle(self, patch, expected):
        updated = apply_inventory_update(default_record("top-max"), patch)
        assert (updated.bottle_size, updated.current_ml) == expected
        assert updated.to_dict()["fill_percent"] == 100.0

    def test_empty_patch_is_noop(self):
        record = InventoryRecord("calmag", owned=True, bottle_size=250, current_ml=100)
        assert apply_inventory_update(record, {}) == record

    def test_toggle_and_refill(self):
        record = toggle_owned(default_record("calmag"))
        assert record.owned and record.current_ml == 1000
        drained = consume(record, 900)
        assert refill(drained).current_ml == 1000
        assert toggle_owned(record).current_ml == 0.0


class TestConsume:
    def test_floors_at_zero(self):
        record = InventoryRecord("bio-grow", owned=True, bottle_size=1000, current_ml=20)
        assert consume(record, 35).current_ml == 0.0

    def test_not_owned_is_untouched(self):
        record = InventoryRecord("bio-grow", owned=False, bottle_size=1000, current_ml=500)
        assert consume(record, 35) is record

    def test_rounds_to_one_decimal(self):
        record = InventoryRecord("bio-grow", owned=True, bottle_size=1000, current_ml=100)
        assert consume(record, 33.3).current_ml == 66.7


class TestLowStock:
    @pytest.mark.parametrize(
        "owned,current,low",
        [(True, 199, True), (True, 200, False), (False, 0, False)],
    )
    def test_is_low(self, owned, current, low):
        assert InventoryRecord("bio-grow", owned=owned, bottle_size=1000, current_ml=current).is_low is low

    def test_shopping_list(self):
        records = [
            InventoryRecord("bio-grow", owned=True, bottle_size=1000, current_ml=100),
            InventoryRecord("bio-bloom", owned=True, bottle_size=1000, current_ml=900),
            InventoryRecord("calmag", owned=False),
        ]
        assert [r.product_id for r in shopping_list(records)] == ["bio-grow"]

    def test_to_dict(self):
        data = InventoryRecord("bio-grow", owned=True, bottle_size=1000, current_ml=150).to_dict()
        assert data["fill_percent"] == 15.0
        assert data["low"] is True


class TestEstimateWeeklyUsage:
    def test_bio_grow_from_week_one(self):
        record = InventoryRecord("bio-grow", owned=True, bottle_size=1000, current_ml=1000)
        estimate = estimate_weekly_usage(record, 1)

        # 1+2+3+4+3+2+1 ml/L across weeks 3..9 at 10 L
        assert estimate.total_remaining_ml == 160
        assert estimate.per_week_ml == 10
        assert estimate.weeks_left == 100

    def test_product_no_longer_needed_is_unlimited(self):
        record = InventoryRecord("root-juice", owned=True, bottle_size=1000, current_ml=500)
        estimate = estimate_weekly_usage(record, 12)

        assert estimate.per_week_ml == 0
        assert math.isinf(estimate.weeks_left)
        assert estimate.to_dict()["weeks_left"] is None
        assert estimate.to_dict()["unlimited"] is True

    def test_empty_bottle_has_zero_weeks(self):
        estimate = estimate_weekly_usage(InventoryRecord("bio-bloom", owned=True, current_ml=0), 9)
        assert estimate.weeks_left == 0

    def test_week_is_clamped(self):
        assert estimate_weekly_usage(default_record("calmag"), 30).current_week == 16
