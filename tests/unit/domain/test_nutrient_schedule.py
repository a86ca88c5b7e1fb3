"""
Nutrient Schedule Tests
=======================
Schedule lookup, phase resolution and grow-week calculation.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.domain.nutrient_schedule import (
    LAST_PHASE,
    PHASES,
    SCHEDULE,
    calculate_grow_week,
    current_grow_week,
    get_phase_by_id,
    get_phase_for_week,
    get_schedule_for_week,
    required_products_for_week,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestScheduleTable:
    def test_every_week_has_exactly_one_entry(self):
        assert [entry.week for entry in SCHEDULE] == list(range(1, 17))

    def test_phases_partition_all_weeks(self):
        covered = sorted(week for phase in PHASES for week in phase.weeks)
        assert covered == list(range(1, 17))

    def test_entries_are_read_only(self):
        entry = get_schedule_for_week(5)
        with pytest.raises(TypeError):
            entry.products["bio-grow"] = 99  # type: ignore[index]

    @pytest.mark.parametrize("week", [15, 16])
    def test_flush_weeks_have_no_products(self, week):
        assert required_products_for_week(week) == []


class TestGetScheduleForWeek:
    @pytest.mark.parametrize("week,expected", [(0, 1), (-3, 1), (1, 1), (8, 8), (16, 16), (17, 16), (99, 16)])
    def test_week_is_clamped(self, week, expected):
        assert get_schedule_for_week(week).week == expected

    def test_week_one_products(self):
        entry = get_schedule_for_week(1)
        assert entry.required_product_ids() == ["root-juice", "bio-heaven", "acti-vera"]
        assert entry.dose_for("bio-grow") is None

    def test_ec_target_is_exposed(self):
        target = get_schedule_for_week(6).ec_target
        assert (target.min, target.max) == (1.2, 1.6)
        assert target.contains(1.4)


class TestPhaseResolver:
    @pytest.mark.parametrize(
        "week,phase_id",
        [(1, "seedling"), (4, "earlyVeg"), (6, "lateVeg"), (7, "preFlower"), (12, "bloom"), (14, "lateBloom"), (16, "flush")],
    )
    def test_phase_for_week(self, week, phase_id):
        assert get_phase_for_week(week).id == phase_id

    @pytest.mark.parametrize("week", [0, 17, -1])
    def test_unmatched_week_falls_back_to_last_phase(self, week):
        assert get_phase_for_week(week) is LAST_PHASE

    def test_phase_by_id(self):
        assert get_phase_by_id("bloom").weeks == (9, 10, 11, 12)
        assert get_phase_by_id("nope") is None


class TestCalculateGrowWeek:
    def test_missing_date_returns_none(self):
        assert calculate_grow_week(None, now=NOW) is None
        assert calculate_grow_week("", now=NOW) is None

    def test_same_day_is_week_one(self):
        assert calculate_grow_week(NOW, now=NOW) == 1

    def test_future_date_is_week_one(self):
        assert calculate_grow_week(NOW + timedelta(days=5), now=NOW) == 1

    @pytest.mark.parametrize("days,week", [(1, 1), (7, 1), (8, 2), (14, 2), (20, 3), (70, 10)])
    def test_ceiling_of_elapsed_weeks(self, days, week):
        assert calculate_grow_week(NOW - timedelta(days=days), now=NOW) == week

    def test_partial_days_are_floored(self):
        planted = NOW - timedelta(days=7, hours=23)
        assert calculate_grow_week(planted, now=NOW) == 1

    def test_no_upper_clamp(self):
        assert calculate_grow_week(NOW - timedelta(days=200), now=NOW) == 29

    def test_accepts_iso_strings(self):
        assert calculate_grow_week("2026-02-09T12:00:00Z", now=NOW) == 3


class TestCurrentGrowWeek:
    def test_defaults_to_week_one(self):
        assert current_grow_week([], now=NOW) == 1

    def test_uses_oldest_active_plant(self):
        plants = [
            {"stage": "vegetative", "planted_date": (NOW - timedelta(days=10)).isoformat()},
            {"stage": "flowering", "planted_date": (NOW - timedelta(days=40)).isoformat()},
            {"stage": "harvested", "planted_date": (NOW - timedelta(days=90)).isoformat()},
        ]
        assert current_grow_week(plants, now=NOW) == 6

    def test_caps_at_sixteen(self):
        plants = [{"stage": "flushing", "planted_date": (NOW - timedelta(days=200)).isoformat()}]
        assert current_grow_week(plants, now=NOW) == 16

    def test_plants_without_dates_are_ignored(self):
        plants = [{"stage": "seedling", "planted_date": None}, {"stage": "empty", "planted_date": None}]
        assert current_grow_week(plants, now=NOW) == 1
