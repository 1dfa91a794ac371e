"""
Tests for the sample datasets, slice accessors and config/logging helpers.
"""

from enum import Enum

import pytest

from farm_data import (
    ALL_FIELDS, CONFIG, FIELD_LINE_TONES, FIELD_REGIONS, FIELD_STATS,
    HEALTH_MONTHLY, MAP_FIELDS, MOISTURE_7D, SENSOR_FIELDS, SENSORS, TimeRange,
    ensure_exhaustive, ensure_fields,
    get_current_moisture, get_field_regions, get_health_headline,
    get_health_trend, get_moisture_trend, log_message,
)


class _Colour(Enum):
    RED = 1
    GREEN = 2


class TestEnsureExhaustive:

    def test_complete_table_is_returned(self):
        table = {_Colour.RED: "r", _Colour.GREEN: "g"}
        assert ensure_exhaustive(table, _Colour) is table

    def test_missing_member_is_named(self):
        with pytest.raises(LookupError, match="GREEN"):
            ensure_exhaustive({_Colour.RED: "r"}, _Colour)

    def test_field_table_missing_field_is_named(self):
        with pytest.raises(LookupError, match="Field C"):
            ensure_fields({"Field A": 1, "Field B": 2}, SENSOR_FIELDS)

    def test_line_tones_cover_every_sensor_field(self):
        assert set(FIELD_LINE_TONES) == set(SENSOR_FIELDS)
        assert len(set(FIELD_LINE_TONES.values())) == len(SENSOR_FIELDS)


class TestLogging:

    def test_appends_timestamped_line(self, log_file):
        log_message("first")
        log_message("second")
        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("[") and lines[0].endswith("first")

    def test_unwritable_log_is_ignored(self, tmp_path, monkeypatch):
        import farm_data
        monkeypatch.setattr(farm_data, "LOG_PATH", tmp_path / "missing" / "log.txt")
        log_message("still fine")


class TestConfig:

    def test_thresholds_loaded(self):
        assert CONFIG["thresholds"]["gauge"] == {"high": 60, "mid": 40}
        assert CONFIG["thresholds"]["battery"] == {"full": 60, "medium": 20}

    def test_sidebar_widths(self):
        assert CONFIG["layout"]["sidebar_width_collapsed"] == 70
        assert CONFIG["layout"]["sidebar_width_expanded"] == 256


class TestMoistureTrend:

    def test_seven_day_keeps_weekday_order(self):
        frame = get_moisture_trend(TimeRange.SEVEN_DAYS)
        assert frame["day"].tolist() == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert list(frame.columns) == ["day", *SENSOR_FIELDS]

    def test_seven_day_is_a_copy(self):
        frame = get_moisture_trend(TimeRange.SEVEN_DAYS)
        frame.loc[0, "Field A"] = 0
        assert MOISTURE_7D.loc[0, "Field A"] == 72

    def test_thirty_day_ends_with_latest_week(self):
        frame = get_moisture_trend(TimeRange.THIRTY_DAYS)
        assert len(frame) == 30
        for field in SENSOR_FIELDS:
            assert frame[field].tail(7).tolist() == MOISTURE_7D[field].tolist()

    def test_ninety_day_is_weekly(self):
        frame = get_moisture_trend(TimeRange.NINETY_DAYS)
        assert len(frame) == 13
        assert frame["day"].is_unique

    def test_history_is_deterministic(self):
        first = get_moisture_trend(TimeRange.NINETY_DAYS)
        second = get_moisture_trend(TimeRange.NINETY_DAYS)
        assert first.equals(second)

    def test_health_period_rejected(self):
        with pytest.raises(ValueError):
            get_moisture_trend(TimeRange.WEEKLY)


class TestCurrentMoisture:

    @pytest.mark.parametrize("field, expected", [
        ("Field A", 69), ("Field B", 64), ("Field C", 53),
    ])
    def test_latest_reading(self, field, expected):
        assert get_current_moisture(field) == expected

    def test_unknown_field(self):
        with pytest.raises(ValueError):
            get_current_moisture("Field D")


class TestHealthTrend:

    def test_weekly_all_fields(self):
        frame = get_health_trend(TimeRange.WEEKLY)
        assert frame["period"].tolist() == [f"W{i}" for i in range(1, 9)]
        assert list(frame.columns) == ["period", "health"]

    def test_monthly_per_field(self):
        frame = get_health_trend(TimeRange.MONTHLY, "Field B")
        assert frame["health"].tolist() == HEALTH_MONTHLY["Field B"].tolist()

    def test_every_map_field_has_a_series(self):
        for field in (ALL_FIELDS, *MAP_FIELDS):
            assert len(get_health_trend(TimeRange.WEEKLY, field)) == 8

    def test_bad_inputs(self):
        with pytest.raises(ValueError):
            get_health_trend(TimeRange.SEVEN_DAYS)
        with pytest.raises(ValueError):
            get_health_trend(TimeRange.WEEKLY, "Field Z")

    def test_headline(self):
        assert get_health_headline() == (84, 6)


class TestFixedData:

    def test_regions_in_drawing_order(self):
        assert get_field_regions() is FIELD_REGIONS
        assert [r.name for r in FIELD_REGIONS] == list(MAP_FIELDS)

    def test_sensor_battery_in_range(self):
        assert all(0 <= s.battery_pct <= 100 for s in SENSORS)

    def test_stress_and_pest_fall_is_good(self):
        lower_is_better = {s.label for s in FIELD_STATS if not s.higher_is_better}
        assert lower_is_better == {"Field B Stress", "Pest Risk Index"}
