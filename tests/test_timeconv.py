"""Tests for venue-local <-> UTC conversion."""

from __future__ import annotations

import pytest

from mastertour_mcp.timeconv import extract_time, local_to_utc, utc_to_local


class TestLocalToUtc:
    def test_winter_los_angeles(self):
        assert local_to_utc("2026-01-04", "14:00", "America/Los_Angeles") == "2026-01-04 22:00:00"

    def test_evening_crosses_into_next_utc_day(self):
        assert local_to_utc("2024-07-15", "22:00", "America/New_York") == "2024-07-16 02:00:00"

    def test_midnight(self):
        assert local_to_utc("2024-01-15", "00:00", "America/New_York") == "2024-01-15 05:00:00"

    def test_summer_offset_applied(self):
        assert local_to_utc("2024-07-15", "12:00", "Europe/London") == "2024-07-15 11:00:00"

    def test_utc_zone_is_identity(self):
        assert local_to_utc("2024-03-10", "08:15", "UTC") == "2024-03-10 08:15:00"

    def test_ambiguous_fall_back_uses_first_occurrence(self):
        # 01:30 happens twice on 2026-11-01 in New York; EDT (-4) comes first
        assert local_to_utc("2026-11-01", "01:30", "America/New_York") == "2026-11-01 05:30:00"

    def test_spring_forward_gap_uses_pre_transition_offset(self):
        # 02:30 does not exist on 2026-03-08 in New York; EST (-5) applies
        assert local_to_utc("2026-03-08", "02:30", "America/New_York") == "2026-03-08 07:30:00"

    @pytest.mark.parametrize(
        ("date", "time", "tz"),
        [
            ("2024-13-01", "10:00", "UTC"),
            ("2024-01-01", "25:00", "UTC"),
            ("01/02/2024", "10:00", "UTC"),
            ("2024-01-01", "10:00", "Mars/Olympus_Mons"),
            ("2024-01-01", "10:00", ""),
        ],
    )
    def test_invalid_input_raises_value_error(self, date, time, tz):
        with pytest.raises(ValueError):
            local_to_utc(date, time, tz)


class TestUtcToLocal:
    def test_reverse_of_evening_conversion(self):
        assert utc_to_local("2024-07-16 02:00:00", "America/New_York") == ("2024-07-15", "22:00")

    @pytest.mark.parametrize(
        ("date", "time", "tz", "expected_utc"),
        [
            ("2024-01-15", "10:00", "Europe/London", "2024-01-15 10:00:00"),
            ("2024-07-15", "10:00", "Europe/London", "2024-07-15 09:00:00"),
            ("2024-01-15", "10:00", "America/New_York", "2024-01-15 15:00:00"),
            ("2024-07-15", "10:00", "America/New_York", "2024-07-15 14:00:00"),
        ],
    )
    def test_round_trip_across_seasons(self, date, time, tz, expected_utc):
        utc = local_to_utc(date, time, tz)
        assert utc == expected_utc
        assert utc_to_local(utc, tz) == (date, time)

    def test_rejects_malformed(self):
        with pytest.raises(ValueError):
            utc_to_local("2024-07-16T02:00", "America/New_York")


class TestExtractTime:
    def test_extracts_hours_and_minutes(self):
        assert extract_time("2026-02-06 14:05:00") == "14:05"

    def test_empty(self):
        assert extract_time("") == ""
