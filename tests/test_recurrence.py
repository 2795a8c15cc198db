from datetime import date

import pytest

from flight_dispatch.models.job import RecurrenceFrequency
from flight_dispatch.services.recurrence import expand_dates

ORIGIN = date(2025, 3, 10)


def test_weekly_dates():
    assert expand_dates(ORIGIN, RecurrenceFrequency.weekly, 3) == [
        date(2025, 3, 17),
        date(2025, 3, 24),
        date(2025, 3, 31),
    ]


def test_daily_dates():
    assert expand_dates(ORIGIN, "daily", 2) == [date(2025, 3, 11), date(2025, 3, 12)]


@pytest.mark.parametrize("frequency", ["fortnightly", "", None])
def test_unknown_frequency_falls_back_to_weekly(frequency):
    assert expand_dates(ORIGIN, frequency, 3) == expand_dates(ORIGIN, "weekly", 3)


def test_monthly_clamps_to_end_of_month():
    assert expand_dates(date(2024, 1, 31), RecurrenceFrequency.monthly, 4) == [
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
        date(2024, 5, 31),
    ]


def test_monthly_in_non_leap_year():
    assert expand_dates(date(2023, 1, 31), "monthly", 1) == [date(2023, 2, 28)]


def test_monthly_crosses_year_boundary():
    assert expand_dates(date(2025, 11, 15), "monthly", 3) == [
        date(2025, 12, 15),
        date(2026, 1, 15),
        date(2026, 2, 15),
    ]


def test_zero_count_yields_nothing():
    assert expand_dates(ORIGIN, "daily", 0) == []
