from datetime import date

import pytest

from finforecast.model_impl.seasonality import seasonal_multiplier, weekday_index, weekday_profile
from finforecast.model_interface.types import DailyBucket


def test_weekday_index_starts_on_sunday():
    assert weekday_index(date(2025, 3, 2)) == 0  # Sunday
    assert weekday_index(date(2025, 3, 3)) == 1  # Monday
    assert weekday_index(date(2025, 3, 1)) == 6  # Saturday


def test_profile_averages_income_per_weekday():
    buckets = [
        DailyBucket(date(2025, 3, 2), 100.0, 5.0),
        DailyBucket(date(2025, 3, 3), 40.0, 0.0),
        DailyBucket(date(2025, 3, 9), 300.0, 7.0),
    ]
    profile = weekday_profile(buckets)
    assert len(profile) == 7
    assert profile[0] == 200.0
    assert profile[1] == 40.0
    assert profile[2:] == [0.0] * 5


def test_multiplier_rule():
    assert seasonal_multiplier(0.0, 500.0) == 1.0
    assert seasonal_multiplier(1000.0, 1000.0) == 1.0
    assert seasonal_multiplier(1500.0, 1000.0) == pytest.approx(1.25)
    assert seasonal_multiplier(500.0, 1000.0) == pytest.approx(0.75)
    # zero average falls back to dividing by 1
    assert seasonal_multiplier(3.0, 0.0) == pytest.approx(2.0)
