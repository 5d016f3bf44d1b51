"""
Tests for mentor_recs/utils/time_utils.py.

What we test
------------
- day_of_year() is 1-based and handles leap years.
- season_on() follows the month.
- whole_months_between() only counts a month once the day is reached.
"""

from __future__ import annotations

from datetime import date

import pytest

from mentor_recs.taxonomy.path_taxonomy import Season
from mentor_recs.utils.time_utils import day_of_year, season_on, whole_months_between


class TestDayOfYear:
    def test_first_day(self):
        assert day_of_year(date(2025, 1, 1)) == 1

    def test_last_day_common_year(self):
        assert day_of_year(date(2025, 12, 31)) == 365

    def test_last_day_leap_year(self):
        assert day_of_year(date(2024, 12, 31)) == 366


class TestSeasonOn:
    def test_winter(self, fixed_date):
        assert season_on(fixed_date) is Season.WINTER

    def test_summer(self, summer_date):
        assert season_on(summer_date) is Season.SUMMER


class TestWholeMonthsBetween:
    @pytest.mark.parametrize(
        "start,end,expected",
        [
            (date(2025, 1, 15), date(2025, 3, 15), 2),
            (date(2025, 1, 31), date(2025, 2, 28), 0),
            (date(2025, 1, 15), date(2025, 1, 30), 0),
            (date(2024, 11, 1), date(2025, 2, 1), 3),
            (date(2025, 3, 15), date(2025, 1, 15), -2),
        ],
    )
    def test_counts(self, start, end, expected):
        assert whole_months_between(start, end) == expected