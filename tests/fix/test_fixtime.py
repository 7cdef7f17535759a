"""Tests for fix-time resolution."""

import time

import pytest

from gpsfix.fix.fixtime import current_hhmmss, day_number, parse_fixtime, resolve_fixtime

# 2007-06-18T08:07:01Z
JUNE_18_2007_080701 = 1182154021
JUNE_18_2007_MIDNIGHT = 1182124800


def _clock(epoch: float):
    return lambda: epoch


class TestDayNumber:
    @pytest.mark.parametrize(
        "day, month, year, expected",
        [
            (1, 1, 1970, 0),
            (1, 1, 1995, 9131),
            (1, 1, 2007, 13514),
            (18, 6, 2007, 13682),
            (29, 2, 2008, 13938),
            (1, 3, 2000, 11017),
        ],
    )
    def test_days_since_epoch(self, day, month, year, expected):
        assert day_number(day, month, year) == expected


class TestResolveFixtime:
    def test_date_and_time(self):
        assert resolve_fixtime(180607, 80701) == JUNE_18_2007_080701

    def test_neither_is_now(self):
        assert abs(resolve_fixtime(None, None) - time.time()) <= 1.0

    def test_neither_uses_clock(self):
        assert resolve_fixtime(None, None, clock=_clock(1234.9)) == 1234

    def test_date_only_is_midnight(self):
        assert resolve_fixtime(180607, None) == JUNE_18_2007_MIDNIGHT

    def test_date_only_with_current_time_of_day(self):
        clock = _clock(JUNE_18_2007_080701)
        assert resolve_fixtime(180607, None, True, clock) == JUNE_18_2007_080701

    def test_century_pivot(self):
        assert resolve_fixtime(10195, 0) == 788918400  # 1995-01-01
        assert resolve_fixtime(10189, 0) == 3755376000  # 2089-01-01

    def test_time_only_same_day(self):
        clock = _clock(JUNE_18_2007_080701)
        assert resolve_fixtime(None, 80000, clock=clock) == JUNE_18_2007_MIDNIGHT + 8 * 3600

    def test_time_only_before_midnight_is_previous_day(self):
        clock = _clock(JUNE_18_2007_MIDNIGHT + 60)  # 00:01:00
        assert resolve_fixtime(None, 235900, clock=clock) == JUNE_18_2007_MIDNIGHT - 60

    def test_time_only_after_midnight_is_next_day(self):
        clock = _clock(JUNE_18_2007_MIDNIGHT + 86340)  # 23:59:00
        assert resolve_fixtime(None, 100, clock=clock) == JUNE_18_2007_MIDNIGHT + 86400 + 60

    def test_zero_date_is_absent(self):
        clock = _clock(JUNE_18_2007_080701)
        assert resolve_fixtime(0, 80701, clock=clock) == JUNE_18_2007_080701


class TestParseFixtime:
    def test_codes(self):
        assert parse_fixtime("180607", "080701.00") == JUNE_18_2007_080701

    def test_blank_codes(self):
        clock = _clock(JUNE_18_2007_080701)
        assert parse_fixtime("", "  ", clock=clock) == JUNE_18_2007_080701

    def test_unparseable_date_is_absent(self):
        clock = _clock(JUNE_18_2007_080701)
        assert parse_fixtime("xx", "080701", clock=clock) == JUNE_18_2007_080701


def test_current_hhmmss():
    assert current_hhmmss(JUNE_18_2007_080701) == 80701
    assert current_hhmmss(JUNE_18_2007_MIDNIGHT) == 0
