from __future__ import annotations

from datetime import date, time

import pytest

from src.shiftboard.shiftboard.common.validators import require_hhmm, require_iso_date, require_non_empty
from src.shiftboard.shiftboard.core.exceptions import InvalidFormatError


def test_require_iso_date_accepts_strict_format():
    assert require_iso_date("2030-01-02") == date(2030, 1, 2)
    assert require_iso_date(date(2030, 1, 2)) == date(2030, 1, 2)


@pytest.mark.parametrize("value", ["2030-1-2", "02/01/2030", "2030-02-30", "", None])
def test_require_iso_date_rejects_bad_values(value):
    with pytest.raises(InvalidFormatError):
        require_iso_date(value)


def test_require_hhmm_is_24_hour_two_digit():
    assert require_hhmm("07:05", "Start time") == time(7, 5)
    assert require_hhmm(time(7, 5, 30), "Start time") == time(7, 5)
    for bad in ["7:05", "24:00", "12:60", "12:00 PM", None]:
        with pytest.raises(InvalidFormatError):
            require_hhmm(bad, "Start time")


def test_require_non_empty_strips():
    assert require_non_empty("  emp-1 ", "Employee ID") == "emp-1"
    with pytest.raises(InvalidFormatError, match="Employee ID is required"):
        require_non_empty("   ", "Employee ID")
