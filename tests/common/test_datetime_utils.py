from datetime import date

import pytest

from dir_payroll.common.datetime_utils import parse_iso_date, parse_us_short_date
from dir_payroll.core.exceptions import ValidationError


def test_us_short_dates():
    assert parse_us_short_date("3/5/24") == date(2024, 3, 5)
    assert parse_us_short_date(" 12/31/1999 ") == date(1999, 12, 31)
    for bad in ("3/5", "2/30/24", "a/b/c", ""):
        with pytest.raises(ValidationError):
            parse_us_short_date(bad)


def test_iso_dates():
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    with pytest.raises(ValidationError):
        parse_iso_date("2023-02-29")
