import locale
from datetime import datetime
from datetime import timedelta
from datetime import timezone

import pytest

from twscroll.base.dates import c_time_locale
from twscroll.base.dates import format_date
from twscroll.base.error import InvalidArgumentError

INSTANT = datetime(2018, 10, 10, 20, 19, 24, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [
    "Wed Oct 10 20:19:24 +0000 2018",
    "Wed Oct 10 20:19:24 2018",
    "Wed, 10 Oct 2018 20:19:24 +0000",
    "Wed Oct 10 22:19:24 +0200 2018",
])
def test_format_date_formats(value):
    """Every format the API used is parsed back to the same instant, in UTC."""
    dt = format_date(value)
    assert isinstance(dt, datetime)
    assert abs(dt - INSTANT) < timedelta(seconds=1)
    assert dt.utcoffset() == timedelta(0)


def test_format_date_round_trip():
    with c_time_locale():
        values = [
            INSTANT.strftime("%a %b %d %H:%M:%S %z %Y"),
            INSTANT.strftime("%a %b %d %H:%M:%S %Y"),
            INSTANT.strftime("%a, %d %b %Y %H:%M:%S +0000"),
            INSTANT.strftime("%a %b %d %H:%M:%S +0000 %Y"),
        ]

    for value in values:
        assert format_date(value) == INSTANT


def test_format_date_time_zone():
    dt = format_date("Wed Oct 10 20:19:24 +0000 2018", tz="America/New_York")
    assert dt == INSTANT
    assert dt.hour == 16


def test_format_date_unparseable():
    assert format_date("not-a-date") == "not-a-date"
    assert format_date(["not-a-date", "neither"]) == ["not-a-date", "neither"]


def test_format_date_list():
    assert format_date(["Wed Oct 10 20:19:24 +0000 2018", "garbage"]) == [INSTANT, None]


def test_format_date_unknown_time_zone():
    with pytest.raises(InvalidArgumentError):
        format_date("Wed Oct 10 20:19:24 +0000 2018", tz="Not/AZone")


def test_c_time_locale_restores_locale():
    """The locale switched for parsing is restored even when parsing fails."""
    default = locale.setlocale(locale.LC_TIME)
    try:
        try:
            locale.setlocale(locale.LC_TIME, "C.UTF-8")
        except locale.Error:
            pytest.skip("C.UTF-8 locale not available")
        previous = locale.setlocale(locale.LC_TIME)

        with pytest.raises(RuntimeError):
            with c_time_locale():
                assert locale.setlocale(locale.LC_TIME) == "C"
                raise RuntimeError("boom")

        assert locale.setlocale(locale.LC_TIME) == previous

        assert format_date("Wed Oct 10 20:19:24 +0000 2018") == INSTANT
        assert locale.setlocale(locale.LC_TIME) == previous
    finally:
        locale.setlocale(locale.LC_TIME, default)


def test_c_time_locale_already_c():
    default = locale.setlocale(locale.LC_TIME)
    try:
        locale.setlocale(locale.LC_TIME, "C")
        with c_time_locale():
            assert locale.setlocale(locale.LC_TIME) == "C"
        assert locale.setlocale(locale.LC_TIME) == "C"
    finally:
        locale.setlocale(locale.LC_TIME, default)
