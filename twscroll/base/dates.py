"""Timestamp parsing for the formats the API emitted across versions."""
import locale
import threading
from contextlib import contextmanager
from datetime import datetime
from datetime import tzinfo

from dateutil import tz as tz_

from twscroll.base.error import InvalidArgumentError

# `LC_TIME` is process-wide, only one thread at a time may override it
_LOCALE_LOCK = threading.RLock()

# (format, how to apply the time zone), tried in order:
# - "convert": the offset is parsed, the result is converted to the requested zone
# - "attach": the wall time is read in the requested zone
DATE_FORMATS = (
    ("%a %b %d %H:%M:%S %z %Y", "convert"),
    ("%a %b %d %H:%M:%S %Y", "attach"),
    ("%a, %d %b %Y %H:%M:%S +0000", "attach"),
    ("%a %b %d %H:%M:%S +0000 %Y", "attach"),
)


@contextmanager
def c_time_locale(name="C"):
    """Temporarily switch `LC_TIME` (month and day names) to `name`, the previous locale is always restored."""
    with _LOCALE_LOCK:
        previous = locale.setlocale(locale.LC_TIME)
        if previous == name:
            yield
            return

        locale.setlocale(locale.LC_TIME, name)
        try:
            yield
        finally:
            locale.setlocale(locale.LC_TIME, previous)


def get_zone(tz):
    if isinstance(tz, tzinfo):
        return tz

    zone = tz_.gettz(tz)
    if zone is None:
        raise InvalidArgumentError("unknown time zone {!r}".format(tz))
    return zone


def _parse(value, fmt, mode, zone):
    if not isinstance(value, str):
        return None

    try:
        dt = datetime.strptime(value.strip(), fmt)
    except ValueError:
        return None

    if mode == "convert":
        return dt.astimezone(zone)
    return dt.replace(tzinfo=zone)


def format_date(x, tz="UTC"):
    """Parse a timestamp (or a list of timestamps) into timezone-aware datetimes.

    The first format parsing at least one value wins; for lists, values it can't parse become None.
    If no format matches, `x` is returned unchanged.

    On top of the formats the API emitted, timestamps without any offset (`%a %b %d %H:%M:%S %Y`, as
    written by `time.ctime`) are accepted and read in `tz`.

    >>> format_date("Wed Oct 10 20:19:24 +0000 2018")
    datetime.datetime(2018, 10, 10, 20, 19, 24, tzinfo=tzutc())
    >>> format_date("not-a-date")
    'not-a-date'

    """
    zone = get_zone(tz)
    single = not isinstance(x, (list, tuple))
    values = [x] if single else list(x)

    with c_time_locale():
        for fmt, mode in DATE_FORMATS:
            parsed = [_parse(value, fmt, mode, zone) for value in values]
            if any(dt is not None for dt in parsed):
                return parsed[0] if single else parsed

    return x
