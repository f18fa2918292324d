"""
Strict datetime parse and format utilities.
"""
from datetime import datetime
from enum import Enum
from pytz import FixedOffset, UTC
from re import compile as re_compile

# Month-name to month-value map
_month_names = {
    "Jan": 1,
    "Feb": 2,
    "Mar": 3,
    "Apr": 4,
    "May": 5,
    "Jun": 6,
    "Jul": 7,
    "Aug": 8,
    "Sep": 9,
    "Oct": 10,
    "Nov": 11,
    "Dec": 12,
}

_month_abbrevs = dict([(value, key) for key, value in _month_names.items()])
_day_abbrevs = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# ISO 8601 timestamp format regex (includes RFC 3339)
_iso_8601_regex = re_compile(
    r"^(?P<year>[0-9]{4})-?"
    r"(?P<month>0[1-9]|1[0-2])-?"
    r"(?P<day>0[1-9]|[12][0-9]|3[01])"
    r"[Tt ]"
    r"(?P<hour>[01][0-9]|2[0-3]):?"
    r"(?P<minute>[0-5][0-9]):?"
    r"(?P<second>[0-5][0-9]|6[01])"
    r"(?P<frac_sec>[\.,][0-9]+)?"
    r"(?P<timezone>[-+][01][0-9]:?[0-5][0-9]|[Zz])$")

# RFC 2282 timestamp format regex. HTTP dates use "GMT" as the zone.
_rfc_2282_regex = re_compile(
    r"^(?:(?P<dow>Mon|Tue|Wed|Thu|Fri|Sat|Sun)\s*,)?\s*"
    r"(?P<day>[0-9]|0[1-9]|1[0-9]|2[0-9]|3[01])\s+"
    r"(?P<month>Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+"
    r"(?P<year>[0-9]{4})\s+"
    r"(?P<hour>[01][0-9]|2[0-3]):"
    r"(?P<minute>[0-5][0-9]):"
    r"(?P<second>[0-5][0-9]|6[01])\s+"
    r"(?P<timezone>[-+][01][0-9][0-5][0-9]|GMT|UT|Z)$"
)

# Timestamp format used by SigV4 (x-amz-date and the string to sign)
AMZ_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"

# Start of UNIX time
_epoch = datetime(1970, 1, 1, tzinfo=UTC)

class TimestampFormat(Enum):
    """
    The ways an AWS API serializes timestamps in request and response
    payloads.
    """
    ISO8601 = "iso8601"
    RFC822 = "rfc822"
    UNIX = "unix"

def _offset_from_zone(zone):
    zone = zone.replace(":", "")
    assert len(zone) == 5
    sign = zone[0]
    offset_hour = int(zone[1:3])
    offset_minutes = offset_hour * 60 + int(zone[3:5])

    if sign == "-":
        offset_minutes = -offset_minutes

    if offset_minutes == 0:
        return UTC

    return FixedOffset(offset_minutes)

def parse_iso8601(s):
    """
    Parse a timestamp formatted in ISO 8601 timestamp format and return a
    datetime object. If the string is not a valid ISO 8601 timestmap, None
    is returned.

    ISO 8601 timestamps include the forms:
        2018-12-25T14:00:00-08:00
        20181225T140000-0800            (Condensed)
        2018-12-25T22:00:00Z            (Z == +0000, UTC)
        20181225T220000Z                (Condensed, x-amz-date form)

    If fractional seconds are included, they are ignored.
    """
    m = _iso_8601_regex.match(s)
    if not m:
        return None

    zone = m.group("timezone")
    if zone in ("Z", "z"):
        offset = UTC
    else:
        offset = _offset_from_zone(zone)

    try:
        return datetime(
            year=int(m.group("year")),
            month=int(m.group("month")),
            day=int(m.group("day")),
            hour=int(m.group("hour")),
            minute=int(m.group("minute")),
            second=int(m.group("second")),
            tzinfo=offset)
    except ValueError:
        return None

def parse_rfc2282(s):
    """
    Parse a timestamp formatted in RFC 2282 timestamp format and return a
    datetime object. If the string is not a valid RFC 2282 timestmap, None
    is returned.

    RFC 2282 timestamps are of the form:
        Tue, 25 Dec 2018 14:00:00 -0800
        25 Dec 2018 14:00:00 -0800
        Tue, 25 Dec 2018 22:00:00 GMT
    """
    m = _rfc_2282_regex.match(s)
    if not m:
        return None

    month = _month_names[m.group("month")]
    zone = m.group("timezone")
    if zone in ("GMT", "UT", "Z"):
        offset = UTC
    else:
        offset = _offset_from_zone(zone)

    try:
        return datetime(
            year=int(m.group("year")),
            month=month,
            day=int(m.group("day")),
            hour=int(m.group("hour")),
            minute=int(m.group("minute")),
            second=int(m.group("second")),
            tzinfo=offset)
    except ValueError:
        return None

def to_utc(dt):
    """
    Convert dt to UTC. Naive datetimes are assumed to already be in UTC.
    """
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)

def format_amz_timestamp(dt):
    """
    format_amz_timestamp(dt) -> str

    Render dt in the ISO 8601 basic form used by SigV4: YYYYMMDDTHHMMSSZ.
    """
    return to_utc(dt).strftime(AMZ_TIMESTAMP_FORMAT)

def format_timestamp(dt, fmt):
    """
    format_timestamp(dt, fmt: TimestampFormat) -> str

    Render dt in the given service timestamp format. UNIX timestamps are
    rendered as whole seconds since the epoch.
    """
    dt = to_utc(dt)
    if fmt is TimestampFormat.ISO8601:
        return dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    elif fmt is TimestampFormat.RFC822:
        # Avoid strftime's %a/%b; they are locale dependent.
        return "%s, %02d %s %04d %02d:%02d:%02d GMT" % (
            _day_abbrevs[dt.weekday()], dt.day, _month_abbrevs[dt.month],
            dt.year, dt.hour, dt.minute, dt.second)
    elif fmt is TimestampFormat.UNIX:
        return str(int((dt - _epoch).total_seconds()))

    raise TypeError("Expected fmt to be a TimestampFormat: %r" % (fmt,))

def parse_timestamp(value, fmt):
    """
    parse_timestamp(value: str, fmt: TimestampFormat) -> Optional[datetime]

    Parse a timestamp in the given service timestamp format. If the value
    is not valid for that format, None is returned.
    """
    if fmt is TimestampFormat.ISO8601:
        return parse_iso8601(value)
    elif fmt is TimestampFormat.RFC822:
        return parse_rfc2282(value)
    elif fmt is TimestampFormat.UNIX:
        try:
            return datetime.fromtimestamp(float(value), UTC)
        except (TypeError, ValueError, OverflowError):
            return None

    raise TypeError("Expected fmt to be a TimestampFormat: %r" % (fmt,))


# Local variables:
# mode: Python
# tab-width: 8
# indent-tabs-mode: nil
# End:
# vi: set expandtab tabstop=8
