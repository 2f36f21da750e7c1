from datetime import date, datetime, timedelta, timezone

import pytest

from xmlrpc_api.codec.dates import format_iso8601, parse_iso8601
from xmlrpc_api.utils.exceptions import XmlRpcValueError


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2004-09-13", date(2004, 9, 13)),
        ("20040913", date(2004, 9, 13)),
        ("2001-01-01T13:01", datetime(2001, 1, 1, 13, 1, tzinfo=timezone.utc)),
        ("19980717T14:08:55", datetime(1998, 7, 17, 14, 8, 55, tzinfo=timezone.utc)),
        ("2004-09-13T02:38:00Z", datetime(2004, 9, 13, 2, 38, tzinfo=timezone.utc)),
        ("2004-09-13T02:38:00.25Z", datetime(2004, 9, 13, 2, 38, 0, 250000, tzinfo=timezone.utc)),
    ],
)
def test_parse_iso8601_forms(text, expected):
    assert parse_iso8601(text) == expected


def test_parse_iso8601_offsets():
    parsed = parse_iso8601("2004-09-13T02:38:00+05:30")
    assert parsed.utcoffset() == timedelta(hours=5, minutes=30)
    assert parse_iso8601("2004-09-13T02:38:00-0700").utcoffset() == timedelta(hours=-7)


def test_parse_iso8601_tolerates_surrounding_whitespace():
    assert parse_iso8601("  2004-09-13\n") == date(2004, 9, 13)


@pytest.mark.parametrize("text", ["", "yesterday", "2004-13-40", "2004-09-13T25:00:00"])
def test_parse_iso8601_rejects_malformed(text):
    with pytest.raises(XmlRpcValueError):
        parse_iso8601(text)


def test_format_iso8601():
    assert format_iso8601(date(2004, 9, 13)) == "2004-09-13"
    assert format_iso8601(datetime(2004, 9, 13, 2, 38)) == "2004-09-13T02:38:00Z"
    minus_seven = timezone(timedelta(hours=-7))
    assert format_iso8601(datetime(2004, 9, 13, 2, 38, tzinfo=minus_seven)) == "2004-09-13T02:38:00-07:00"


def test_format_iso8601_fraction_only_when_present():
    assert format_iso8601(datetime(2004, 9, 13, 2, 38, 0, 250000, tzinfo=timezone.utc)) == "2004-09-13T02:38:00.250000Z"
    assert format_iso8601(datetime(2004, 9, 13, 2, 38, 0, 7)) == "2004-09-13T02:38:00.000007Z"
    value = datetime(2004, 9, 13, 2, 38, 0, 7, tzinfo=timezone(timedelta(hours=2)))
    assert parse_iso8601(format_iso8601(value)) == value


def test_format_iso8601_rejects_sub_minute_offsets():
    odd = timezone(timedelta(seconds=-90))
    with pytest.raises(XmlRpcValueError):
        format_iso8601(datetime(2004, 9, 13, 2, 38, tzinfo=odd))
