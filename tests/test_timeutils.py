from datetime import datetime

import pytest
from pytz import utc

from seatscape.timeutils import (
    TimeInputError,
    add_minutes,
    convert_local_iso,
    diff_minutes,
    format_local,
    format_utc,
    local_iso_to_utc,
    parse_local_iso,
    utc_to_local_iso,
)


def test_local_to_utc():
    assert local_iso_to_utc("2025-08-10T18:30", "Asia/Kolkata") == utc.localize(
        datetime(2025, 8, 10, 13, 0)
    )


def test_local_to_utc_across_date_line():
    assert local_iso_to_utc("2025-01-01T00:00", "America/Los_Angeles") == utc.localize(
        datetime(2025, 1, 1, 8, 0)
    )


@pytest.mark.parametrize("value", ["2025-08-10 18:30", "10/08/2025", "", "2025-13-01T00:00"])
def test_malformed_local_time(value):
    with pytest.raises(TimeInputError):
        parse_local_iso(value)


def test_unknown_zone():
    with pytest.raises(TimeInputError):
        local_iso_to_utc("2025-08-10T18:30", "Mars/Olympus_Mons")


def test_dst_gap_rejected():
    with pytest.raises(TimeInputError):
        local_iso_to_utc("2025-03-09T02:30", "America/New_York")


def test_dst_overlap_rejected():
    with pytest.raises(TimeInputError):
        local_iso_to_utc("2025-11-02T01:30", "America/New_York")


def test_time_input_error_is_value_error():
    assert issubclass(TimeInputError, ValueError)


def test_convert_between_zones():
    assert convert_local_iso("2025-08-10T18:30", "Asia/Kolkata", "Asia/Dubai") == "2025-08-10T17:00"


def test_utc_to_local_iso_and_format_local():
    when = utc.localize(datetime(2025, 1, 10, 4, 30))
    assert utc_to_local_iso(when, "Asia/Kolkata") == "2025-01-10T10:00"
    assert format_local(when, "Asia/Dubai", "%H:%M") == "08:30"


def test_minute_arithmetic():
    start = utc.localize(datetime(2025, 1, 1, 23, 50))
    end = add_minutes(start, 25)
    assert end == utc.localize(datetime(2025, 1, 2, 0, 15))
    assert diff_minutes(start, end) == 25
    assert diff_minutes(end, start) == -25


def test_format_utc_millisecond_resolution():
    when = utc.localize(datetime(2025, 8, 10, 13, 0, 5, 123456))
    assert format_utc(when) == "2025-08-10T13:00:05.123Z"
