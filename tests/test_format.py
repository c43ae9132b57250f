from datetime import datetime, timedelta, timezone

import pytest

from mailroom.format import (
    FormatError,
    InvalidEmailMonthError,
    InvalidEmailTypeError,
    InvalidEmailYearError,
    InvalidFormatForTypeYearMonthError,
    date,
    date_time,
    extract_type_year_month,
    rejoin_date,
    rfc3339,
    type_year_month,
)

UTC_MINUS_7 = timezone(timedelta(hours=-7), "UTC-7")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Fri, 30 Nov 2012 06:02:48 -0700", "2012-11-30T06:02:48-07:00"),
        ("Invalid Date", ""),
    ],
)
def test_date(value, expected):
    assert date(value) == expected


@pytest.mark.parametrize(
    "t, expected",
    [
        (datetime(2021, 9, 10, 21, 57, 52, tzinfo=timezone.utc), "2021-09-10T21:57:52Z"),
        (datetime(2021, 9, 10, 21, 57, 52, tzinfo=UTC_MINUS_7), "2021-09-10T21:57:52-07:00"),
    ],
)
def test_rfc3339(t, expected):
    assert rfc3339(t) == expected


@pytest.mark.parametrize(
    "email_type, t, expected",
    [
        ("inbox", datetime(2022, 3, 10, 21, 57, 52, tzinfo=timezone.utc), "inbox#2022-03"),
        ("sent", datetime(2021, 9, 10, 21, 57, 52, tzinfo=timezone.utc), "sent#2021-09"),
        ("draft", datetime(2021, 9, 10, 21, 57, 52, tzinfo=timezone.utc), "draft#2021-09"),
    ],
)
def test_type_year_month(email_type, t, expected):
    assert type_year_month(email_type, t) == expected


def test_type_year_month_invalid_type():
    with pytest.raises(InvalidEmailTypeError):
        type_year_month("invalid", datetime(2021, 9, 10, 21, 57, 52, tzinfo=timezone.utc))


@pytest.mark.parametrize(
    "t, expected",
    [
        (datetime(2022, 3, 10, 21, 57, 52, tzinfo=timezone.utc), "10-21:57:52"),
        (datetime(2021, 9, 10, 21, 0, 0, tzinfo=timezone.utc), "10-21:00:00"),
    ],
)
def test_date_time(t, expected):
    assert date_time(t) == expected


@pytest.mark.parametrize(
    "ym, dt, expected",
    [
        ("2022-03", "10-21:00:00", "2022-03-10T21:00:00Z"),
        ("2021-09", "10-21:57:52", "2021-09-10T21:57:52Z"),
    ],
)
def test_rejoin_date(ym, dt, expected):
    assert rejoin_date(ym, dt) == expected


def test_split_and_rejoin_round_trip():
    t = datetime(2022, 3, 10, 21, 57, 52, tzinfo=timezone.utc)
    _, ym = extract_type_year_month(type_year_month("inbox", t))
    assert rejoin_date(ym, date_time(t)) == rfc3339(t)


@pytest.mark.parametrize(
    "value, email_type, year_month",
    [
        ("inbox#2021-01", "inbox", "2021-01"),
        ("sent#2021-01", "sent", "2021-01"),
        ("sent#2021-02", "sent", "2021-02"),
        ("sent#2021-03", "sent", "2021-03"),
        ("sent#2021-09", "sent", "2021-09"),
        ("sent#2021-10", "sent", "2021-10"),
        ("sent#2021-11", "sent", "2021-11"),
        ("sent#2021-12", "sent", "2021-12"),
        ("draft#2021-01", "draft", "2021-01"),
    ],
)
def test_extract_type_year_month(value, email_type, year_month):
    assert extract_type_year_month(value) == (email_type, year_month)


@pytest.mark.parametrize(
    "value, error",
    [
        ("invalid", InvalidFormatForTypeYearMonthError),
        ("inbox#2022", InvalidFormatForTypeYearMonthError),
        ("invalid#03", InvalidFormatForTypeYearMonthError),
        ("sent#999-01", InvalidEmailYearError),
        ("sent#2021-00", InvalidEmailMonthError),
        ("sent#2021-13", InvalidEmailMonthError),
        ("invalid#2021-01", InvalidEmailTypeError),
    ],
)
def test_extract_type_year_month_errors(value, error):
    with pytest.raises(error):
        extract_type_year_month(value)


def test_format_errors_share_base():
    with pytest.raises(FormatError):
        extract_type_year_month("invalid")