import datetime as dt

import pytest

from blogsite.utils import as_utc, join_url, parse_bool, parse_int, rfc822_date


@pytest.mark.parametrize(
    "base, path, expected",
    [
        ("https://x.test", "/posts/a/", "https://x.test/posts/a/"),
        ("https://x.test/", "open-graph/posts/a.png", "https://x.test/open-graph/posts/a.png"),
        ("https://x.test", "", "https://x.test/"),
        ("", "/posts/a/", "/posts/a/"),
    ],
)
def test_join_url(base, path, expected):
    assert join_url(base, path) == expected


@pytest.mark.parametrize("value, expected", [(True, True), ("yes", True), ("off", False), (None, False), (0, False)])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


def test_parse_int_falls_back():
    assert parse_int("x", 3) == 3
    assert parse_int(" 7 ", 3) == 7


def test_as_utc_and_rfc822():
    eastern = dt.timezone(dt.timedelta(hours=-5))
    assert as_utc(dt.datetime(2024, 1, 1, 20, tzinfo=eastern)) == dt.datetime(2024, 1, 2, 1, tzinfo=dt.timezone.utc)
    assert rfc822_date(dt.date(2024, 1, 1)) == "Mon, 01 Jan 2024 00:00:00 +0000"
