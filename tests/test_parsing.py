from datetime import datetime

import pytest

from twproxy.data.parsing import (
    derive_change,
    extract_cdata,
    extract_plain,
    extract_tag,
    prev_trading_day,
    strip_html,
    to_float,
    to_int,
    today_str,
)


@pytest.mark.parametrize("raw, expected", [
    ("1,234.50", 1234.5),
    ("985.00", 985.0),
    ("-", 0.0),
    ("--", 0.0),
    ("", 0.0),
    (None, 0.0),
    ("12.3abc", 12.3),
    (7, 7.0),
])
def test_to_float(raw, expected):
    assert to_float(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("12,345", 12345),
    ("12.9", 12),
    ("-", 0),
    (None, 0),
    (42, 42),
])
def test_to_int(raw, expected):
    assert to_int(raw) == expected


def test_derive_change():
    assert derive_change(1000.0, 990.0) == (10.0, 1.01)
    assert derive_change(980.0, 990.0) == (-10.0, -1.01)


def test_change_pct_is_zero_without_previous_close():
    assert derive_change(5.0, 0.0) == (5.0, 0)
    assert derive_change(5.0, -1.0)[1] == 0


@pytest.mark.parametrize("date, expected", [
    ("20250101", "20241231"),  # Wednesday -> Tuesday
    ("20250106", "20250103"),  # Monday -> Friday
    ("20250105", "20250103"),  # Sunday -> Friday
    ("20250104", "20250103"),  # Saturday -> Friday
])
def test_prev_trading_day(date, expected):
    assert prev_trading_day(date) == expected


def test_prev_trading_day_never_lands_on_weekend():
    for day in range(1, 32):
        prev = prev_trading_day(f"202503{day:02d}")
        assert datetime.strptime(prev, "%Y%m%d").weekday() < 5


def test_today_str_is_compact_digits():
    value = today_str()
    assert len(value) == 8 and value.isdigit()


def test_extract_tag_prefers_cdata_content():
    block = "<title><![CDATA[台積電 法說會]]></title><pubDate>Mon, 03 Feb 2025</pubDate>"
    assert extract_tag(block, "title") == "台積電 法說會"
    assert extract_tag(block, "pubDate") == "Mon, 03 Feb 2025"
    assert extract_tag(block, "description") == ""


def test_extract_tag_accepts_attributes():
    assert extract_tag('<guid isPermaLink="false">abc-1</guid>', "guid") == "abc-1"


def test_cdata_and_plain_halves():
    block = "<link><![CDATA[https://a.example/1]]></link>"
    assert extract_cdata(block, "link") == "https://a.example/1"
    assert extract_cdata("<link>https://b.example</link>", "link") == ""
    assert extract_plain("<link>https://b.example</link>", "link") == "https://b.example"


def test_strip_html():
    assert strip_html("<p>Hello&nbsp;<b>world</b></p>") == "Hello world"
    assert strip_html("") == ""
