"""Tests for percentage parsing and group-name normalization."""

import pytest

from stockthemes.core.parsing import normalize_name, parse_percentage
from stockthemes.schemas.performance import Performance, TickerType
from stockthemes.services.base import ParseError


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("+3.21%", 3.21),
        ("−1.05%", -1.05),
        ("-1.05%", -1.05),
        ("1,234%", 1234.0),
        ("  0.5 % ", 0.5),
        ("12", 12.0),
    ],
)
def test_parse_percentage(raw, expected):
    assert parse_percentage(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", "abc%", "—", "1.2.3%"])
def test_parse_percentage_rejects_garbage(raw):
    with pytest.raises(ParseError) as exc_info:
        parse_percentage(raw)

    assert exc_info.value.raw == raw
    assert repr(raw) in str(exc_info.value)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("electronic technology", "Electronic Technology"),
        ("  OIL  &   GAS  ", "Oil & Gas"),
        ("semiconductors∕equipment", "Semiconductors/Equipment"),
        ("media／entertainment", "Media/Entertainment"),
        ("real\testate\ninvestment", "Real Estate Investment"),
    ],
)
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


def test_ticker_type_parse():
    assert TickerType.parse("Industry") is TickerType.INDUSTRY

    with pytest.raises(ParseError) as exc_info:
        TickerType.parse("Fund")
    assert exc_info.value.raw == "Fund"


def test_performance_from_percent_map():
    perf = Performance.from_percent_map(
        "XLK", TickerType.SECTOR, {"1M": 1.5, "6M": -2.0, "YTD": 4.0}
    )

    assert perf.perf_1m == 1.5
    assert perf.perf_3m == 0.0
    assert perf.perf_6m == -2.0
    assert perf.perf_1y == 0.0
    assert perf.extra_info == {"YTD": 4.0}
    assert perf.last_updated.tzinfo is not None
