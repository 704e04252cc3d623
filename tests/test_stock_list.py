"""Tests for watchlist reading."""

from unittest.mock import patch

from stockthemes.services.data_ingestion import read_stocks


def test_read_stocks_first_column_unique_in_order(tmp_path):
    first = tmp_path / "tech.csv"
    first.write_text("Symbol,Name\nnvda,Nvidia\n AMD ,Advanced Micro\n\nAAPL,Apple\n")
    second = tmp_path / "more.csv"
    second.write_text("Symbol,Name\nmsft,Microsoft\nNVDA,Nvidia\n")

    stocks = read_stocks([first, second], skip_lines=1, ignored_stocks=[])

    assert stocks == ["NVDA", "AMD", "AAPL", "MSFT"]


def test_read_stocks_skips_listed_and_ignored(tmp_path):
    watchlist = tmp_path / "list.csv"
    watchlist.write_text("AAPL\nMSFT\nBRK.A\nGOOG\nTSLA\n")

    stocks = read_stocks([watchlist], skip_stocks=" msft, ,tsla", ignored_stocks=["brk.a"])

    assert stocks == ["AAPL", "GOOG"]


def test_read_stocks_uses_configured_ignores(tmp_path):
    watchlist = tmp_path / "list.csv"
    watchlist.write_text("AAPL\nBRK.A\n")

    with patch("stockthemes.services.data_ingestion.stock_list.settings") as settings:
        settings.ignored_stocks = ["BRK.A"]
        stocks = read_stocks([watchlist])

    assert stocks == ["AAPL"]
