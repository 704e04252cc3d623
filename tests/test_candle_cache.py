"""Tests for the candle cache refresh rules and bulk refresh."""

import asyncio
from datetime import timedelta
from unittest.mock import patch

import pytest

from conftest import make_candle
from stockthemes.schemas.market import BarSize, LookbackRange, TimeInterval
from stockthemes.services.base import BulkFetchError, ExternalAPIError
from stockthemes.services.bulk import run_bulk
from stockthemes.services.candles import CandleCacheService

FRESHNESS = "stockthemes.services.candles.service.is_up_to_date"


@pytest.fixture
def cache(store, provider) -> CandleCacheService:
    return CandleCacheService(store, provider)


@pytest.mark.asyncio
async def test_empty_cache_fetches_full_window(cache, store, provider, recent_candles):
    provider.fetch.return_value = recent_candles

    candles = await cache.ensure_candles("AAPL")

    assert candles == recent_candles
    provider.fetch.assert_awaited_once_with("AAPL", BarSize.D1, LookbackRange.TWO_YEARS)
    assert len(await store.get_candles("AAPL")) == len(recent_candles)


@pytest.mark.asyncio
async def test_fresh_cache_skips_provider(cache, store, provider, recent_candles):
    await store.save_candles("AAPL", recent_candles)

    with patch(FRESHNESS, return_value=True):
        candles = await cache.ensure_candles("AAPL")

    assert [c.close for c in candles] == [c.close for c in recent_candles]
    provider.fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_stale_cache_refetches_from_day_before_new_latest(cache, store, provider, recent_candles):
    await store.save_candles("AAPL", recent_candles)

    second_last, last = recent_candles[-2], recent_candles[-1]
    provider.fetch.return_value = [
        make_candle(second_last.timestamp, 200.0),
        make_candle(last.timestamp, 201.0),
        make_candle(last.timestamp + timedelta(days=1), 202.0),
    ]

    with patch(FRESHNESS, return_value=False):
        candles = await cache.ensure_candles("AAPL")

    ticker, bar_size, time_spec = provider.fetch.await_args.args
    assert (ticker, bar_size) == ("AAPL", BarSize.D1)
    assert isinstance(time_spec, TimeInterval)
    assert time_spec.start == second_last.timestamp - timedelta(days=1)

    assert len(candles) == len(recent_candles) + 1
    assert [c.close for c in candles[-3:]] == [200.0, 201.0, 202.0]
    assert candles[0].close == recent_candles[0].close
    timestamps = [c.timestamp for c in candles]
    assert timestamps == sorted(set(timestamps))


@pytest.mark.asyncio
async def test_stale_single_bar_uses_default_lookback(cache, store, provider, recent_candles):
    await store.save_candles("AAPL", recent_candles[-1:])
    provider.fetch.return_value = recent_candles

    with patch(FRESHNESS, return_value=False):
        candles = await cache.ensure_candles("AAPL")

    time_spec = provider.fetch.await_args.args[2]
    assert time_spec.end - time_spec.start >= timedelta(days=365 * 2)
    assert len(candles) == len(recent_candles)


@pytest.mark.asyncio
async def test_provider_errors_propagate(cache, provider):
    provider.fetch.side_effect = ExternalAPIError("YahooFinance", "timeout")

    with pytest.raises(ExternalAPIError):
        await cache.ensure_candles("AAPL")


@pytest.mark.asyncio
async def test_refresh_many_reports_every_failure_with_partial_results(cache, provider, recent_candles):
    async def fetch(ticker, bar_size, time_spec, extended_hours=False):
        if ticker in ("BAD", "WORSE"):
            raise ExternalAPIError("YahooFinance", f"no data for {ticker}")
        return recent_candles

    provider.fetch.side_effect = fetch

    with pytest.raises(BulkFetchError) as exc_info:
        await cache.refresh_many(["AAPL", "BAD", "MSFT", "WORSE"])

    error = exc_info.value
    assert set(error.failures) == {"BAD", "WORSE"}
    assert set(error.results) == {"AAPL", "MSFT"}
    assert "BAD, WORSE" in str(error)
    assert provider.fetch.await_count == 4


@pytest.mark.asyncio
async def test_refresh_many_returns_all_on_success(cache, provider, recent_candles):
    provider.fetch.return_value = recent_candles

    results = await cache.refresh_many(["AAPL", "MSFT", "AAPL"])

    assert list(results) == ["AAPL", "MSFT"]


@pytest.mark.asyncio
async def test_run_bulk_bounds_concurrency():
    in_flight = 0
    peak = 0

    async def work(ticker: str) -> str:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return ticker.lower()

    results = await run_bulk("Test", [f"T{i}" for i in range(10)], work, limit=3)

    assert peak == 3
    assert results["T7"] == "t7"


@pytest.mark.asyncio
async def test_health_check_reflects_store(cache, store):
    assert await cache.health_check() is True

    with patch.object(store, "ping", return_value=False):
        assert await cache.health_check() is False
