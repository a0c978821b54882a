"""
Unit tests for ReportCache

Tests TTL expiry, prefix invalidation and get_or_load.
"""

from unittest.mock import AsyncMock

import pytest

from raffle_admin.platform.cache.report_cache import ReportCache, build_cache_key


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.unit
class TestBuildCacheKey:
    def test_sorted_params_and_none_skipped(self) -> None:
        key = build_cache_key('receivables', telefono=None, sorteo='vigente', debe='true')

        assert key == 'receivables:debe=true&sorteo=vigente'

    def test_no_params(self) -> None:
        assert build_cache_key('draws') == 'draws:'


@pytest.mark.unit
class TestReportCache:
    @pytest.fixture
    def clock(self) -> _Clock:
        return _Clock()

    @pytest.fixture
    def cache(self, clock: _Clock) -> ReportCache:
        return ReportCache(ttl_seconds=30.0, clock=clock)

    # =========================================================================
    # TTL
    # =========================================================================

    def test_fresh_entry_is_returned(self, cache: ReportCache, clock: _Clock) -> None:
        cache.set('draws:', [1])
        clock.now += 29.9

        assert cache.get('draws:') == [1]

    def test_expired_entry_is_dropped(self, cache: ReportCache, clock: _Clock) -> None:
        cache.set('draws:', [1])
        clock.now += 30.0

        assert cache.get('draws:') is None

    # =========================================================================
    # Invalidation
    # =========================================================================

    def test_invalidate_by_prefix(self, cache: ReportCache) -> None:
        cache.set('receivables:debe=true', [1])
        cache.set('receivables:debe=true&nombre=ana', [2])
        cache.set('expenses:fecha_fin=2026-01-01', [3])

        dropped = cache.invalidate('receivables:')

        assert dropped == 2
        assert cache.get('receivables:debe=true') is None
        assert cache.get('expenses:fecha_fin=2026-01-01') == [3]

    def test_clear(self, cache: ReportCache) -> None:
        cache.set('a:', 1)
        cache.clear()

        assert cache.get('a:') is None

    # =========================================================================
    # get_or_load
    # =========================================================================

    @pytest.mark.asyncio
    async def test_get_or_load_calls_loader_once(self, cache: ReportCache) -> None:
        loader = AsyncMock(return_value=['row'])

        first = await cache.get_or_load('receivables:', loader)
        second = await cache.get_or_load('receivables:', loader)

        assert first == second == ['row']
        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_result_is_cached_too(self, cache: ReportCache) -> None:
        loader = AsyncMock(return_value=[])

        await cache.get_or_load('expenses:', loader)
        await cache.get_or_load('expenses:', loader)

        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_loader_error_is_not_cached(self, cache: ReportCache) -> None:
        loader = AsyncMock(side_effect=[RuntimeError('boom'), ['row']])

        with pytest.raises(RuntimeError):
            await cache.get_or_load('draws:', loader)

        assert await cache.get_or_load('draws:', loader) == ['row']
