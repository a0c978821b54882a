from unittest.mock import AsyncMock

import pytest

from raffle_admin.platform.cache.report_cache import ReportCache
from raffle_admin.platform.exception.exceptions import NetworkError
from raffle_admin.service.reporting.app.interface import IReportGateway
from raffle_admin.service.reporting.app.query.draw_dashboard_use_case import DrawDashboardUseCase
from raffle_admin.service.reporting.domain.entity.draw_dashboard_entity import (
    DrawSellerSales,
    SeatStatistics,
    SellerSalesRow,
)


STATISTICS = SeatStatistics(total=100, available=60, reserved=25, sold=10, blocked=5, void=0)
SELLER_SALES = DrawSellerSales(
    draw_id=7,
    sellers=(
        SellerSalesRow(seller_id=1, name='Marta Gomez', total_paid=70000, total_partial=15000),
        SellerSalesRow(seller_id=2, name='Luis Perez', total_paid=35000),
    ),
)


@pytest.mark.unit
class TestDrawDashboardUseCase:
    @pytest.fixture
    def report_cache(self) -> ReportCache:
        return ReportCache(ttl_seconds=30)

    @pytest.fixture
    def mock_gateway(self) -> AsyncMock:
        gateway = AsyncMock(spec=IReportGateway)
        gateway.seat_statistics.return_value = STATISTICS
        gateway.draw_seller_sales.return_value = SELLER_SALES
        return gateway

    @pytest.fixture
    def use_case(self, mock_gateway: AsyncMock, report_cache: ReportCache) -> DrawDashboardUseCase:
        return DrawDashboardUseCase(
            gateway=mock_gateway, report_cache=report_cache, retry_backoff_seconds=0
        )

    @pytest.mark.asyncio
    async def test_seat_statistics_cached_per_draw(
        self, use_case: DrawDashboardUseCase, mock_gateway: AsyncMock
    ) -> None:
        first = await use_case.seat_statistics(draw_id=7)
        await use_case.seat_statistics(draw_id=7)
        await use_case.seat_statistics(draw_id=8)

        assert first.is_consistent
        assert mock_gateway.seat_statistics.await_count == 2
        mock_gateway.seat_statistics.assert_any_await(draw_id=7)
        mock_gateway.seat_statistics.assert_any_await(draw_id=8)

    @pytest.mark.asyncio
    async def test_seller_sales_cached_apart_from_statistics(
        self, use_case: DrawDashboardUseCase, mock_gateway: AsyncMock
    ) -> None:
        await use_case.seat_statistics(draw_id=7)
        sales = await use_case.seller_sales(draw_id=7)
        await use_case.seller_sales(draw_id=7)

        assert sales.total_collected == 120000
        mock_gateway.draw_seller_sales.assert_awaited_once_with(draw_id=7)

    @pytest.mark.asyncio
    async def test_sale_invalidation_refetches(
        self, use_case: DrawDashboardUseCase, mock_gateway: AsyncMock, report_cache: ReportCache
    ) -> None:
        await use_case.seat_statistics(draw_id=7)

        report_cache.invalidate('dashboard:')
        await use_case.seat_statistics(draw_id=7)

        assert mock_gateway.seat_statistics.await_count == 2

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(
        self, use_case: DrawDashboardUseCase, mock_gateway: AsyncMock
    ) -> None:
        mock_gateway.draw_seller_sales.side_effect = [NetworkError('down'), SELLER_SALES]

        sales = await use_case.seller_sales(draw_id=7)

        assert sales.draw_id == 7
        assert mock_gateway.draw_seller_sales.await_count == 2

    def test_inconsistent_counts(self) -> None:
        assert not SeatStatistics(total=100, available=60).is_consistent
