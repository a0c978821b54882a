"""
Draw Dashboard Use Case

Per-draw seat statistics and sales by seller. Both are cached under the
`dashboard:` namespace, which every sale mutation invalidates.
"""

from raffle_admin.platform.cache.report_cache import ReportCache, build_cache_key
from raffle_admin.platform.http.retry import retry_async
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.reporting.app.interface import IReportGateway
from raffle_admin.service.reporting.domain.entity.draw_dashboard_entity import (
    DrawSellerSales,
    SeatStatistics,
)


class DrawDashboardUseCase:
    def __init__(
        self,
        *,
        gateway: IReportGateway,
        report_cache: ReportCache,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 0.6,
    ) -> None:
        self.gateway = gateway
        self.report_cache = report_cache
        self.retry_attempts = retry_attempts
        self.retry_backoff_seconds = retry_backoff_seconds

    @Logger.io
    async def seat_statistics(self, *, draw_id: int) -> SeatStatistics:
        statistics: SeatStatistics = await self.report_cache.get_or_load(
            build_cache_key('dashboard', sorteo=draw_id, vista='puestos'),
            lambda: retry_async(
                lambda: self.gateway.seat_statistics(draw_id=draw_id),
                attempts=self.retry_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                label='dashboard.seats',
            ),
        )
        if not statistics.is_consistent:
            Logger.base.warning(
                f'📊 [DASHBOARD] Draw {draw_id} counts {statistics.counted} of {statistics.total} seats'
            )
        return statistics

    @Logger.io
    async def seller_sales(self, *, draw_id: int) -> DrawSellerSales:
        return await self.report_cache.get_or_load(
            build_cache_key('dashboard', sorteo=draw_id, vista='vendedores'),
            lambda: retry_async(
                lambda: self.gateway.draw_seller_sales(draw_id=draw_id),
                attempts=self.retry_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                label='dashboard.sellers',
            ),
        )
