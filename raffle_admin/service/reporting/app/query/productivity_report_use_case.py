"""
Productivity Report Use Case

Monthly productivity by draw and by seller, and the detail of one draw.
Filters on draw state and seller name are applied after the (cached) fetch.
"""

from raffle_admin.platform.cache.report_cache import ReportCache, build_cache_key
from raffle_admin.platform.exception.exceptions import ValidationError
from raffle_admin.platform.http.retry import retry_async
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.reporting.app.interface import IReportGateway
from raffle_admin.service.reporting.domain.entity.productivity_entity import (
    DrawProductivity,
    MonthlyProductivity,
)


class ProductivityReportUseCase:
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
    async def monthly(
        self, *, year: int, month: int, state: str = '', seller: str = ''
    ) -> MonthlyProductivity:
        if not 1 <= month <= 12:
            raise ValidationError(f'Invalid month {month}', {'month': 'Month must be 1-12'})

        report: MonthlyProductivity = await self.report_cache.get_or_load(
            build_cache_key('productivity', anio=year, mes=month),
            lambda: retry_async(
                lambda: self.gateway.monthly_productivity(year=year, month=month),
                attempts=self.retry_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                label='productivity.monthly',
            ),
        )
        return report.filtered(state=state, seller=seller)

    @Logger.io
    async def for_draw(self, *, draw_id: int) -> DrawProductivity:
        return await self.report_cache.get_or_load(
            build_cache_key('productivity', sorteo=draw_id),
            lambda: retry_async(
                lambda: self.gateway.draw_productivity(draw_id=draw_id),
                attempts=self.retry_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                label='productivity.draw',
            ),
        )
