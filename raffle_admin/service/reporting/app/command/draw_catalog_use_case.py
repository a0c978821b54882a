"""
Draw Catalog Use Case

List, inspect, create and change the state of draws, and list the lotteries a
new draw can be played against. Both lists are cached; every draw mutation
invalidates the draw list.
"""

from datetime import datetime
from typing import Callable

from raffle_admin.platform.cache.report_cache import ReportCache, build_cache_key
from raffle_admin.platform.exception.exceptions import ValidationError
from raffle_admin.platform.http.retry import retry_async
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.reporting.app.interface import IDrawCatalogGateway
from raffle_admin.service.shared_kernel.domain.entity.draw_entity import (
    Draw,
    DrawCreate,
    Lottery,
)
from raffle_admin.service.shared_kernel.domain.enum.draw_state import DrawState


class DrawCatalogUseCase:
    def __init__(
        self,
        *,
        gateway: IDrawCatalogGateway,
        report_cache: ReportCache,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 0.6,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.gateway = gateway
        self.report_cache = report_cache
        self.retry_attempts = retry_attempts
        self.retry_backoff_seconds = retry_backoff_seconds
        self.now = now

    @Logger.io
    async def list_draws(self) -> list[Draw]:
        return await self.report_cache.get_or_load(
            build_cache_key('draws'),
            lambda: retry_async(
                self.gateway.list_draws,
                attempts=self.retry_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                label='draws',
            ),
        )

    @Logger.io
    async def list_lotteries(self) -> list[Lottery]:
        return await self.report_cache.get_or_load(
            build_cache_key('lotteries'),
            lambda: retry_async(
                self.gateway.list_lotteries,
                attempts=self.retry_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                label='lotteries',
            ),
        )

    @Logger.io
    async def detail(self, *, draw_id: int) -> Draw:
        return await self.gateway.get_draw(draw_id=draw_id)

    @Logger.io
    async def create(self, draw: DrawCreate) -> Draw:
        draw_datetime = draw.draw_datetime
        now = self.now() if draw_datetime.tzinfo is None else self.now().astimezone(draw_datetime.tzinfo)
        if draw_datetime <= now:
            raise ValidationError(
                'The draw date must be in the future', {'draw_datetime': 'Pick a future date'}
            )

        created = await self.gateway.create_draw(draw)
        self.report_cache.invalidate('draws:')
        Logger.base.info(f'🎟️ [DRAW] Created {created.name} ({created.raw_state or "no state"})')
        return created

    @Logger.io
    async def update_state(self, *, draw_id: int, state: DrawState) -> None:
        await self.gateway.update_draw_state(draw_id=draw_id, state=state)
        self.report_cache.invalidate('draws:')
        Logger.base.info(f'🎟️ [DRAW] Draw {draw_id} is now {state}')
