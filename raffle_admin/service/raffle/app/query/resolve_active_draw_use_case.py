from typing import Optional

from opentelemetry import trace

from raffle_admin.platform.exception.exceptions import AuthenticationError, CustomBaseError
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.raffle.app.interface import IRaffleGateway
from raffle_admin.service.shared_kernel.domain.entity.draw_entity import Draw


def pick_active_draw_id(draws: list[Draw]) -> Optional[int]:
    """Highest positive id among ACTIVO draws, or None."""
    active_ids = [draw.draw_id for draw in draws if draw.is_active and draw.draw_id > 0]
    return max(active_ids) if active_ids else None


class ResolveActiveDrawUseCase:
    """
    Picks the draw the seat grid opens on.

    Falls back to the configured default when the list is empty, has no
    active draw, or cannot be fetched. Authentication failures propagate.
    """

    def __init__(self, *, gateway: IRaffleGateway, default_draw_id: int) -> None:
        self.gateway = gateway
        self.default_draw_id = default_draw_id
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(self) -> int:
        with self.tracer.start_as_current_span('use_case.resolve_active_draw') as span:
            try:
                draws = await self.gateway.list_draws()
            except AuthenticationError:
                raise
            except CustomBaseError as e:
                Logger.base.warning(
                    f'⚠️ [ACTIVE-DRAW] Draw list unavailable ({e}), using default {self.default_draw_id}'
                )
                span.set_attribute('draw.fallback', True)
                return self.default_draw_id

            draw_id = pick_active_draw_id(draws)
            if draw_id is None:
                Logger.base.info(
                    f'[ACTIVE-DRAW] No active draw among {len(draws)}, using default {self.default_draw_id}'
                )
                span.set_attribute('draw.fallback', True)
                return self.default_draw_id

            span.set_attribute('draw.id', draw_id)
            return draw_id
