"""
Release Cupo Use Case

Frees every seat of a sale that still owes money:
1. Soft gate - cupos known to be fully paid are never released (no network call)
2. POST release for the whole sale
3. Refresh the registry
4. Verify every released seat reads AVAILABLE/VOID; anything else is reported
   as an inconsistent release instead of being shown as partial success
"""

from typing import Optional, Union

from opentelemetry import trace

from raffle_admin.platform.cache.report_cache import ReportCache
from raffle_admin.platform.exception.exceptions import (
    BusinessRejectionError,
    CustomBaseError,
    InconsistentReleaseError,
)
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.raffle.app.command.register_payment_use_case import (
    invalidate_sale_reports,
)
from raffle_admin.service.raffle.app.dto import ReleaseResult
from raffle_admin.service.raffle.app.interface import IRaffleGateway
from raffle_admin.service.raffle.app.state.seat_registry import SeatRegistry
from raffle_admin.service.raffle.domain.entity.sale_entity import SaleSummary
from raffle_admin.service.raffle.domain.entity.seat_entity import Seat
from raffle_admin.service.raffle.domain.enum.seat_state import SeatState


RELEASED_STATES = frozenset({SeatState.AVAILABLE, SeatState.VOID})


class ReleaseCupoUseCase:
    def __init__(
        self,
        *,
        gateway: IRaffleGateway,
        registry: SeatRegistry,
        report_cache: Optional[ReportCache] = None,
    ) -> None:
        self.gateway = gateway
        self.registry = registry
        self.report_cache = report_cache
        self.tracer = trace.get_tracer(__name__)

    @staticmethod
    def check_releasable(target: Union[Seat, SaleSummary]) -> int:
        """Returns the sale id; raises when the release must not even be attempted."""
        sale_id = target.sale_id
        if sale_id is None:
            raise BusinessRejectionError('This seat has no sale to release', 400)

        override = (
            target.flags.can_liberarse if isinstance(target, Seat) else target.can_release
        )
        if override is False:
            raise BusinessRejectionError(
                f'Sale {sale_id} cannot be released in this draw', terminal=True
            )
        # Only a balance the backend actually reported as zero is terminal
        if override is None and target.ledger.balance_known and target.balance <= 0:
            raise BusinessRejectionError(
                f'Sale {sale_id} is fully paid; a paid cupo cannot be released', terminal=True
            )
        return sale_id

    def _seat_numbers_of(self, *, target: Union[Seat, SaleSummary], sale_id: int) -> tuple[int, ...]:
        numbers: set[int] = {seat.number for seat in self.registry.seats_of_sale(sale_id)}
        if isinstance(target, Seat):
            numbers.update(target.released_numbers)
        else:
            numbers.update(target.seat_numbers)
        return tuple(sorted(numbers))

    @Logger.io
    async def execute(self, target: Union[Seat, SaleSummary]) -> ReleaseResult:
        sale_id = self.check_releasable(target)
        seat_numbers = self._seat_numbers_of(target=target, sale_id=sale_id)

        with self.tracer.start_as_current_span(
            'use_case.release_cupo',
            attributes={'sale.id': sale_id, 'seat.count': len(seat_numbers)},
        ) as span:
            try:
                await self.gateway.release_sale(sale_id=sale_id)
            except CustomBaseError as e:
                span.set_status(trace.Status(trace.StatusCode.ERROR, e.message))
                raise

            invalidate_sale_reports(self.report_cache)
            labels = ', '.join(f'{n:02d}' for n in seat_numbers)
            Logger.base.info(f'✅ [RELEASE-CUPO] Sale {sale_id} released (seats {labels})')

            refresh_error: Optional[CustomBaseError] = None
            try:
                await self.registry.refresh()
            except CustomBaseError as e:
                Logger.base.warning(f'⚠️ [RELEASE-CUPO] Sale {sale_id} released, refresh failed: {e}')
                refresh_error = e
            else:
                self._verify_released(sale_id=sale_id, seat_numbers=seat_numbers)

            noun = 'seat' if len(seat_numbers) == 1 else 'seats'
            return ReleaseResult(
                sale_id=sale_id,
                released_seat_numbers=seat_numbers,
                message=f'Released {noun} {labels} of sale {sale_id}',
                refresh_error=refresh_error,
            )

    def _verify_released(self, *, sale_id: int, seat_numbers: tuple[int, ...]) -> None:
        still_claimed = [
            number
            for number in seat_numbers
            if (seat := self.registry.get(number)) is not None
            and (seat.state not in RELEASED_STATES or seat.sale_id == sale_id)
        ]
        if still_claimed:
            Logger.base.error(
                f'❌ [RELEASE-CUPO] Sale {sale_id} still holds seats {still_claimed} after release'
            )
            raise InconsistentReleaseError(sale_id, still_claimed)
