"""
Seat Registry

Client-side cache of the seats of one draw. It only ever mirrors the backend:
every refresh refetches the whole draw and replaces the snapshot; nothing in
the client patches a seat locally.

Refreshes are numbered. A response that arrives after a newer one has already
been applied (or after the registry moved to another draw) is discarded.
"""

from typing import Optional

import attrs

from raffle_admin.platform.exception.exceptions import SeatNotFoundError
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.raffle.app.interface.i_raffle_gateway import IRaffleGateway
from raffle_admin.service.raffle.domain.entity.seat_entity import Seat
from raffle_admin.service.raffle.domain.enum.seat_state import SeatState


@attrs.define(frozen=True)
class Occupancy:
    total: int
    sold: int  # RESERVED or SOLD
    remaining: int


@attrs.define(frozen=True)
class RegistrySnapshot:
    draw_id: int
    seats: tuple[Seat, ...] = ()
    request_id: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.seats

    @property
    def inconsistent_seats(self) -> tuple[Seat, ...]:
        return tuple(seat for seat in self.seats if not seat.is_consistent)


class SeatRegistry:
    def __init__(self, *, gateway: IRaffleGateway, draw_id: int) -> None:
        self._gateway = gateway
        self._draw_id = draw_id
        self._seats: dict[int, Seat] = {}
        self._snapshot = RegistrySnapshot(draw_id=draw_id)
        self._last_issued_id = 0
        self._last_applied_id = 0
        self._loaded = False

    @property
    def draw_id(self) -> int:
        return self._draw_id

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_empty(self) -> bool:
        return not self._seats

    @property
    def seats(self) -> tuple[Seat, ...]:
        return self._snapshot.seats

    @property
    def numbers(self) -> tuple[int, ...]:
        return tuple(seat.number for seat in self._snapshot.seats)

    def snapshot(self) -> RegistrySnapshot:
        return self._snapshot

    def get(self, number: int) -> Optional[Seat]:
        return self._seats.get(number)

    def status_of(self, number: int) -> SeatState:
        seat = self._seats.get(number)
        if seat is None:
            raise SeatNotFoundError(number, self._draw_id)
        return seat.state

    def seats_of_sale(self, sale_id: int) -> tuple[Seat, ...]:
        return tuple(seat for seat in self._snapshot.seats if seat.sale_id == sale_id)

    def occupancy(self) -> Occupancy:
        total = len(self._snapshot.seats)
        sold = sum(
            1 for seat in self._snapshot.seats if seat.state in (SeatState.RESERVED, SeatState.SOLD)
        )
        return Occupancy(total=total, sold=sold, remaining=total - sold)

    async def refresh(self) -> RegistrySnapshot:
        """
        Refetch every seat of the current draw.

        Errors propagate and leave the previous snapshot untouched. A stale
        response is dropped and the current snapshot is returned instead.
        """
        self._last_issued_id += 1
        request_id = self._last_issued_id
        draw_id = self._draw_id

        seats = await self._gateway.list_seats(draw_id=draw_id)

        if request_id < self._last_applied_id or draw_id != self._draw_id:
            Logger.base.info(
                f'⏭️ [REGISTRY] Discarded stale refresh #{request_id} for draw {draw_id} '
                f'(applied #{self._last_applied_id}, current draw {self._draw_id})'
            )
            return self._snapshot

        self._apply(seats=seats, request_id=request_id)
        return self._snapshot

    async def switch_draw(self, draw_id: int) -> RegistrySnapshot:
        Logger.base.info(f'🔀 [REGISTRY] Switching draw {self._draw_id} → {draw_id}')
        self._draw_id = draw_id
        self._seats = {}
        self._snapshot = RegistrySnapshot(draw_id=draw_id)
        self._loaded = False
        return await self.refresh()

    def _apply(self, *, seats: list[Seat], request_id: int) -> None:
        self._seats = {seat.number: seat for seat in seats}
        self._snapshot = RegistrySnapshot(
            draw_id=self._draw_id,
            seats=tuple(sorted(self._seats.values(), key=lambda s: s.number)),
            request_id=request_id,
        )
        self._last_applied_id = request_id
        self._loaded = True

        if self._snapshot.is_empty:
            Logger.base.warning(f'⚠️ [REGISTRY] Draw {self._draw_id} returned zero seats')
        for seat in self._snapshot.inconsistent_seats:
            Logger.base.warning(
                f'⚠️ [REGISTRY] Seat {seat.label} is {seat.state} with sale {seat.sale_id}'
            )
