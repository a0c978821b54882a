"""
HTTP Raffle Gateway

Seat grid and settlement endpoints of the raffle backend. Paths are relative to
`API_PREFIX`; decoding goes through payload_decoder so callers never touch JSON.
"""

from typing import Any, Optional

from opentelemetry import trace

from raffle_admin.platform.http.api_client import ApiClient
from raffle_admin.service.raffle.app.interface.i_raffle_gateway import IRaffleGateway
from raffle_admin.service.raffle.domain.entity.sale_entity import (
    PaymentRegistered,
    SaleCreated,
    SaleSummary,
)
from raffle_admin.service.raffle.domain.entity.seat_entity import Seat
from raffle_admin.service.raffle.domain.value_object.customer_form import CustomerForm
from raffle_admin.service.raffle.domain.value_object.seat_capability import SeatPolicy
from raffle_admin.service.raffle.driven_adapter.payload_decoder import (
    decode_payment_registered,
    decode_sale_created,
    decode_sale_summary,
    decode_seat_list,
)
from raffle_admin.service.shared_kernel.domain.entity.draw_entity import Draw
from raffle_admin.service.shared_kernel.driven_adapter.draw_decoder import decode_draw_list


class HttpRaffleGateway(IRaffleGateway):
    def __init__(
        self, *, api_client: ApiClient, seat_policy: SeatPolicy, api_prefix: str = '/api'
    ) -> None:
        self._api = api_client
        self._seat_policy = seat_policy
        self._prefix = api_prefix
        self._tracer = trace.get_tracer(__name__)

    def _path(self, suffix: str) -> str:
        return f'{self._prefix}{suffix}'

    async def list_draws(self) -> list[Draw]:
        path = self._path('/sorteos')
        raw = await self._api.get_json(path)
        return decode_draw_list(raw, endpoint=path)

    async def list_seats(self, *, draw_id: int) -> list[Seat]:
        path = self._path(f'/sorteos/{draw_id}/puestos-clasificados')
        with self._tracer.start_as_current_span(
            'gateway.list_seats', attributes={'draw.id': draw_id}
        ) as span:
            raw = await self._api.get_json(path)
            seats = decode_seat_list(raw, endpoint=path, policy=self._seat_policy)
            span.set_attribute('seat.count', len(seats))
            return seats

    async def create_sale(
        self, *, draw_id: int, seat_numbers: tuple[int, ...], customer: CustomerForm
    ) -> SaleCreated:
        path = self._path('/v1/ventas')
        payload = {
            'id_sorteo': draw_id,
            'puestos': list(seat_numbers),
            'cliente': customer.to_payload(),
        }
        raw = await self._api.post_json(path, payload)
        return decode_sale_created(raw, endpoint=path, draw_id=draw_id, seat_numbers=seat_numbers)

    async def register_payment(
        self,
        *,
        sale_id: int,
        amount: int,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        note: Optional[str] = None,
    ) -> PaymentRegistered:
        path = self._path(f'/v1/ventas/{sale_id}/pagos')
        payload: dict[str, Any] = {'monto': amount}
        if method:
            payload['metodo_pago'] = method
        if reference:
            payload['referencia'] = reference
        if note:
            payload['nota'] = note
        raw = await self._api.post_json(path, payload)
        return decode_payment_registered(raw, endpoint=path, sale_id=sale_id, amount=amount)

    async def get_sale_summary(self, *, sale_id: int) -> SaleSummary:
        path = self._path(f'/v1/ventas/{sale_id}/resumen')
        raw = await self._api.get_json(path)
        return decode_sale_summary(raw, endpoint=path)

    async def release_sale(self, *, sale_id: int) -> None:
        await self._api.post_json(self._path(f'/v1/ventas/{sale_id}/liberar'), {})

    async def download_receipt(self, *, sale_id: int) -> bytes:
        return await self._api.get_bytes(self._path(f'/ventas/{sale_id}/comprobante.png'))
