"""
Raffle Payload Decoder

One tagged decode step per entity. Everything the rest of the client sees is a
typed entity; raw JSON stops here.
"""

from typing import Any, Mapping, Optional

from raffle_admin.platform.decode.lenient import (
    pick,
    pick_bool,
    pick_int,
    pick_int_list,
    pick_money,
    pick_str,
    unwrap_list,
)
from raffle_admin.platform.exception.exceptions import UnexpectedShapeError
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.raffle.domain.entity.sale_entity import (
    PaymentRegistered,
    SaleCreated,
    SaleSummary,
)
from raffle_admin.service.raffle.domain.entity.seat_entity import Seat
from raffle_admin.service.raffle.domain.enum.sale_state import SaleState
from raffle_admin.service.raffle.domain.enum.seat_state import normalize_seat_state
from raffle_admin.service.raffle.domain.value_object.ledger_view import LedgerView
from raffle_admin.service.raffle.domain.value_object.seat_capability import SeatFlags, SeatPolicy


SEAT_NUMBER_KEYS = ('puesto_num', 'numero_puesto', 'numero', 'id')
SEAT_STATE_KEYS = ('estado_actual', 'estado', 'status')
SALE_ID_KEYS = ('id_venta', 'venta_id')
TOTAL_KEYS = ('total', 'total_venta')
PAID_KEYS = ('abonado', 'total_abonado', 'pagado')
BALANCE_KEYS = ('saldo', 'saldo_pendiente')
CUSTOMER_NAME_KEYS = ('cliente_nombre', 'nombre_cliente')
CUSTOMER_PHONE_KEYS = ('cliente_celular', 'cliente_telefono', 'celular')
SALE_SEATS_KEYS = ('venta_puestos', 'puestos_venta', 'puestos')


def decode_ledger(raw: Any) -> LedgerView:
    return LedgerView.from_fields(
        total=pick(raw, *TOTAL_KEYS),
        paid=pick(raw, *PAID_KEYS),
        balance=pick(raw, *BALANCE_KEYS),
    )


def decode_flags(raw: Any) -> SeatFlags:
    return SeatFlags(
        is_disponible=pick_bool(raw, 'is_disponible'),
        is_reservado=pick_bool(raw, 'is_reservado'),
        is_vendido=pick_bool(raw, 'is_vendido'),
        is_bloqueado=pick_bool(raw, 'is_bloqueado'),
        is_anulado=pick_bool(raw, 'is_anulado'),
        can_venderse=pick_bool(raw, 'can_venderse'),
        can_reservarse=pick_bool(raw, 'can_reservarse'),
        can_liberarse=pick_bool(raw, 'can_liberarse'),
        can_anularse=pick_bool(raw, 'can_anularse'),
    )


def decode_seat(raw: Any, *, policy: SeatPolicy) -> Optional[Seat]:
    """None when the record carries no seat number at all."""
    number = pick_int(raw, *SEAT_NUMBER_KEYS)
    if number is None:
        return None
    return Seat(
        number=number,
        state=normalize_seat_state(pick(raw, *SEAT_STATE_KEYS)),
        sale_id=pick_int(raw, *SALE_ID_KEYS),
        ledger=decode_ledger(raw),
        customer_name=pick_str(raw, *CUSTOMER_NAME_KEYS),
        customer_phone=pick_str(raw, *CUSTOMER_PHONE_KEYS),
        sale_seat_numbers=tuple(sorted(set(pick_int_list(raw, *SALE_SEATS_KEYS) or []))),
        flags=decode_flags(raw),
        policy=policy,
    )


def decode_seat_list(raw: Any, *, endpoint: str, policy: SeatPolicy) -> list[Seat]:
    items = unwrap_list(raw, 'puestos')
    if items is None:
        raise UnexpectedShapeError(endpoint, 'an object { puestos: [] }')

    seats: dict[int, Seat] = {}
    for item in items:
        seat = decode_seat(item, policy=policy)
        if seat is None:
            Logger.base.warning(f'⚠️ [DECODE] Seat record without a number skipped: {item!r}')
            continue
        if seat.number in seats:
            Logger.base.warning(f'⚠️ [DECODE] Duplicate seat {seat.label}, keeping the last record')
        seats[seat.number] = seat
    return sorted(seats.values(), key=lambda s: s.number)


def _require_mapping(raw: Any, endpoint: str, expected: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise UnexpectedShapeError(endpoint, expected)
    return raw


def decode_sale_summary(raw: Any, *, endpoint: str) -> SaleSummary:
    body = _require_mapping(raw, endpoint, 'a sale summary object')
    sale_id = pick_int(body, *SALE_ID_KEYS)
    if sale_id is None:
        raise UnexpectedShapeError(endpoint, 'a sale summary with id_venta')
    ledger = decode_ledger(body)
    return SaleSummary(
        sale_id=sale_id,
        draw_id=pick_int(body, 'id_sorteo', 'sorteo_id'),
        state=SaleState.from_raw(
            pick(body, 'estado', 'estado_venta'), paid=ledger.paid, balance=ledger.known_balance
        ),
        ledger=ledger,
        customer_name=pick_str(body, *CUSTOMER_NAME_KEYS),
        customer_phone=pick_str(body, *CUSTOMER_PHONE_KEYS),
        seat_numbers=tuple(sorted(set(pick_int_list(body, *SALE_SEATS_KEYS) or []))),
        can_release=pick_bool(body, 'can_liberarse'),
    )


def decode_sale_created(
    raw: Any, *, endpoint: str, draw_id: int, seat_numbers: tuple[int, ...]
) -> SaleCreated:
    body = _require_mapping(raw, endpoint, 'a created sale object')
    sale_id = pick_int(body, *SALE_ID_KEYS)
    if sale_id is None:
        raise UnexpectedShapeError(endpoint, 'a created sale with id_venta')
    total = pick_money(body, *TOTAL_KEYS) or 0
    return SaleCreated(
        sale_id=sale_id,
        draw_id=pick_int(body, 'id_sorteo') or draw_id,
        total=total,
        state=SaleState.from_raw(pick(body, 'estado'), paid=0, balance=total),
        seat_numbers=seat_numbers,
    )


def decode_payment_registered(
    raw: Any, *, endpoint: str, sale_id: int, amount: int
) -> PaymentRegistered:
    body = _require_mapping(raw, endpoint, 'a payment object')
    balance_after = pick_money(body, *BALANCE_KEYS)
    return PaymentRegistered(
        sale_id=pick_int(body, *SALE_ID_KEYS) or sale_id,
        amount=pick_money(body, 'monto') or amount,
        sale_state_after=SaleState.from_raw(
            pick(body, 'estado_venta', 'estado'),
            paid=amount,
            balance=1 if balance_after is None else balance_after,
        ),
        payment_id=pick_int(body, 'id_pago', 'id'),
        balance_after=balance_after,
    )
