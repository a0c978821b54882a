"""
Unit tests for the raffle payload decoder

Backend payloads arrive with renamed or missing fields; the decoder must
always yield typed entities or an UnexpectedShapeError.
"""

import pytest

from raffle_admin.platform.exception.exceptions import UnexpectedShapeError
from raffle_admin.service.raffle.domain.enum.sale_state import SaleState
from raffle_admin.service.raffle.domain.enum.seat_state import SeatState
from raffle_admin.service.raffle.domain.value_object.seat_capability import (
    FlagSeatCapability,
    SeatPolicy,
)
from raffle_admin.service.raffle.driven_adapter.payload_decoder import (
    decode_payment_registered,
    decode_sale_created,
    decode_sale_summary,
    decode_seat,
    decode_seat_list,
)


ENDPOINT = '/api/sorteos/7/puestos-clasificados'


@pytest.mark.unit
class TestDecodeSeat:
    def test_alternate_field_names(self) -> None:
        seat = decode_seat(
            {
                'numero_puesto': '07',
                'estado': 'ABONADO',
                'venta_id': 12,
                'total_venta': '35.000',
                'total_abonado': 15000,
                'nombre_cliente': ' Ana Ruiz ',
                'puestos_venta': [7, 3, 7],
            },
            policy=SeatPolicy(),
        )

        assert seat is not None
        assert seat.number == 7
        assert seat.state == SeatState.RESERVED
        assert seat.sale_id == 12
        assert (seat.total, seat.paid, seat.balance) == (35000, 15000, 20000)
        assert seat.customer_name == 'Ana Ruiz'
        assert seat.sale_seat_numbers == (3, 7)

    def test_flags_select_flag_capability(self) -> None:
        seat = decode_seat(
            {'puesto_num': 1, 'estado_actual': 'DISPONIBLE', 'can_venderse': False},
            policy=SeatPolicy(),
        )

        assert seat is not None
        assert isinstance(seat.capability, FlagSeatCapability)
        assert not seat.is_sellable

    def test_record_without_number_is_none(self) -> None:
        assert decode_seat({'estado': 'DISPONIBLE'}, policy=SeatPolicy()) is None


@pytest.mark.unit
class TestDecodeSeatList:
    def test_envelope_sorted_with_duplicates_collapsed(self) -> None:
        raw = {
            'puestos': [
                {'numero': 3, 'estado': 'DISPONIBLE'},
                {'numero': 1, 'estado': 'DISPONIBLE'},
                {'numero': 3, 'estado': 'BLOQUEADO'},
                {'estado': 'DISPONIBLE'},
            ]
        }

        seats = decode_seat_list(raw, endpoint=ENDPOINT, policy=SeatPolicy())

        assert [s.number for s in seats] == [1, 3]
        assert seats[1].state == SeatState.BLOCKED

    def test_bare_list_is_accepted(self) -> None:
        seats = decode_seat_list([{'id': 5}], endpoint=ENDPOINT, policy=SeatPolicy())

        assert [s.number for s in seats] == [5]
        assert seats[0].state == SeatState.AVAILABLE

    def test_empty_draw_is_not_an_error(self) -> None:
        assert decode_seat_list({'puestos': []}, endpoint=ENDPOINT, policy=SeatPolicy()) == []

    @pytest.mark.parametrize('raw', [None, {'data': []}, 'puestos'])
    def test_malformed_raises(self, raw: object) -> None:
        with pytest.raises(UnexpectedShapeError):
            decode_seat_list(raw, endpoint=ENDPOINT, policy=SeatPolicy())


@pytest.mark.unit
class TestDecodeSale:
    def test_summary(self) -> None:
        summary = decode_sale_summary(
            {
                'id_venta': 501,
                'id_sorteo': 7,
                'total': 70000,
                'abonado': 15000,
                'cliente_nombre': 'Ana',
                'puestos': [4, 3],
                'can_liberarse': True,
            },
            endpoint='/api/v1/ventas/501/resumen',
        )

        assert summary.sale_id == 501
        assert summary.balance == 55000
        assert summary.state == SaleState.PARTIAL
        assert summary.seat_numbers == (3, 4)
        assert summary.can_release is True

    def test_summary_without_id_raises(self) -> None:
        with pytest.raises(UnexpectedShapeError):
            decode_sale_summary({'total': 1}, endpoint='/api/v1/ventas/1/resumen')

    def test_created(self) -> None:
        sale = decode_sale_created(
            {'id_venta': 501, 'total': '70000'},
            endpoint='/api/v1/ventas',
            draw_id=7,
            seat_numbers=(3, 4),
        )

        assert (sale.sale_id, sale.draw_id, sale.total) == (501, 7, 70000)
        assert sale.state == SaleState.OPEN
        assert sale.seat_numbers == (3, 4)

    def test_payment_defaults_to_request_values(self) -> None:
        payment = decode_payment_registered(
            {'id_pago': 9, 'saldo': 0}, endpoint='/api/v1/ventas/501/pagos', sale_id=501, amount=20000
        )

        assert payment.sale_id == 501
        assert payment.amount == 20000
        assert payment.payment_id == 9
        assert payment.balance_after == 0
        assert payment.sale_state_after == SaleState.PAID
