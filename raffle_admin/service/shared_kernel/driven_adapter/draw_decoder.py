"""Draw payload decoding (shared by the seat grid and the draw catalog)."""

from typing import Any

from raffle_admin.platform.decode.lenient import pick, pick_int, pick_money, pick_str, unwrap_list
from raffle_admin.platform.exception.exceptions import UnexpectedShapeError
from raffle_admin.service.shared_kernel.domain.entity.draw_entity import Draw


def decode_draw(raw: Any, *, position: int = 0) -> Draw:
    draw_id = pick_int(raw, 'id_sorteo', 'id')
    if draw_id is None:
        draw_id = position + 1
    prize = pick(raw, 'premio')
    return Draw(
        draw_id=draw_id,
        name=pick_str(raw, 'nombre') or f'Sorteo {draw_id}',
        raw_state=(pick_str(raw, 'estado') or '').upper(),
        draw_date=pick_str(raw, 'fecha_hora_sorteo', 'fecha_sorteo'),
        total_tickets=pick_int(raw, 'total_boletas', 'boletas_total') or None,
        chances_per_ticket=pick_int(raw, 'oportunidades_por_boleta') or None,
        ticket_price=pick_money(raw, 'precio_boleta') or None,
        lottery_id=pick_int(raw, 'loteria_id'),
        prize=None if prize is None else str(prize),
    )


def decode_draw_list(raw: Any, *, endpoint: str) -> list[Draw]:
    items = unwrap_list(raw, 'sorteos')
    if items is None:
        raise UnexpectedShapeError(endpoint, 'a list of draws')
    return [decode_draw(item, position=i) for i, item in enumerate(items)]
