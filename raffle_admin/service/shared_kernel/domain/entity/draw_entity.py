from datetime import datetime
from typing import Any, Optional

import attrs

from raffle_admin.service.shared_kernel.domain.enum.draw_state import DrawState


@attrs.define(frozen=True)
class Draw:
    draw_id: int
    name: str
    raw_state: str = ''
    draw_date: Optional[str] = None
    total_tickets: Optional[int] = None
    chances_per_ticket: Optional[int] = None
    ticket_price: Optional[int] = None
    lottery_id: Optional[int] = None
    prize: Optional[str] = None

    @property
    def state(self) -> Optional[DrawState]:
        return DrawState.parse(self.raw_state)

    @property
    def is_active(self) -> bool:
        return self.state == DrawState.ACTIVE


def _positive(instance: Any, attribute: attrs.Attribute, value: int) -> None:
    if value <= 0:
        raise ValueError(f'{attribute.name} must be positive')


@attrs.define(frozen=True)
class DrawCreate:
    """New draw request; the name defaults to `Sorteo <date>`."""

    draw_datetime: datetime
    prize: int = attrs.field(validator=_positive)
    ticket_price: int = attrs.field(validator=_positive)
    total_tickets: int = 100
    chances_per_ticket: int = 1
    lottery_id: Optional[int] = None
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return (self.name or '').strip() or f'Sorteo {self.draw_datetime.date().isoformat()}'

    def to_payload(self) -> dict[str, Any]:
        return {
            'nombre': self.display_name,
            'fecha_hora_sorteo': self.draw_datetime.isoformat(),
            'premio': str(self.prize),
            'total_boletas': self.total_tickets,
            'oportunidades_por_boleta': self.chances_per_ticket,
            'precio_boleta': self.ticket_price,
            'loteria_id': self.lottery_id,
        }


@attrs.define(frozen=True)
class Lottery:
    """Official lottery a draw is played against (`DrawCreate.lottery_id`)."""

    lottery_id: int
    name: str
