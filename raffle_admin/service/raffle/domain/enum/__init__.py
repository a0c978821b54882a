"""Raffle Domain Enums"""

from raffle_admin.service.raffle.domain.enum.operation_state import OperationState
from raffle_admin.service.raffle.domain.enum.sale_state import SaleState
from raffle_admin.service.raffle.domain.enum.seat_state import (
    SEAT_TRANSITIONS,
    SeatDisplayStatus,
    SeatEvent,
    SeatState,
    can_transition,
    normalize_seat_state,
)

__all__ = [
    'OperationState',
    'SaleState',
    'SEAT_TRANSITIONS',
    'SeatDisplayStatus',
    'SeatEvent',
    'SeatState',
    'can_transition',
    'normalize_seat_state',
]
