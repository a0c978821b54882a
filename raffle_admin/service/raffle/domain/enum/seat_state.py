"""Seat State Enum"""

from enum import StrEnum
from typing import Any

from raffle_admin.platform.logging.loguru_io import Logger


class SeatState(StrEnum):
    AVAILABLE = 'available'
    RESERVED = 'reserved'
    SOLD = 'sold'
    BLOCKED = 'blocked'
    VOID = 'void'


class SeatEvent(StrEnum):
    INCLUDE_IN_SALE = 'include_in_sale'
    SETTLE_PAYMENT = 'settle_payment'
    RELEASE_CUPO = 'release_cupo'


# Backend spellings (Spanish and English) → SeatState
_RAW_STATE_ALIASES: dict[str, SeatState] = {
    'DISPONIBLE': SeatState.AVAILABLE,
    'AVAILABLE': SeatState.AVAILABLE,
    'LIBRE': SeatState.AVAILABLE,
    'RESERVADO': SeatState.RESERVED,
    'RESERVED': SeatState.RESERVED,
    'ABONADO': SeatState.RESERVED,
    'PAGADO': SeatState.SOLD,
    'VENDIDO': SeatState.SOLD,
    'SOLD': SeatState.SOLD,
    'PAID': SeatState.SOLD,
    'BLOQUEADO': SeatState.BLOCKED,
    'BLOCKED': SeatState.BLOCKED,
    'ANULADO': SeatState.VOID,
    'VOID': SeatState.VOID,
}


# (from, event) → possible target states. Only client-requested transitions are listed;
# BLOCKED and VOID are administrative and unreachable from these flows.
SEAT_TRANSITIONS: dict[tuple[SeatState, SeatEvent], frozenset[SeatState]] = {
    (SeatState.AVAILABLE, SeatEvent.INCLUDE_IN_SALE): frozenset(
        {SeatState.RESERVED, SeatState.SOLD}
    ),
    (SeatState.RESERVED, SeatEvent.SETTLE_PAYMENT): frozenset({SeatState.SOLD}),
    (SeatState.RESERVED, SeatEvent.RELEASE_CUPO): frozenset(
        {SeatState.AVAILABLE, SeatState.VOID}
    ),
}


def can_transition(from_state: SeatState, event: SeatEvent) -> bool:
    return (from_state, event) in SEAT_TRANSITIONS


def normalize_seat_state(raw: Any) -> SeatState:
    """
    Map a raw backend status to SeatState.

    Unknown values fail open to AVAILABLE so an unfamiliar status cannot brick
    the grid. This is a known risk (a mistyped backend status would make an
    occupied seat look sellable), so every fallback is logged as a warning.
    """
    if isinstance(raw, SeatState):
        return raw
    text = str(raw or '').strip().upper()
    if not text:
        return SeatState.AVAILABLE
    state = _RAW_STATE_ALIASES.get(text)
    if state is None:
        Logger.base.warning(f'⚠️ [SEAT-STATE] Unknown seat status {raw!r}, treating as available')
        return SeatState.AVAILABLE
    return state


class SeatDisplayStatus(StrEnum):
    """The four grid colors. VOID renders as blocked."""

    AVAILABLE = 'available'
    RESERVED = 'reserved'
    SOLD = 'sold'
    BLOCKED = 'blocked'
