from typing import Optional

import attrs

from raffle_admin.service.raffle.domain.enum.seat_state import SeatDisplayStatus, SeatState
from raffle_admin.service.raffle.domain.value_object.ledger_view import LedgerView
from raffle_admin.service.raffle.domain.value_object.seat_capability import (
    SeatCapability,
    SeatFlags,
    SeatPolicy,
    resolve_capability,
)


# Administrative states carry no customer, so no sale is expected
_SALE_OPTIONAL_STATES = frozenset({SeatState.BLOCKED, SeatState.VOID})
_SALE_REQUIRED_STATES = frozenset({SeatState.RESERVED, SeatState.SOLD})

_STATE_DISPLAY: dict[SeatState, SeatDisplayStatus] = {
    SeatState.AVAILABLE: SeatDisplayStatus.AVAILABLE,
    SeatState.RESERVED: SeatDisplayStatus.RESERVED,
    SeatState.SOLD: SeatDisplayStatus.SOLD,
    SeatState.BLOCKED: SeatDisplayStatus.BLOCKED,
    SeatState.VOID: SeatDisplayStatus.BLOCKED,
}


def _resolve(seat: 'Seat') -> SeatCapability:
    return resolve_capability(
        flags=seat.flags,
        state=seat.state,
        balance=seat.ledger.known_balance,
        has_sale=seat.sale_id is not None,
        policy=seat.policy,
    )


@attrs.define(frozen=True)
class Seat:
    number: int
    state: SeatState
    sale_id: Optional[int] = None
    ledger: LedgerView = attrs.field(factory=LedgerView)
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    sale_seat_numbers: tuple[int, ...] = ()
    flags: SeatFlags = attrs.field(factory=SeatFlags)
    policy: SeatPolicy = attrs.field(factory=SeatPolicy)
    # Resolved once per record
    capability: SeatCapability = attrs.field(
        default=attrs.Factory(_resolve, takes_self=True), eq=False, repr=False
    )

    @property
    def total(self) -> int:
        return self.ledger.total

    @property
    def paid(self) -> int:
        return self.ledger.paid

    @property
    def balance(self) -> int:
        return self.ledger.balance

    @property
    def is_sellable(self) -> bool:
        return self.capability.is_sellable

    @property
    def is_releasable(self) -> bool:
        return self.capability.is_releasable

    @property
    def is_consistent(self) -> bool:
        if self.sale_id is None:
            return self.state not in _SALE_REQUIRED_STATES
        return self.state in _SALE_REQUIRED_STATES or self.state in _SALE_OPTIONAL_STATES

    @property
    def released_numbers(self) -> tuple[int, ...]:
        """Every seat a release of this seat's sale frees (at least this one)."""
        return tuple(sorted({self.number, *self.sale_seat_numbers}))

    @property
    def display_status(self) -> SeatDisplayStatus:
        flags = self.flags
        if flags.is_disponible:
            return SeatDisplayStatus.AVAILABLE
        if flags.is_bloqueado or flags.is_anulado:
            return SeatDisplayStatus.BLOCKED
        if flags.is_vendido:
            return SeatDisplayStatus.SOLD
        if flags.is_reservado:
            return SeatDisplayStatus.RESERVED
        return _STATE_DISPLAY[self.state]

    @property
    def label(self) -> str:
        return f'{self.number:02d}'
