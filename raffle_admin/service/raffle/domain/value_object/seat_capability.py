"""
Seat capability resolution.

"What can I do with this seat" is answered in one place. Newer backends send
explicit flags (`can_venderse`, `can_liberarse`, ...) that may encode
draw-specific rules; older ones only send a status. The resolver is picked once
per seat record at decode time and the rest of the client only asks it.
"""

from abc import ABC, abstractmethod
from typing import Optional

import attrs

from raffle_admin.service.raffle.domain.enum.seat_state import SeatState


@attrs.define(frozen=True)
class SeatPolicy:
    """Business rules that are configuration, not inference."""

    void_is_resellable: bool = False


@attrs.define(frozen=True)
class SeatFlags:
    """Capability flags exactly as the backend sent them (None = not sent)."""

    is_disponible: Optional[bool] = None
    is_reservado: Optional[bool] = None
    is_vendido: Optional[bool] = None
    is_bloqueado: Optional[bool] = None
    is_anulado: Optional[bool] = None
    can_venderse: Optional[bool] = None
    can_reservarse: Optional[bool] = None
    can_liberarse: Optional[bool] = None
    can_anularse: Optional[bool] = None

    @property
    def has_any(self) -> bool:
        return any(value is not None for value in attrs.astuple(self))


class SeatCapability(ABC):
    @property
    @abstractmethod
    def is_available(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_sellable(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_releasable(self) -> bool:
        pass


@attrs.define(frozen=True)
class StateSeatCapability(SeatCapability):
    """Fallback for payloads without flags: derived from the state enum only."""

    state: SeatState
    balance: Optional[int] = 0
    has_sale: bool = False
    policy: SeatPolicy = attrs.field(factory=SeatPolicy)

    @property
    def is_available(self) -> bool:
        if self.state == SeatState.AVAILABLE:
            return True
        return self.state == SeatState.VOID and self.policy.void_is_resellable

    @property
    def is_sellable(self) -> bool:
        return self.is_available

    @property
    def is_releasable(self) -> bool:
        # Fully paid (SOLD) seats are never releasable; an unknown balance is left to the backend
        if not self.has_sale or self.state != SeatState.RESERVED:
            return False
        return self.balance is None or self.balance > 0


@attrs.define(frozen=True)
class FlagSeatCapability(SeatCapability):
    """Backend flags win; a flag that was not sent falls back to the state rule."""

    flags: SeatFlags
    fallback: StateSeatCapability

    @property
    def is_available(self) -> bool:
        if self.flags.is_disponible is not None:
            return self.flags.is_disponible
        return self.fallback.is_available

    @property
    def is_sellable(self) -> bool:
        if self.flags.can_venderse is not None:
            return self.flags.can_venderse
        return self.is_available

    @property
    def is_releasable(self) -> bool:
        if self.flags.can_liberarse is not None:
            return self.flags.can_liberarse
        return self.fallback.is_releasable


def resolve_capability(
    *,
    flags: SeatFlags,
    state: SeatState,
    balance: Optional[int],
    has_sale: bool,
    policy: SeatPolicy,
) -> SeatCapability:
    fallback = StateSeatCapability(state=state, balance=balance, has_sale=has_sale, policy=policy)
    if flags.has_any:
        return FlagSeatCapability(flags=flags, fallback=fallback)
    return fallback
