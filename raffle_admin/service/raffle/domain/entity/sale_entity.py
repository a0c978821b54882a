from typing import Optional

import attrs

from raffle_admin.service.raffle.domain.enum.sale_state import SaleState
from raffle_admin.service.raffle.domain.value_object.ledger_view import LedgerView


@attrs.define(frozen=True)
class SaleSummary:
    sale_id: int
    draw_id: Optional[int]
    state: SaleState
    ledger: LedgerView
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    seat_numbers: tuple[int, ...] = ()
    can_release: Optional[bool] = None  # backend `can_liberarse`, when sent

    @property
    def total(self) -> int:
        return self.ledger.total

    @property
    def paid(self) -> int:
        return self.ledger.paid

    @property
    def balance(self) -> int:
        return self.ledger.balance


@attrs.define(frozen=True)
class SaleCreated:
    sale_id: int
    draw_id: int
    total: int
    state: SaleState
    seat_numbers: tuple[int, ...] = ()


@attrs.define(frozen=True)
class PaymentRegistered:
    sale_id: int
    amount: int
    sale_state_after: SaleState
    payment_id: Optional[int] = None
    balance_after: Optional[int] = None
