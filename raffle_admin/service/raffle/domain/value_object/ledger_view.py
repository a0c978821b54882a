"""Installment (abono) ledger figures for one sale."""

from typing import Any, Optional

import attrs

from raffle_admin.platform.decode.lenient import parse_money


@attrs.define(frozen=True)
class LedgerView:
    """
    total / paid / balance of a sale, completed from whichever subset the
    backend sent. Display-only: building one never raises.

    Precedence:
    - balance present → trusted (clamped at 0)
    - balance absent  → max(0, total - paid), a missing paid counting as 0
    - total absent, paid and balance present → paid + balance
    - paid absent, total and balance present → max(0, total - balance)

    With neither balance nor total the figures display as zero and
    `balance_known` stays False; such a zero is not a settled sale.
    """

    total: int = 0
    paid: int = 0
    balance: int = 0
    balance_known: bool = False

    @classmethod
    def from_fields(cls, *, total: Any = None, paid: Any = None, balance: Any = None) -> 'LedgerView':
        t = parse_money(total)
        p = parse_money(paid)
        b = parse_money(balance)

        if b is None and t is not None:
            b = t - (p or 0)
        if t is None and p is not None and b is not None:
            t = p + max(0, b)
        if p is None and t is not None and b is not None:
            p = t - max(0, b)

        return cls(
            total=max(0, t or 0),
            paid=max(0, p or 0),
            balance=max(0, b or 0),
            balance_known=b is not None,
        )

    @property
    def known_balance(self) -> Optional[int]:
        return self.balance if self.balance_known else None

    @property
    def is_settled(self) -> bool:
        return self.balance_known and self.balance == 0 and self.total > 0

    def can_accept(self, amount: int) -> bool:
        """Soft client-side check; the backend stays authoritative."""
        if amount <= 0:
            return False
        return not self.balance_known or amount <= self.balance
