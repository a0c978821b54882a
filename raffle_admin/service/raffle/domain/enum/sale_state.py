"""Sale State Enum"""

from enum import StrEnum
from typing import Any, Optional


class SaleState(StrEnum):
    OPEN = 'open'
    PARTIAL = 'partial'
    PAID = 'paid'

    @classmethod
    def from_raw(cls, raw: Any, *, paid: int, balance: Optional[int]) -> 'SaleState':
        text = str(raw or '').strip().upper()
        if text in ('PAGADO', 'PAGADA', 'PAID', 'VENDIDO'):
            return cls.PAID
        if text in ('ABONADO', 'ABONADA', 'PARCIAL', 'PARTIAL', 'RESERVADO'):
            return cls.PARTIAL
        if text in ('PENDIENTE', 'ABIERTA', 'OPEN'):
            return cls.OPEN
        return cls.derive(paid=paid, balance=balance)

    @classmethod
    def derive(cls, *, paid: int, balance: Optional[int]) -> 'SaleState':
        if balance is not None and balance <= 0:
            return cls.PAID
        if paid > 0:
            return cls.PARTIAL
        return cls.OPEN
