from typing import Optional

import attrs


@attrs.define(frozen=True)
class Receivable:
    """One open sale in the receivables (cartera) report."""

    id: int  # negative when the backend sent no id
    name: str
    phone: Optional[str]
    total: int
    paid: int
    balance: int
    seller_id: Optional[int] = None
    seller_color: Optional[str] = None
    seat_number: Optional[int] = None
    seat_numbers: tuple[int, ...] = ()
