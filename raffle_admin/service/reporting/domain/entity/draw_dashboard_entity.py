from typing import Optional

import attrs


@attrs.define(frozen=True)
class SeatStatistics:
    """Seat counts of one draw as the backend aggregates them."""

    total: int = 0
    available: int = 0
    reserved: int = 0
    sold: int = 0
    blocked: int = 0
    void: int = 0
    verified_sum: int = 0

    @property
    def counted(self) -> int:
        return self.available + self.reserved + self.sold + self.blocked + self.void

    @property
    def is_consistent(self) -> bool:
        """Every seat falls in exactly one bucket."""
        return self.counted == self.total


@attrs.define(frozen=True)
class SellerSalesRow:
    seller_id: Optional[int]
    name: str
    total_paid: int = 0
    total_partial: int = 0


@attrs.define(frozen=True)
class DrawSellerSales:
    draw_id: int
    sellers: tuple[SellerSalesRow, ...] = ()

    @property
    def total_collected(self) -> int:
        return sum(row.total_paid + row.total_partial for row in self.sellers)
