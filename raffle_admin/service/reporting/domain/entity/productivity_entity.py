from typing import Optional

import attrs


@attrs.define(frozen=True)
class DrawProductivityRow:
    draw_id: int
    draw_name: str
    date: Optional[str]
    state: str
    total_sold: int
    total_paid: int
    total_balance: int
    occupancy_percent: float


@attrs.define(frozen=True)
class SellerProductivityRow:
    seller_id: Optional[int]
    seller_name: str
    sales_count: int
    total_sold: int
    total_collected: int
    total_balance: int
    effectiveness_percent: float


@attrs.define(frozen=True)
class MonthlyProductivity:
    year: int
    month: int
    draws: tuple[DrawProductivityRow, ...] = ()
    by_seller: tuple[SellerProductivityRow, ...] = ()

    def filtered(self, *, state: str = '', seller: str = '') -> 'MonthlyProductivity':
        """Substring filters on draw state and seller name (case-insensitive)."""
        state = ' '.join(state.split()).lower()[:60]
        seller = ' '.join(seller.split()).lower()[:60]
        draws = self.draws
        by_seller = self.by_seller
        if state:
            draws = tuple(row for row in draws if state in row.state.lower())
        if seller:
            by_seller = tuple(row for row in by_seller if seller in row.seller_name.lower())
        return attrs.evolve(self, draws=draws, by_seller=by_seller)


@attrs.define(frozen=True)
class DrawProductivity:
    summary: DrawProductivityRow
    by_seller: tuple[SellerProductivityRow, ...] = ()
