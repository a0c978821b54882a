"""
Report Gateway Interface

Read-mostly reporting endpoints (receivables, expenses, productivity and the
per-draw dashboard).
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from raffle_admin.service.reporting.domain.entity.draw_dashboard_entity import (
    DrawSellerSales,
    SeatStatistics,
)
from raffle_admin.service.reporting.domain.entity.expense_entity import Expense, ExpenseCreate
from raffle_admin.service.reporting.domain.entity.productivity_entity import (
    DrawProductivity,
    MonthlyProductivity,
)
from raffle_admin.service.reporting.domain.entity.receivable_entity import Receivable


class IReportGateway(ABC):
    @abstractmethod
    async def list_receivables(
        self, *, name: Optional[str] = None, phone: Optional[str] = None
    ) -> list[Receivable]:
        """Open sales of the current draw (`sorteo=vigente`, `debe=true`)."""
        pass

    @abstractmethod
    async def list_expenses(self, *, start: date, end: date) -> list[Expense]:
        pass

    @abstractmethod
    async def create_expense(self, expense: ExpenseCreate) -> None:
        pass

    @abstractmethod
    async def monthly_productivity(self, *, year: int, month: int) -> MonthlyProductivity:
        pass

    @abstractmethod
    async def draw_productivity(self, *, draw_id: int) -> DrawProductivity:
        pass

    @abstractmethod
    async def seat_statistics(self, *, draw_id: int) -> SeatStatistics:
        pass

    @abstractmethod
    async def draw_seller_sales(self, *, draw_id: int) -> DrawSellerSales:
        pass
