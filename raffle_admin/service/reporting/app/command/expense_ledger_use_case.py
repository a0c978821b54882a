"""
Expense Ledger Use Case

Lists expenses of the current day, week (Monday → today) or month (1st →
today), with a client-side concept filter, and records new expenses.
"""

from datetime import date
from typing import Callable

import attrs

from raffle_admin.platform.cache.report_cache import ReportCache, build_cache_key
from raffle_admin.platform.exception.exceptions import ValidationError
from raffle_admin.platform.http.retry import retry_async
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.reporting.app.interface import IReportGateway
from raffle_admin.service.reporting.domain.entity.expense_entity import Expense, ExpenseCreate
from raffle_admin.service.reporting.domain.enum.expense_range import ExpenseRange


MAX_CONCEPT_QUERY_LENGTH = 80


@attrs.define(frozen=True)
class ExpenseListing:
    start: date
    end: date
    items: tuple[Expense, ...]

    @property
    def total(self) -> int:
        return sum(item.amount for item in self.items)


class ExpenseLedgerUseCase:
    def __init__(
        self,
        *,
        gateway: IReportGateway,
        report_cache: ReportCache,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 0.6,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.gateway = gateway
        self.report_cache = report_cache
        self.retry_attempts = retry_attempts
        self.retry_backoff_seconds = retry_backoff_seconds
        self.today = today

    @Logger.io
    async def list_expenses(
        self, *, range_: ExpenseRange = ExpenseRange.DAY, concept: str = ''
    ) -> ExpenseListing:
        start, end = range_.bounds(self.today())
        items: list[Expense] = await self.report_cache.get_or_load(
            build_cache_key('expenses', fecha_inicio=start.isoformat(), fecha_fin=end.isoformat()),
            lambda: retry_async(
                lambda: self.gateway.list_expenses(start=start, end=end),
                attempts=self.retry_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                label='expenses',
            ),
        )

        query = ' '.join(concept.split())[:MAX_CONCEPT_QUERY_LENGTH]
        if query:
            items = [item for item in items if item.matches(query)]
        return ExpenseListing(start=start, end=end, items=tuple(items))

    @Logger.io
    async def create(self, expense: ExpenseCreate) -> None:
        field_errors = expense.validate()
        if field_errors:
            raise ValidationError('Check the expense fields', field_errors)

        await self.gateway.create_expense(expense)
        self.report_cache.invalidate('expenses:')
        Logger.base.info(f'🧾 [EXPENSE] Recorded "{expense.concept}" for {expense.amount}')
