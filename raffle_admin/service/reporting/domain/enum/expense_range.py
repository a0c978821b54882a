"""Expense Range Enum"""

from datetime import date, timedelta
from enum import StrEnum


class ExpenseRange(StrEnum):
    DAY = 'dia'
    WEEK = 'semana'
    MONTH = 'mes'

    def bounds(self, today: date) -> tuple[date, date]:
        """(start, end) inclusive. Weeks start on Monday; ranges end today."""
        if self == ExpenseRange.WEEK:
            return today - timedelta(days=today.weekday()), today
        if self == ExpenseRange.MONTH:
            return today.replace(day=1), today
        return today, today
