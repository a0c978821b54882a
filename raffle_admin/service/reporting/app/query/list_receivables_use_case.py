"""
Receivables Query Use Case

Open sales of the current draw, filtered by customer name and/or phone.
Results are cached per filter for a few seconds and fetched with retry.
"""

import re

from raffle_admin.platform.cache.report_cache import ReportCache, build_cache_key
from raffle_admin.platform.http.retry import retry_async
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.reporting.app.interface import IReportGateway
from raffle_admin.service.reporting.domain.entity.receivable_entity import Receivable


MAX_NAME_LENGTH = 80
MAX_PHONE_DIGITS = 20
_NON_DIGITS = re.compile(r'[^0-9]')


def sanitize_name(value: str) -> str:
    return ' '.join(value.split())[:MAX_NAME_LENGTH]


def sanitize_phone(value: str) -> str:
    return _NON_DIGITS.sub('', value)[:MAX_PHONE_DIGITS]


class ListReceivablesUseCase:
    def __init__(
        self,
        *,
        gateway: IReportGateway,
        report_cache: ReportCache,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 0.6,
    ) -> None:
        self.gateway = gateway
        self.report_cache = report_cache
        self.retry_attempts = retry_attempts
        self.retry_backoff_seconds = retry_backoff_seconds

    @Logger.io
    async def execute(self, *, name: str = '', phone: str = '') -> list[Receivable]:
        name = sanitize_name(name)
        phone = sanitize_phone(phone)
        key = build_cache_key(
            'receivables', sorteo='vigente', debe='true', nombre=name or None, telefono=phone or None
        )

        items = await self.report_cache.get_or_load(
            key,
            lambda: retry_async(
                lambda: self.gateway.list_receivables(name=name or None, phone=phone or None),
                attempts=self.retry_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                label='receivables',
            ),
        )
        Logger.base.info(f'📊 [RECEIVABLES] {len(items)} open sales')
        return items
