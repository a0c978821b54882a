from datetime import date
from typing import Any, Optional

from raffle_admin.platform.http.api_client import ApiClient
from raffle_admin.service.reporting.app.interface.i_report_gateway import IReportGateway
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
from raffle_admin.service.reporting.driven_adapter.report_decoder import (
    decode_draw_productivity,
    decode_draw_seller_sales,
    decode_expenses,
    decode_monthly_productivity,
    decode_receivables,
    decode_seat_statistics,
)


class HttpReportGateway(IReportGateway):
    def __init__(self, *, api_client: ApiClient, api_prefix: str = '/api') -> None:
        self._api = api_client
        self._prefix = api_prefix

    def _path(self, suffix: str) -> str:
        return f'{self._prefix}{suffix}'

    async def list_receivables(
        self, *, name: Optional[str] = None, phone: Optional[str] = None
    ) -> list[Receivable]:
        path = self._path('/cartera')
        params: dict[str, Any] = {'sorteo': 'vigente', 'debe': 'true'}
        if name:
            params['nombre'] = name
        if phone:
            params['telefono'] = phone
        raw = await self._api.get_json(path, params=params)
        return decode_receivables(raw, endpoint=path)

    async def list_expenses(self, *, start: date, end: date) -> list[Expense]:
        path = self._path('/gastos')
        raw = await self._api.get_json(
            path, params={'fecha_inicio': start.isoformat(), 'fecha_fin': end.isoformat()}
        )
        return decode_expenses(raw, endpoint=path)

    async def create_expense(self, expense: ExpenseCreate) -> None:
        await self._api.post_json(self._path('/gastos'), expense.to_payload())

    async def monthly_productivity(self, *, year: int, month: int) -> MonthlyProductivity:
        path = self._path('/productividad/sorteos')
        raw = await self._api.get_json(path, params={'anio': year, 'mes': month})
        return decode_monthly_productivity(raw, endpoint=path, year=year, month=month)

    async def draw_productivity(self, *, draw_id: int) -> DrawProductivity:
        path = self._path(f'/productividad/sorteo/{draw_id}')
        raw = await self._api.get_json(path)
        return decode_draw_productivity(raw, endpoint=path)

    async def seat_statistics(self, *, draw_id: int) -> SeatStatistics:
        path = self._path(f'/sorteos/{draw_id}/estadisticas-puestos')
        raw = await self._api.get_json(path)
        return decode_seat_statistics(raw, endpoint=path)

    async def draw_seller_sales(self, *, draw_id: int) -> DrawSellerSales:
        path = self._path(f'/dashboard/sorteo/{draw_id}/ventas-vendedores')
        raw = await self._api.get_json(path)
        return decode_draw_seller_sales(raw, endpoint=path, draw_id=draw_id)
