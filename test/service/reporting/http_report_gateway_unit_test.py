from datetime import date, datetime

import httpx
import orjson
import pytest

from raffle_admin.platform.http.api_client import ApiClient
from raffle_admin.platform.http.token_store import TokenStore
from raffle_admin.service.reporting.domain.entity.expense_entity import ExpenseCreate
from raffle_admin.service.reporting.driven_adapter.http_draw_catalog_gateway import (
    HttpDrawCatalogGateway,
)
from raffle_admin.service.reporting.driven_adapter.http_report_gateway import HttpReportGateway
from raffle_admin.service.shared_kernel.domain.entity.draw_entity import DrawCreate
from raffle_admin.service.shared_kernel.domain.enum.draw_state import DrawState


@pytest.fixture
def seen() -> list[httpx.Request]:
    return []


@pytest.fixture
def api_client(seen: list[httpx.Request]) -> ApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.method == 'GET' and request.url.path == '/api/cartera':
            return httpx.Response(200, json={'cartera': [{'id': 1, 'nombre': 'Ana', 'saldo': 20000}]})
        if request.method == 'GET' and request.url.path == '/api/gastos':
            return httpx.Response(200, json=[])
        if request.url.path == '/api/sorteos/loterias':
            return httpx.Response(200, json=[{'id': 2, 'nombre': 'Medellín'}, {'id': 1, 'nombre': 'Boyacá'}])
        if request.url.path == '/api/sorteos/7/estadisticas-puestos':
            return httpx.Response(200, json={'total': 100, 'disponibles': 100})
        if request.url.path == '/api/dashboard/sorteo/7/ventas-vendedores':
            return httpx.Response(
                200, json={'sorteo_id': 7, 'vendedores': [{'vendedor_id': 3, 'nombre': 'Marta'}]}
            )
        if request.url.path == '/api/sorteos' and request.method == 'POST':
            return httpx.Response(201, json={'id_sorteo': 8, 'nombre': 'Sorteo 8', 'estado': 'ACTIVO'})
        return httpx.Response(200, json={})

    return ApiClient(
        base_url='http://raffle.test',
        timeout_seconds=5.0,
        token_store=TokenStore('token'),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.unit
class TestHttpReportGateway:
    @pytest.mark.asyncio
    async def test_receivables_query(self, api_client: ApiClient, seen: list[httpx.Request]) -> None:
        rows = await HttpReportGateway(api_client=api_client).list_receivables(
            name='Ana', phone='300'
        )

        assert dict(seen[0].url.params) == {
            'sorteo': 'vigente',
            'debe': 'true',
            'nombre': 'Ana',
            'telefono': '300',
        }
        assert rows[0].balance == 20000

    @pytest.mark.asyncio
    async def test_expense_range_and_create(
        self, api_client: ApiClient, seen: list[httpx.Request]
    ) -> None:
        gateway = HttpReportGateway(api_client=api_client)

        assert await gateway.list_expenses(start=date(2026, 10, 12), end=date(2026, 10, 15)) == []
        await gateway.create_expense(ExpenseCreate(concept='Transporte', amount=8000))

        assert seen[0].url.params['fecha_inicio'] == '2026-10-12'
        assert seen[0].url.params['fecha_fin'] == '2026-10-15'
        assert seen[1].method == 'POST'
        assert orjson.loads(seen[1].content)['concepto'] == 'Transporte'

    @pytest.mark.asyncio
    async def test_draw_dashboard_paths(
        self, api_client: ApiClient, seen: list[httpx.Request]
    ) -> None:
        gateway = HttpReportGateway(api_client=api_client)

        statistics = await gateway.seat_statistics(draw_id=7)
        sales = await gateway.draw_seller_sales(draw_id=7)

        assert [request.url.path for request in seen] == [
            '/api/sorteos/7/estadisticas-puestos',
            '/api/dashboard/sorteo/7/ventas-vendedores',
        ]
        assert statistics.available == 100
        assert sales.sellers[0].name == 'Marta'


@pytest.mark.unit
class TestHttpDrawCatalogGateway:
    @pytest.mark.asyncio
    async def test_create_and_update_state(
        self, api_client: ApiClient, seen: list[httpx.Request]
    ) -> None:
        gateway = HttpDrawCatalogGateway(api_client=api_client)

        created = await gateway.create_draw(
            DrawCreate(draw_datetime=datetime(2026, 11, 1, 22), prize=1000, ticket_price=35000)
        )
        await gateway.update_draw_state(draw_id=8, state=DrawState.DONE)

        assert created.draw_id == 8
        assert created.is_active
        assert seen[1].method == 'PUT'
        assert seen[1].url.path == '/api/sorteos/8/estado'
        assert orjson.loads(seen[1].content) == {'estado': 'REALIZADO'}

    @pytest.mark.asyncio
    async def test_lotteries_sorted_by_name(
        self, api_client: ApiClient, seen: list[httpx.Request]
    ) -> None:
        lotteries = await HttpDrawCatalogGateway(api_client=api_client).list_lotteries()

        assert seen[0].url.path == '/api/sorteos/loterias'
        assert [lottery.name for lottery in lotteries] == ['Boyacá', 'Medellín']
