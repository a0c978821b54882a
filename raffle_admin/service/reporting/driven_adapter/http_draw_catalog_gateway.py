from raffle_admin.platform.exception.exceptions import UnexpectedShapeError
from raffle_admin.platform.http.api_client import ApiClient
from raffle_admin.service.reporting.app.interface.i_draw_catalog_gateway import (
    IDrawCatalogGateway,
)
from raffle_admin.service.reporting.driven_adapter.report_decoder import decode_lotteries
from raffle_admin.service.shared_kernel.domain.entity.draw_entity import (
    Draw,
    DrawCreate,
    Lottery,
)
from raffle_admin.service.shared_kernel.domain.enum.draw_state import DrawState
from raffle_admin.service.shared_kernel.driven_adapter.draw_decoder import (
    decode_draw,
    decode_draw_list,
)


class HttpDrawCatalogGateway(IDrawCatalogGateway):
    def __init__(self, *, api_client: ApiClient, api_prefix: str = '/api') -> None:
        self._api = api_client
        self._prefix = api_prefix

    def _path(self, suffix: str) -> str:
        return f'{self._prefix}{suffix}'

    async def list_draws(self) -> list[Draw]:
        path = self._path('/sorteos')
        raw = await self._api.get_json(path)
        return decode_draw_list(raw, endpoint=path)

    async def get_draw(self, *, draw_id: int) -> Draw:
        path = self._path(f'/sorteos/{draw_id}')
        raw = await self._api.get_json(path)
        if not isinstance(raw, dict):
            raise UnexpectedShapeError(path, 'a draw object')
        return decode_draw(raw)

    async def create_draw(self, draw: DrawCreate) -> Draw:
        path = self._path('/sorteos')
        raw = await self._api.post_json(path, draw.to_payload())
        if not isinstance(raw, dict):
            raise UnexpectedShapeError(path, 'the created draw')
        return decode_draw(raw)

    async def update_draw_state(self, *, draw_id: int, state: DrawState) -> None:
        await self._api.put_json(self._path(f'/sorteos/{draw_id}/estado'), {'estado': state.value})

    async def list_lotteries(self) -> list[Lottery]:
        path = self._path('/sorteos/loterias')
        raw = await self._api.get_json(path)
        return decode_lotteries(raw, endpoint=path)
