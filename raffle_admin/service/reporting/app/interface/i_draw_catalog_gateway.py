from abc import ABC, abstractmethod

from raffle_admin.service.shared_kernel.domain.entity.draw_entity import (
    Draw,
    DrawCreate,
    Lottery,
)
from raffle_admin.service.shared_kernel.domain.enum.draw_state import DrawState


class IDrawCatalogGateway(ABC):
    @abstractmethod
    async def list_draws(self) -> list[Draw]:
        pass

    @abstractmethod
    async def get_draw(self, *, draw_id: int) -> Draw:
        pass

    @abstractmethod
    async def create_draw(self, draw: DrawCreate) -> Draw:
        pass

    @abstractmethod
    async def update_draw_state(self, *, draw_id: int, state: DrawState) -> None:
        pass

    @abstractmethod
    async def list_lotteries(self) -> list[Lottery]:
        pass
