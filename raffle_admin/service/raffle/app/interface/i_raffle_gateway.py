"""
Raffle Gateway Interface

Backend operations the seat grid and the settlement flows depend on. Every
method returns typed entities; implementations own decoding and error mapping.
"""

from abc import ABC, abstractmethod
from typing import Optional

from raffle_admin.service.raffle.domain.entity.sale_entity import (
    PaymentRegistered,
    SaleCreated,
    SaleSummary,
)
from raffle_admin.service.raffle.domain.entity.seat_entity import Seat
from raffle_admin.service.raffle.domain.value_object.customer_form import CustomerForm
from raffle_admin.service.shared_kernel.domain.entity.draw_entity import Draw


class IRaffleGateway(ABC):
    @abstractmethod
    async def list_draws(self) -> list[Draw]:
        pass

    @abstractmethod
    async def list_seats(self, *, draw_id: int) -> list[Seat]:
        """
        All seats of a draw, sorted by number.

        Raises:
            UnexpectedShapeError: payload is not `{puestos: [...]}` (or a bare list)
        """
        pass

    @abstractmethod
    async def create_sale(
        self, *, draw_id: int, seat_numbers: tuple[int, ...], customer: CustomerForm
    ) -> SaleCreated:
        pass

    @abstractmethod
    async def register_payment(
        self,
        *,
        sale_id: int,
        amount: int,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        note: Optional[str] = None,
    ) -> PaymentRegistered:
        pass

    @abstractmethod
    async def get_sale_summary(self, *, sale_id: int) -> SaleSummary:
        pass

    @abstractmethod
    async def release_sale(self, *, sale_id: int) -> None:
        """Frees every seat of the sale in one backend call."""
        pass

    @abstractmethod
    async def download_receipt(self, *, sale_id: int) -> bytes:
        """PNG bytes of the sale receipt (comprobante)."""
        pass
