"""Raffle Application DTOs"""

from raffle_admin.service.raffle.app.dto.sale_dto import (
    CreateSaleRequest,
    CreateSaleResult,
    PaymentResult,
    ReleaseResult,
)


__all__ = [
    'CreateSaleRequest',
    'CreateSaleResult',
    'PaymentResult',
    'ReleaseResult',
]
