"""
Sale DTOs

Request/Result DTOs for the create-sale, payment and release flows.
"""

from typing import Optional

import attrs

from raffle_admin.platform.exception.exceptions import CustomBaseError, PaymentPartialFailureError
from raffle_admin.service.raffle.domain.entity.sale_entity import PaymentRegistered, SaleCreated
from raffle_admin.service.raffle.domain.enum.operation_state import OperationState
from raffle_admin.service.raffle.domain.value_object.customer_form import CustomerForm


@attrs.define(frozen=True)
class CreateSaleRequest:
    draw_id: int
    seat_numbers: tuple[int, ...]
    customer: CustomerForm
    initial_payment: Optional[int] = None
    payment_method: Optional[str] = None


@attrs.define
class CreateSaleResult:
    """
    A committed sale. `status` is PARTIAL_SUCCESS when the initial payment did
    not register; `refresh_error` is set when the grid could not be reloaded
    afterwards. Neither un-commits the sale.
    """

    sale: SaleCreated
    status: OperationState
    payment: Optional[PaymentRegistered] = None
    payment_error: Optional[PaymentPartialFailureError] = None
    refresh_error: Optional[CustomBaseError] = None


@attrs.define
class PaymentResult:
    payment: PaymentRegistered
    refresh_error: Optional[CustomBaseError] = None


@attrs.define
class ReleaseResult:
    sale_id: int
    released_seat_numbers: tuple[int, ...]
    message: str
    refresh_error: Optional[CustomBaseError] = None
