"""
Register Payment Use Case

Records an installment (abono) against an existing sale:
1. Local checks - amount > 0, amount <= known balance (soft, backend decides)
2. POST the payment
3. Invalidate receivables/productivity reports
4. Refresh the seat registry (the seat may have moved RESERVED → SOLD)
"""

from typing import Optional

from opentelemetry import trace

from raffle_admin.platform.cache.report_cache import ReportCache
from raffle_admin.platform.exception.exceptions import CustomBaseError, ValidationError
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.raffle.app.dto import PaymentResult
from raffle_admin.service.raffle.app.interface import IRaffleGateway
from raffle_admin.service.raffle.app.state.seat_registry import SeatRegistry
from raffle_admin.service.raffle.domain.entity.sale_entity import PaymentRegistered


SALE_REPORT_PREFIXES = ('receivables:', 'productivity:', 'dashboard:')


def invalidate_sale_reports(report_cache: Optional[ReportCache]) -> None:
    if report_cache is None:
        return
    for prefix in SALE_REPORT_PREFIXES:
        report_cache.invalidate(prefix)


class RegisterPaymentUseCase:
    def __init__(
        self,
        *,
        gateway: IRaffleGateway,
        registry: SeatRegistry,
        report_cache: Optional[ReportCache] = None,
    ) -> None:
        self.gateway = gateway
        self.registry = registry
        self.report_cache = report_cache
        self.tracer = trace.get_tracer(__name__)

    @staticmethod
    def validate(*, amount: int, known_balance: Optional[int]) -> None:
        if amount <= 0:
            raise ValidationError(
                'The payment must be greater than zero',
                {'amount': 'Enter an amount greater than zero'},
            )
        if known_balance is not None and amount > known_balance:
            raise ValidationError(
                f'The payment ({amount}) exceeds the pending balance ({known_balance})',
                {'amount': 'The payment cannot exceed the pending balance'},
            )

    @Logger.io
    async def execute(
        self,
        *,
        sale_id: int,
        amount: int,
        known_balance: Optional[int] = None,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        note: Optional[str] = None,
    ) -> PaymentResult:
        payment = await self.submit(
            sale_id=sale_id,
            amount=amount,
            known_balance=known_balance,
            method=method,
            reference=reference,
            note=note,
        )

        refresh_error: Optional[CustomBaseError] = None
        try:
            await self.registry.refresh()
        except CustomBaseError as e:
            Logger.base.warning(f'⚠️ [PAYMENT] Payment {payment.payment_id} saved, refresh failed: {e}')
            refresh_error = e

        return PaymentResult(payment=payment, refresh_error=refresh_error)

    async def submit(
        self,
        *,
        sale_id: int,
        amount: int,
        known_balance: Optional[int] = None,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        note: Optional[str] = None,
    ) -> PaymentRegistered:
        """Validate and send the payment without refreshing the registry."""
        with self.tracer.start_as_current_span(
            'use_case.register_payment',
            attributes={'sale.id': sale_id, 'payment.amount': amount},
        ) as span:
            self.validate(amount=amount, known_balance=known_balance)

            try:
                payment = await self.gateway.register_payment(
                    sale_id=sale_id,
                    amount=amount,
                    method=method,
                    reference=reference,
                    note=note,
                )
            except CustomBaseError as e:
                span.set_status(trace.Status(trace.StatusCode.ERROR, e.message))
                raise

            invalidate_sale_reports(self.report_cache)
            Logger.base.info(
                f'💵 [PAYMENT] Sale {sale_id}: {amount} registered, '
                f'sale now {payment.sale_state_after}'
            )
            return payment
