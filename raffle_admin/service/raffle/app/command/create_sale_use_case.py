"""
Create Sale Use Case

Flow:
1. Validate - at least one seat, customer form valid (no network on failure)
2. Create the sale (backend is the source of truth)
3. Schedule the receipt download in the background (errors only logged)
4. Register the initial payment when > 0 (failure → PARTIAL_SUCCESS)
5. Refresh the seat registry (failure reported, sale stays committed)
"""

import asyncio
from typing import Optional

from opentelemetry import trace

from raffle_admin.platform.cache.report_cache import ReportCache
from raffle_admin.platform.exception.exceptions import (
    BusinessRejectionError,
    CustomBaseError,
    PaymentPartialFailureError,
    SaleCreationFailedError,
    ValidationError,
)
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.raffle.app.command.register_payment_use_case import (
    RegisterPaymentUseCase,
    invalidate_sale_reports,
)
from raffle_admin.service.raffle.app.dto import CreateSaleRequest, CreateSaleResult
from raffle_admin.service.raffle.app.interface import IRaffleGateway, IReceiptWriter
from raffle_admin.service.raffle.app.state.seat_registry import SeatRegistry
from raffle_admin.service.raffle.domain.entity.sale_entity import PaymentRegistered, SaleCreated
from raffle_admin.service.raffle.domain.enum.operation_state import OperationState


class CreateSaleUseCase:
    def __init__(
        self,
        *,
        gateway: IRaffleGateway,
        registry: SeatRegistry,
        register_payment_use_case: RegisterPaymentUseCase,
        receipt_writer: Optional[IReceiptWriter] = None,
        report_cache: Optional[ReportCache] = None,
    ) -> None:
        self.gateway = gateway
        self.registry = registry
        self.register_payment_use_case = register_payment_use_case
        self.receipt_writer = receipt_writer
        self.report_cache = report_cache
        self.tracer = trace.get_tracer(__name__)
        self._background_tasks: set[asyncio.Task[None]] = set()

    @staticmethod
    def validate(request: CreateSaleRequest) -> None:
        field_errors = request.customer.validate()
        if not request.seat_numbers:
            field_errors['seats'] = 'Select at least one seat'
        if field_errors:
            raise ValidationError('Check the highlighted fields', field_errors)

    @Logger.io
    async def execute(self, request: CreateSaleRequest) -> CreateSaleResult:
        with self.tracer.start_as_current_span(
            'use_case.create_sale',
            attributes={
                'draw.id': request.draw_id,
                'seat.count': len(request.seat_numbers),
            },
        ) as span:
            # ========== Step 1: Validate ==========
            self.validate(request)

            # ========== Step 2: Create Sale ==========
            sale = await self._create(request)
            span.set_attribute('sale.id', sale.sale_id)
            invalidate_sale_reports(self.report_cache)
            Logger.base.info(
                f'✅ [CREATE-SALE] Sale {sale.sale_id} created for seats '
                f'{", ".join(f"{n:02d}" for n in request.seat_numbers)}'
            )

            # ========== Step 3: Receipt (fire-and-forget) ==========
            self._schedule_receipt(sale.sale_id)

            # ========== Step 4: Initial Payment ==========
            status = OperationState.SUCCESS
            payment: Optional[PaymentRegistered] = None
            payment_error: Optional[PaymentPartialFailureError] = None
            if request.initial_payment and request.initial_payment > 0:
                try:
                    payment = await self.register_payment_use_case.submit(
                        sale_id=sale.sale_id,
                        amount=request.initial_payment,
                        known_balance=sale.total or None,
                        method=request.payment_method,
                    )
                except CustomBaseError as e:
                    Logger.base.warning(
                        f'⚠️ [CREATE-SALE] Sale {sale.sale_id} committed, initial payment failed: {e}'
                    )
                    payment_error = PaymentPartialFailureError(sale.sale_id, e)
                    status = OperationState.PARTIAL_SUCCESS
                    span.set_attribute('payment.failed', True)

            # ========== Step 5: Refresh ==========
            refresh_error: Optional[CustomBaseError] = None
            try:
                await self.registry.refresh()
            except CustomBaseError as e:
                Logger.base.warning(f'⚠️ [CREATE-SALE] Sale {sale.sale_id} committed, refresh failed: {e}')
                refresh_error = e

            return CreateSaleResult(
                sale=sale,
                status=status,
                payment=payment,
                payment_error=payment_error,
                refresh_error=refresh_error,
            )

    async def _create(self, request: CreateSaleRequest) -> SaleCreated:
        try:
            return await self.gateway.create_sale(
                draw_id=request.draw_id,
                seat_numbers=request.seat_numbers,
                customer=request.customer,
            )
        except SaleCreationFailedError:
            raise
        except BusinessRejectionError as e:
            raise SaleCreationFailedError(e.message, e.status_code) from e

    def _schedule_receipt(self, sale_id: int) -> None:
        if self.receipt_writer is None:
            return
        task = asyncio.create_task(self._download_receipt(sale_id))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _download_receipt(self, sale_id: int) -> None:
        try:
            content = await self.gateway.download_receipt(sale_id=sale_id)
            await self.receipt_writer.save(sale_id=sale_id, content=content)  # type: ignore[union-attr]
        except (CustomBaseError, OSError) as e:
            Logger.base.warning(f'🧾 [RECEIPT] Could not save receipt for sale {sale_id}: {e}')

    async def wait_background(self) -> None:
        """Await pending receipt downloads (shutdown, tests)."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks)
