"""
Seat Grid Session

One operator session on one draw: the registry, the current selection, the
settlement orchestrator, the single error slot and the open context view (the
sold/reserved seat the operator is looking at).

Every backend error of a session action lands in the error slot instead of
propagating; the caller renders `error_slot` and `pop_notices()`.
"""

from typing import Awaitable, Callable, Optional, TypeVar

import attrs

from raffle_admin.platform.cache.report_cache import ReportCache
from raffle_admin.platform.exception.exceptions import (
    BusinessRejectionError,
    CustomBaseError,
    SeatNotFoundError,
)
from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.raffle.app.command.create_sale_use_case import CreateSaleUseCase
from raffle_admin.service.raffle.app.command.register_payment_use_case import (
    RegisterPaymentUseCase,
)
from raffle_admin.service.raffle.app.command.release_cupo_use_case import ReleaseCupoUseCase
from raffle_admin.service.raffle.app.dto import (
    CreateSaleRequest,
    CreateSaleResult,
    PaymentResult,
    ReleaseResult,
)
from raffle_admin.service.raffle.app.interface import IRaffleGateway, IReceiptWriter
from raffle_admin.service.raffle.app.query.get_sale_summary_use_case import GetSaleSummaryUseCase
from raffle_admin.service.raffle.app.query.resolve_active_draw_use_case import (
    ResolveActiveDrawUseCase,
)
from raffle_admin.service.raffle.app.state.error_slot import ErrorSlot
from raffle_admin.service.raffle.app.state.seat_registry import SeatRegistry
from raffle_admin.service.raffle.app.state.selection_cart import SelectionCart
from raffle_admin.service.raffle.app.state.settlement_orchestrator import SettlementOrchestrator
from raffle_admin.service.raffle.domain.entity.sale_entity import SaleSummary
from raffle_admin.service.raffle.domain.entity.seat_entity import Seat
from raffle_admin.service.raffle.domain.enum.operation_state import OperationState
from raffle_admin.service.raffle.domain.value_object.customer_form import CustomerForm
from raffle_admin.service.raffle.domain.value_object.ledger_view import LedgerView


_T = TypeVar('_T')


@attrs.define(frozen=True)
class ContextView:
    seat: Seat
    summary: Optional[SaleSummary] = None

    @property
    def sale_id(self) -> Optional[int]:
        return self.seat.sale_id

    @property
    def ledger(self) -> LedgerView:
        return self.summary.ledger if self.summary else self.seat.ledger


class SeatGridSession:
    def __init__(
        self,
        *,
        registry: SeatRegistry,
        orchestrator: SettlementOrchestrator,
        get_sale_summary_use_case: GetSaleSummaryUseCase,
        resolve_active_draw_use_case: ResolveActiveDrawUseCase,
        seat_price: int,
        cart: Optional[SelectionCart] = None,
    ) -> None:
        self.registry = registry
        self.orchestrator = orchestrator
        self.get_sale_summary_use_case = get_sale_summary_use_case
        self.resolve_active_draw_use_case = resolve_active_draw_use_case
        self.seat_price = seat_price
        self.cart = cart or SelectionCart()
        self.error_slot = ErrorSlot()
        self._context: Optional[ContextView] = None
        self._notices: list[str] = []

    @classmethod
    def create(
        cls,
        *,
        gateway: IRaffleGateway,
        default_draw_id: int,
        seat_price: int,
        receipt_writer: Optional[IReceiptWriter] = None,
        report_cache: Optional[ReportCache] = None,
    ) -> 'SeatGridSession':
        """Wire a session with its own registry."""
        registry = SeatRegistry(gateway=gateway, draw_id=default_draw_id)
        register_payment = RegisterPaymentUseCase(
            gateway=gateway, registry=registry, report_cache=report_cache
        )
        orchestrator = SettlementOrchestrator(
            create_sale_use_case=CreateSaleUseCase(
                gateway=gateway,
                registry=registry,
                register_payment_use_case=register_payment,
                receipt_writer=receipt_writer,
                report_cache=report_cache,
            ),
            register_payment_use_case=register_payment,
            release_cupo_use_case=ReleaseCupoUseCase(
                gateway=gateway, registry=registry, report_cache=report_cache
            ),
        )
        return cls(
            registry=registry,
            orchestrator=orchestrator,
            get_sale_summary_use_case=GetSaleSummaryUseCase(gateway=gateway),
            resolve_active_draw_use_case=ResolveActiveDrawUseCase(
                gateway=gateway, default_draw_id=default_draw_id
            ),
            seat_price=seat_price,
        )

    # ========== Read side ==========

    @property
    def draw_id(self) -> int:
        return self.registry.draw_id

    @property
    def context(self) -> Optional[ContextView]:
        return self._context

    @property
    def estimated_total(self) -> int:
        return self.cart.estimated_total(self.seat_price)

    @property
    def can_submit_sale(self) -> bool:
        return not self.cart.is_empty and not self.orchestrator.is_submitting

    def pop_notices(self) -> list[str]:
        notices, self._notices = self._notices, []
        return notices

    def _notify(self, message: str) -> None:
        Logger.base.info(f'📣 [SESSION] {message}')
        self._notices.append(message)

    async def _guarded(self, operation: Callable[[], Awaitable[_T]]) -> Optional[_T]:
        try:
            result = await operation()
        except CustomBaseError as e:
            self.error_slot.set(e)
            return None
        self.error_slot.clear()
        return result

    # ========== Loading ==========

    async def start(self, draw_id: Optional[int] = None) -> bool:
        """Open the grid on `draw_id`, or on the active draw when omitted."""

        async def _start() -> bool:
            target = draw_id if draw_id is not None else await self.resolve_active_draw_use_case.execute()
            if target != self.registry.draw_id or not self.registry.is_loaded:
                await self.registry.switch_draw(target)
            else:
                await self.registry.refresh()
            return True

        return bool(await self._guarded(_start))

    async def reload(self) -> bool:
        result = await self._guarded(self.registry.refresh)
        if result is None:
            return False
        self.reconcile_open_context()
        return True

    async def switch_draw(self, draw_id: int) -> bool:
        self.cart.clear()
        self._context = None
        self.orchestrator.reset()
        return await self._guarded(lambda: self.registry.switch_draw(draw_id)) is not None

    # ========== Seat interaction ==========

    async def click_seat(self, number: int) -> None:
        seat = self.registry.get(number)
        if seat is None:
            self.error_slot.set(SeatNotFoundError(number, self.registry.draw_id))
            return

        if seat.is_sellable:
            self.cart.toggle(seat)
            return

        await self.open_context(seat)

    async def open_context(self, seat: Seat) -> None:
        self._context = ContextView(seat=seat)
        if seat.sale_id is None:
            return
        summary = await self._guarded(
            lambda: self.get_sale_summary_use_case.execute(sale_id=seat.sale_id)  # type: ignore[arg-type]
        )
        # The operator may have moved on while the summary loaded
        if summary is not None and self._context is not None and self._context.seat.number == seat.number:
            self._context = ContextView(seat=self._context.seat, summary=summary)

    def close_context(self) -> None:
        self._context = None

    def reconcile_open_context(self) -> None:
        """Close or re-point the context view after the registry changed underneath it."""
        if self._context is None:
            return
        current = self._context.seat
        fresh = self.registry.get(current.number)

        if fresh is None:
            self._context = None
            self._notify(f'Seat {current.label} is no longer in draw {self.registry.draw_id}')
            return

        if fresh.sale_id != current.sale_id or fresh.is_sellable:
            self._context = None
            self._notify(f'Seat {current.label} changed on the server; its detail was closed')
            return

        summary = self._context.summary
        if summary is not None and summary.ledger != fresh.ledger:
            summary = None
        self._context = ContextView(seat=fresh, summary=summary)

    # ========== Settlement ==========

    async def submit_sale(
        self, customer: CustomerForm, *, payment_method: Optional[str] = None
    ) -> Optional[CreateSaleResult]:
        request = CreateSaleRequest(
            draw_id=self.registry.draw_id,
            seat_numbers=self.cart.sorted_numbers,
            customer=customer,
            initial_payment=self.cart.initial_payment,
            payment_method=payment_method,
        )
        result = await self._guarded(lambda: self.orchestrator.create_sale(request))
        if result is None:
            return None

        self.cart.clear()
        self.reconcile_open_context()
        if result.status == OperationState.PARTIAL_SUCCESS and result.payment_error:
            self.error_slot.set(result.payment_error)
        elif result.refresh_error:
            self.error_slot.set(result.refresh_error)
        self._notify(f'Sale {result.sale.sale_id} created')
        return result

    async def register_payment(
        self,
        amount: int,
        *,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        note: Optional[str] = None,
    ) -> Optional[PaymentResult]:
        context = self._context
        if context is None or context.sale_id is None:
            self.error_slot.set(BusinessRejectionError('Open a sold or reserved seat first', 400))
            return None

        sale_id = context.sale_id
        result = await self._guarded(
            lambda: self.orchestrator.register_payment(
                sale_id=sale_id,
                amount=amount,
                known_balance=context.ledger.known_balance,
                method=method,
                reference=reference,
                note=note,
            )
        )
        if result is None:
            return None

        self.reconcile_open_context()
        if self._context is not None and self._context.sale_id == sale_id:
            await self.open_context(self._context.seat)
        if result.refresh_error:
            self.error_slot.set(result.refresh_error)
        self._notify(f'Payment of {amount} registered for sale {sale_id}')
        return result

    async def release_context(self) -> Optional[ReleaseResult]:
        context = self._context
        if context is None:
            self.error_slot.set(BusinessRejectionError('Open a reserved seat first', 400))
            return None

        target = context.summary or context.seat
        if context.summary is not None and context.summary.can_release is None:
            # Summary lacks flags; the seat record may carry can_liberarse
            target = context.seat if context.seat.flags.can_liberarse is not None else context.summary

        result = await self._guarded(lambda: self.orchestrator.release_cupo(target))
        if result is None:
            self.reconcile_open_context()
            return None

        if result.refresh_error:
            self.error_slot.set(result.refresh_error)
        self._context = None
        self._notify(result.message)
        return result
