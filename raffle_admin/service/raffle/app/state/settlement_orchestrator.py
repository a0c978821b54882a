"""
Settlement Orchestrator

Serializes the three seat-affecting flows behind one operation state:

    IDLE → SUBMITTING → SUCCESS | PARTIAL_SUCCESS | FAILED → (reset) → IDLE

While SUBMITTING, any further submission is refused before touching the
network, so a double click cannot create two sales.
"""

from typing import Awaitable, Callable, Optional, TypeVar, Union

from raffle_admin.platform.exception.exceptions import SubmissionInProgressError
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
from raffle_admin.service.raffle.domain.entity.sale_entity import SaleSummary
from raffle_admin.service.raffle.domain.entity.seat_entity import Seat
from raffle_admin.service.raffle.domain.enum.operation_state import OperationState


_T = TypeVar('_T')


class SettlementOrchestrator:
    def __init__(
        self,
        *,
        create_sale_use_case: CreateSaleUseCase,
        register_payment_use_case: RegisterPaymentUseCase,
        release_cupo_use_case: ReleaseCupoUseCase,
    ) -> None:
        self.create_sale_use_case = create_sale_use_case
        self.register_payment_use_case = register_payment_use_case
        self.release_cupo_use_case = release_cupo_use_case
        self._state = OperationState.IDLE
        self._action: Optional[str] = None

    @property
    def state(self) -> OperationState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._state == OperationState.SUBMITTING

    def reset(self) -> None:
        if self._state != OperationState.SUBMITTING:
            self._state = OperationState.IDLE
            self._action = None

    async def _run(
        self,
        action: str,
        operation: Callable[[], Awaitable[_T]],
        *,
        outcome: Callable[[_T], OperationState] = lambda _: OperationState.SUCCESS,
    ) -> _T:
        if self._state == OperationState.SUBMITTING:
            Logger.base.warning(f'⏳ [SETTLEMENT] {action} refused, {self._action} in flight')
            raise SubmissionInProgressError(action)

        self._state = OperationState.SUBMITTING
        self._action = action
        try:
            result = await operation()
        except BaseException:
            self._state = OperationState.FAILED
            raise
        self._state = outcome(result)
        return result

    async def create_sale(self, request: CreateSaleRequest) -> CreateSaleResult:
        return await self._run(
            'create_sale',
            lambda: self.create_sale_use_case.execute(request),
            outcome=lambda result: result.status,
        )

    async def register_payment(
        self,
        *,
        sale_id: int,
        amount: int,
        known_balance: Optional[int] = None,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        note: Optional[str] = None,
    ) -> PaymentResult:
        return await self._run(
            'register_payment',
            lambda: self.register_payment_use_case.execute(
                sale_id=sale_id,
                amount=amount,
                known_balance=known_balance,
                method=method,
                reference=reference,
                note=note,
            ),
        )

    async def release_cupo(self, target: Union[Seat, SaleSummary]) -> ReleaseResult:
        return await self._run('release_cupo', lambda: self.release_cupo_use_case.execute(target))
