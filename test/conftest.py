"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- `make_seat`: Seat builder with sensible defaults
- `fake_backend`: in-memory raffle backend implementing IRaffleGateway, used by
  the scenario tests (create → pay → release against the same seat pool)
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are configured at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ['DEBUG'] = 'false'
    os.environ['API_BASE_URL'] = 'http://raffle.test'
    os.environ['API_PREFIX'] = '/api'
    os.environ['DEPLOY_ENV'] = 'test'


_early_setup_test_environment()

# =============================================================================
# Imports (after env setup)
# =============================================================================
from typing import Any, Callable, Optional  # noqa: E402

import pytest  # noqa: E402

from raffle_admin.platform.exception.exceptions import (  # noqa: E402
    BusinessRejectionError,
    CustomBaseError,
    NotFoundError,
)
from raffle_admin.service.raffle.app.interface import IRaffleGateway  # noqa: E402
from raffle_admin.service.raffle.domain.entity.sale_entity import (  # noqa: E402
    PaymentRegistered,
    SaleCreated,
    SaleSummary,
)
from raffle_admin.service.raffle.domain.entity.seat_entity import Seat  # noqa: E402
from raffle_admin.service.raffle.domain.enum.sale_state import SaleState  # noqa: E402
from raffle_admin.service.raffle.domain.enum.seat_state import SeatState  # noqa: E402
from raffle_admin.service.raffle.domain.value_object.customer_form import (  # noqa: E402
    CustomerForm,
)
from raffle_admin.service.raffle.domain.value_object.ledger_view import LedgerView  # noqa: E402
from raffle_admin.service.raffle.domain.value_object.seat_capability import (  # noqa: E402
    SeatFlags,
    SeatPolicy,
)
from raffle_admin.service.shared_kernel.domain.entity.draw_entity import Draw  # noqa: E402


SEAT_PRICE = 35000


def build_seat(
    number: int,
    state: SeatState = SeatState.AVAILABLE,
    *,
    sale_id: Optional[int] = None,
    total: Optional[int] = 0,
    paid: Optional[int] = 0,
    sale_seat_numbers: tuple[int, ...] = (),
    flags: Optional[SeatFlags] = None,
    policy: Optional[SeatPolicy] = None,
    customer_name: Optional[str] = None,
) -> Seat:
    return Seat(
        number=number,
        state=state,
        sale_id=sale_id,
        ledger=LedgerView.from_fields(total=total, paid=paid),
        customer_name=customer_name,
        sale_seat_numbers=sale_seat_numbers,
        flags=flags or SeatFlags(),
        policy=policy or SeatPolicy(),
    )


class FakeRaffleBackend(IRaffleGateway):
    """
    Minimal stand-in for the raffle backend: one seat pool per draw, sales that
    claim seats, payments that settle them and releases that free them.

    `fail_next[op]` makes the next call of `op` raise; `calls` records every call.
    With `send_money=False` seat records come without total/paid (older backend shape).
    """

    def __init__(
        self,
        *,
        draw_id: int = 7,
        seat_count: int = 50,
        price: int = SEAT_PRICE,
        send_money: bool = True,
    ) -> None:
        self.draw_id = draw_id
        self.send_money = send_money
        self.price = price
        self.pools: dict[int, dict[int, Seat]] = {
            draw_id: {n: build_seat(n) for n in range(1, seat_count + 1)}
        }
        self.draws: list[Draw] = [Draw(draw_id=draw_id, name=f'Sorteo {draw_id}', raw_state='ACTIVO')]
        self.sales: dict[int, dict[str, Any]] = {}
        self.next_sale_id = 501
        self.calls: list[str] = []
        self.fail_next: dict[str, CustomBaseError] = {}

    def _enter(self, op: str) -> None:
        self.calls.append(op)
        error = self.fail_next.pop(op, None)
        if error is not None:
            raise error

    def calls_of(self, op: str) -> int:
        return self.calls.count(op)

    def _sale_seat(self, sale_id: int, number: int) -> Seat:
        sale = self.sales[sale_id]
        balance = max(0, sale['total'] - sale['paid'])
        return build_seat(
            number,
            SeatState.SOLD if balance == 0 else SeatState.RESERVED,
            sale_id=sale_id,
            total=sale['total'] if self.send_money else None,
            paid=sale['paid'] if self.send_money else None,
            sale_seat_numbers=sale['seats'],
            customer_name=sale['customer'],
        )

    def _sync_sale(self, sale_id: int) -> None:
        sale = self.sales[sale_id]
        pool = self.pools[sale['draw_id']]
        for number in sale['seats']:
            pool[number] = self._sale_seat(sale_id, number)

    # ========== IRaffleGateway ==========

    async def list_draws(self) -> list[Draw]:
        self._enter('list_draws')
        return list(self.draws)

    async def list_seats(self, *, draw_id: int) -> list[Seat]:
        self._enter('list_seats')
        return sorted(self.pools.get(draw_id, {}).values(), key=lambda s: s.number)

    async def create_sale(
        self, *, draw_id: int, seat_numbers: tuple[int, ...], customer: CustomerForm
    ) -> SaleCreated:
        self._enter('create_sale')
        pool = self.pools[draw_id]
        taken = [n for n in seat_numbers if pool[n].state != SeatState.AVAILABLE]
        if taken:
            raise BusinessRejectionError(f'Seats {taken} are no longer available', 409)

        sale_id = self.next_sale_id
        self.next_sale_id += 1
        total = self.price * len(seat_numbers)
        self.sales[sale_id] = {
            'draw_id': draw_id,
            'seats': tuple(sorted(seat_numbers)),
            'total': total,
            'paid': 0,
            'customer': customer.full_name,
        }
        self._sync_sale(sale_id)
        return SaleCreated(
            sale_id=sale_id,
            draw_id=draw_id,
            total=total,
            state=SaleState.OPEN,
            seat_numbers=tuple(sorted(seat_numbers)),
        )

    async def register_payment(
        self,
        *,
        sale_id: int,
        amount: int,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        note: Optional[str] = None,
    ) -> PaymentRegistered:
        self._enter('register_payment')
        sale = self.sales[sale_id]
        if amount > sale['total'] - sale['paid']:
            raise BusinessRejectionError('Payment exceeds the balance', 400)
        sale['paid'] += amount
        self._sync_sale(sale_id)
        balance = sale['total'] - sale['paid']
        return PaymentRegistered(
            sale_id=sale_id,
            amount=amount,
            sale_state_after=SaleState.derive(paid=sale['paid'], balance=balance),
            payment_id=len(self.calls),
            balance_after=balance,
        )

    async def get_sale_summary(self, *, sale_id: int) -> SaleSummary:
        self._enter('get_sale_summary')
        sale = self.sales.get(sale_id)
        if sale is None:
            raise NotFoundError(f'Sale {sale_id} not found')
        ledger = LedgerView.from_fields(total=sale['total'], paid=sale['paid'])
        return SaleSummary(
            sale_id=sale_id,
            draw_id=sale['draw_id'],
            state=SaleState.derive(paid=ledger.paid, balance=ledger.balance),
            ledger=ledger,
            customer_name=sale['customer'],
            seat_numbers=sale['seats'],
        )

    async def release_sale(self, *, sale_id: int) -> None:
        self._enter('release_sale')
        sale = self.sales.pop(sale_id)
        if sale['paid'] >= sale['total']:
            self.sales[sale_id] = sale
            raise BusinessRejectionError('A paid sale cannot be released', 409)
        pool = self.pools[sale['draw_id']]
        for number in sale['seats']:
            pool[number] = build_seat(number)

    async def download_receipt(self, *, sale_id: int) -> bytes:
        self._enter('download_receipt')
        return b'\x89PNG' + str(sale_id).encode()


@pytest.fixture
def make_seat() -> Callable[..., Seat]:
    return build_seat


@pytest.fixture
def fake_backend() -> FakeRaffleBackend:
    return FakeRaffleBackend()


@pytest.fixture
def moneyless_backend() -> FakeRaffleBackend:
    return FakeRaffleBackend(send_money=False)
