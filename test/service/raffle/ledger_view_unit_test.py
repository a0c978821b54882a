import pytest

from raffle_admin.service.raffle.domain.enum.sale_state import SaleState
from raffle_admin.service.raffle.domain.value_object.ledger_view import LedgerView


@pytest.mark.unit
class TestLedgerView:
    @pytest.mark.parametrize(
        'fields,expected',
        [
            ({'total': 35000, 'paid': 15000, 'balance': 20000}, (35000, 15000, 20000)),
            ({'total': 35000, 'paid': 15000}, (35000, 15000, 20000)),
            ({'total': 35000}, (35000, 0, 35000)),
            ({'paid': 15000, 'balance': 20000}, (35000, 15000, 20000)),
            ({'total': 35000, 'balance': 5000}, (35000, 30000, 5000)),
            ({'total': 35000, 'paid': 40000}, (35000, 40000, 0)),
            ({'total': '35.000', 'paid': '15000.00'}, (35000, 15000, 20000)),
            ({}, (0, 0, 0)),
        ],
    )
    def test_from_fields(self, fields: dict, expected: tuple[int, int, int]) -> None:
        ledger = LedgerView.from_fields(**fields)

        assert (ledger.total, ledger.paid, ledger.balance) == expected

    def test_balance_is_never_negative(self) -> None:
        assert LedgerView.from_fields(total=1000, paid=5000, balance=-4000).balance == 0

    def test_is_settled(self) -> None:
        assert LedgerView.from_fields(total=35000, paid=35000).is_settled
        assert not LedgerView.from_fields(total=35000, paid=100).is_settled
        assert not LedgerView().is_settled

    def test_can_accept(self) -> None:
        ledger = LedgerView.from_fields(total=35000, paid=15000)

        assert ledger.can_accept(20000)
        assert not ledger.can_accept(20001)
        assert not ledger.can_accept(0)

    def test_balance_known_only_when_sent_or_derived(self) -> None:
        assert LedgerView.from_fields(total=35000).known_balance == 35000
        assert LedgerView.from_fields(balance='0').known_balance == 0
        assert LedgerView.from_fields(paid=15000).known_balance is None
        assert LedgerView.from_fields().known_balance is None
        assert LedgerView().known_balance is None

    def test_unknown_balance_is_not_settled_and_accepts_any_positive_amount(self) -> None:
        ledger = LedgerView.from_fields()

        assert not ledger.is_settled
        assert ledger.can_accept(10000)
        assert not ledger.can_accept(0)


@pytest.mark.unit
class TestSaleState:
    @pytest.mark.parametrize(
        'raw,expected',
        [('PAGADO', SaleState.PAID), ('abonado', SaleState.PARTIAL), ('PENDIENTE', SaleState.OPEN)],
    )
    def test_from_raw(self, raw: str, expected: SaleState) -> None:
        assert SaleState.from_raw(raw, paid=0, balance=1) == expected

    def test_derived_when_raw_unknown(self) -> None:
        assert SaleState.from_raw(None, paid=0, balance=35000) == SaleState.OPEN
        assert SaleState.from_raw('??', paid=100, balance=100) == SaleState.PARTIAL
        assert SaleState.from_raw('', paid=35000, balance=0) == SaleState.PAID

    def test_unknown_balance_is_never_derived_as_paid(self) -> None:
        assert SaleState.derive(paid=0, balance=None) == SaleState.OPEN
        assert SaleState.derive(paid=5000, balance=None) == SaleState.PARTIAL
