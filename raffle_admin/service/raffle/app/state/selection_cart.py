import re
from typing import Optional, Union

from raffle_admin.service.raffle.domain.entity.seat_entity import Seat


_NON_DIGITS = re.compile(r'[^0-9]')


def parse_amount(value: Union[int, str, None]) -> Optional[int]:
    """`"15.000"` → 15000, `""` / None → None. Formatting characters are dropped."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    digits = _NON_DIGITS.sub('', value)
    return int(digits) if digits else None


class SelectionCart:
    """Seats picked for the next sale. Only sellable seats can enter."""

    def __init__(self) -> None:
        self._numbers: set[int] = set()
        self._initial_payment: Optional[int] = None

    def toggle(self, seat: Seat) -> bool:
        if not seat.is_sellable:
            return False
        if seat.number in self._numbers:
            self.remove(seat.number)
        else:
            self._numbers.add(seat.number)
        return True

    def remove(self, number: int) -> None:
        self._numbers.discard(number)
        # Dropping the last seat ends the editing session
        if not self._numbers:
            self.clear()

    def clear(self) -> None:
        self._numbers.clear()
        self._initial_payment = None

    def contains(self, number: int) -> bool:
        return number in self._numbers

    @property
    def sorted_numbers(self) -> tuple[int, ...]:
        return tuple(sorted(self._numbers))

    @property
    def count(self) -> int:
        return len(self._numbers)

    @property
    def is_empty(self) -> bool:
        return not self._numbers

    def estimated_total(self, price_per_seat: int) -> int:
        return self.count * price_per_seat

    @property
    def initial_payment(self) -> Optional[int]:
        return self._initial_payment

    @initial_payment.setter
    def initial_payment(self, value: Union[int, str, None]) -> None:
        self._initial_payment = parse_amount(value)
