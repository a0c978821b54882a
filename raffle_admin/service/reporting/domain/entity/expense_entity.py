from typing import Optional

import attrs


MAX_CONCEPT_LENGTH = 150


@attrs.define(frozen=True)
class Expense:
    id: int  # negative when the backend sent no id
    concept: str
    amount: int
    note: Optional[str] = None
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    created_at: Optional[str] = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over concept and note."""
        needle = query.lower()
        return needle in self.concept.lower() or needle in (self.note or '').lower()


@attrs.define(frozen=True)
class ExpenseCreate:
    concept: str = attrs.field(converter=str.strip)
    amount: int
    note: Optional[str] = None

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not 1 <= len(self.concept) <= MAX_CONCEPT_LENGTH:
            errors['concept'] = f'Enter a concept (1 to {MAX_CONCEPT_LENGTH} characters)'
        if self.amount <= 0:
            errors['amount'] = 'Enter an amount greater than zero'
        return errors

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {'concepto': self.concept, 'valor': self.amount}
        if self.note and self.note.strip():
            payload['observacion'] = self.note.strip()
        return payload
