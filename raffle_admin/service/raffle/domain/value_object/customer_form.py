"""Customer form value object and its client-side validation."""

import re
from typing import Any, Optional

import attrs


EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'[0-9]+')
PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15
NAME_MIN_LENGTH = 3
ADDRESS_MIN_LENGTH = 3

CONTACT_REQUIRED_MSG = 'Enter a phone number or an email'


def _strip(value: Optional[str]) -> str:
    return (value or '').strip()


@attrs.define(frozen=True)
class CustomerForm:
    names: str = attrs.field(default='', converter=_strip)
    last_names: str = attrs.field(default='', converter=_strip)
    phone: str = attrs.field(default='', converter=_strip)
    email: str = attrs.field(default='', converter=_strip)
    address: str = attrs.field(default='', converter=_strip)

    def validate(self) -> dict[str, str]:
        """Field name → message. Empty when the form is valid."""
        errors: dict[str, str] = {}

        if len(self.names) < NAME_MIN_LENGTH:
            errors['names'] = f'Enter a valid name (at least {NAME_MIN_LENGTH} characters)'

        # The one cross-field rule: at least one contact channel
        if not self.phone and not self.email:
            errors['phone'] = CONTACT_REQUIRED_MSG
            errors['email'] = CONTACT_REQUIRED_MSG

        if self.email and not EMAIL_PATTERN.match(self.email):
            errors['email'] = 'Invalid email'

        if self.phone:
            if not PHONE_PATTERN.fullmatch(self.phone):
                errors['phone'] = 'Phone must contain digits only'
            elif not PHONE_MIN_DIGITS <= len(self.phone) <= PHONE_MAX_DIGITS:
                errors['phone'] = (
                    f'Invalid phone ({PHONE_MIN_DIGITS} to {PHONE_MAX_DIGITS} digits)'
                )

        if self.address and len(self.address) < ADDRESS_MIN_LENGTH:
            errors['address'] = f'Address too short (at least {ADDRESS_MIN_LENGTH} characters)'

        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validate()

    @property
    def full_name(self) -> str:
        return ' '.join(part for part in (self.names, self.last_names) if part)

    def to_payload(self) -> dict[str, Any]:
        """Backend `cliente` object; empty optionals are omitted."""
        payload: dict[str, Any] = {'nombres': self.names}
        for key, value in (
            ('apellidos', self.last_names),
            ('celular', self.phone),
            ('email', self.email),
            ('direccion', self.address),
        ):
            if value:
                payload[key] = value
        return payload
