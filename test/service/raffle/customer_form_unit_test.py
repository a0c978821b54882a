import pytest

from raffle_admin.service.raffle.domain.value_object.customer_form import (
    CONTACT_REQUIRED_MSG,
    CustomerForm,
)


@pytest.mark.unit
class TestCustomerFormValidation:
    def test_valid_with_phone_only(self) -> None:
        assert CustomerForm(names='Ana Ruiz', phone='3001234567').validate() == {}

    def test_valid_with_email_only(self) -> None:
        assert CustomerForm(names='Ana Ruiz', email='ana@example.com').is_valid

    def test_short_name_and_missing_contact_reported_together(self) -> None:
        errors = CustomerForm(names='Jo', phone='', email='').validate()

        assert set(errors) == {'names', 'phone', 'email'}
        assert errors['phone'] == CONTACT_REQUIRED_MSG
        assert errors['email'] == CONTACT_REQUIRED_MSG

    def test_fields_are_trimmed_before_checks(self) -> None:
        form = CustomerForm(names='   Jo   ', phone='  3001234567 ')

        assert form.names == 'Jo'
        assert form.phone == '3001234567'
        assert 'names' in form.validate()

    @pytest.mark.parametrize(
        'phone', ['300-123', '12345', '1234567890123456', '٣٠٠١٢٣٤٥٦٧', '300¹234567']
    )
    def test_invalid_phone(self, phone: str) -> None:
        assert 'phone' in CustomerForm(names='Ana Ruiz', phone=phone).validate()

    def test_invalid_email(self) -> None:
        errors = CustomerForm(names='Ana Ruiz', email='ana@').validate()

        assert errors == {'email': 'Invalid email'}

    def test_short_address(self) -> None:
        errors = CustomerForm(names='Ana Ruiz', phone='3001234567', address='ab').validate()

        assert set(errors) == {'address'}


@pytest.mark.unit
class TestCustomerFormPayload:
    def test_empty_optionals_are_omitted(self) -> None:
        payload = CustomerForm(names='Ana', last_names='Ruiz', phone='3001234567').to_payload()

        assert payload == {'nombres': 'Ana', 'apellidos': 'Ruiz', 'celular': '3001234567'}

    def test_full_name(self) -> None:
        assert CustomerForm(names='Ana', last_names='Ruiz').full_name == 'Ana Ruiz'
        assert CustomerForm(names='Ana').full_name == 'Ana'
