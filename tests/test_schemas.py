"""Tests for the request schemas, mainly transaction creation."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from app.models import TransactionType
from app.schemas.category import CreateCategorySchema
from app.schemas.transactions import (
    CreateTransactionSchema,
    transaction_form_defaults,
    validate_create_transaction,
)


def _payload(**overrides):
    payload = {
        "amount": "19.99",
        "description": "Groceries",
        "date": "2024-03-15",
        "category": "Food",
        "type": "expense",
    }
    payload.update(overrides)
    return payload


class TestCreateTransactionSchema:

    def test_string_amount_is_coerced_to_number(self):
        values = CreateTransactionSchema.model_validate(_payload(amount="19.99"))
        assert values.amount == 19.99
        assert isinstance(values.amount, float)

    def test_numeric_amount_is_accepted(self):
        values = CreateTransactionSchema.model_validate(_payload(amount=250))
        assert values.amount == 250.0

    @pytest.mark.parametrize("amount", [0, -1, "-0.01", "0"])
    def test_non_positive_amount_fails(self, amount):
        with pytest.raises(ValidationError):
            CreateTransactionSchema.model_validate(_payload(amount=amount))

    @pytest.mark.parametrize("amount", [10.005, "0.001", "3.14159"])
    def test_amount_with_more_than_two_decimals_fails(self, amount):
        with pytest.raises(ValidationError):
            CreateTransactionSchema.model_validate(_payload(amount=amount))

    def test_amount_up_to_the_column_limit_is_accepted(self):
        values = CreateTransactionSchema.model_validate(_payload(amount="9999999999.99"))
        assert values.amount == 9999999999.99

    @pytest.mark.parametrize("amount", ["10000000000.00", "90071992547409.93", "1e30", 1e300])
    def test_amount_above_the_column_limit_fails(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            CreateTransactionSchema.model_validate(_payload(amount=amount))
        assert exc_info.value.errors()[0]["loc"] == ("amount",)

    def test_amount_must_be_numeric(self):
        with pytest.raises(ValidationError):
            CreateTransactionSchema.model_validate(_payload(amount="ten"))

    @pytest.mark.parametrize("tx_type", ["Income", "EXPENSE", "transfer", ""])
    def test_type_outside_income_and_expense_fails(self, tx_type):
        with pytest.raises(ValidationError):
            CreateTransactionSchema.model_validate(_payload(type=tx_type))

    def test_type_literals_are_accepted(self):
        assert CreateTransactionSchema.model_validate(_payload(type="income")).type == TransactionType.INCOME
        assert CreateTransactionSchema.model_validate(_payload(type="expense")).type == TransactionType.EXPENSE

    def test_description_is_optional_and_passed_through(self):
        without = _payload()
        del without["description"]
        assert CreateTransactionSchema.model_validate(without).description is None
        assert CreateTransactionSchema.model_validate(_payload(description="  rent ")).description == "  rent "

    def test_date_is_coerced_from_string(self):
        assert CreateTransactionSchema.model_validate(_payload(date="2024-03-15")).date == date(2024, 3, 15)

    def test_date_is_coerced_from_datetime(self):
        picked = datetime(2024, 3, 15, 23, 30, tzinfo=timezone.utc)
        assert CreateTransactionSchema.model_validate(_payload(date=picked)).date == date(2024, 3, 15)

    def test_date_is_coerced_from_iso_datetime_string(self):
        values = CreateTransactionSchema.model_validate(_payload(date="2024-03-15T08:00:00.000Z"))
        assert values.date == date(2024, 3, 15)

    def test_date_is_coerced_from_space_separated_datetime_string(self):
        values = CreateTransactionSchema.model_validate(_payload(date="2024-03-15 08:00:00"))
        assert values.date == date(2024, 3, 15)

    def test_invalid_date_fails(self):
        with pytest.raises(ValidationError):
            CreateTransactionSchema.model_validate(_payload(date="15/03/2024"))

    def test_empty_category_is_not_rejected(self):
        assert CreateTransactionSchema.model_validate(_payload(category="")).category == ""


class TestValidateCreateTransaction:

    def test_valid_payload_returns_values_and_no_errors(self):
        values, errors = validate_create_transaction(_payload())
        assert errors == []
        assert values.amount == 19.99

    def test_errors_are_reported_per_field(self):
        values, errors = validate_create_transaction(_payload(amount="-5", type="gift"))
        assert values is None
        assert sorted(e.field for e in errors) == ["amount", "type"]

    def test_huge_amount_is_a_field_error(self):
        values, errors = validate_create_transaction(_payload(amount="1e30"))
        assert values is None
        assert [e.field for e in errors] == ["amount"]

    def test_missing_fields_are_reported(self):
        _, errors = validate_create_transaction({})
        assert {e.field for e in errors} == {"amount", "date", "category", "type"}


class TestFormDefaults:

    def test_defaults_reset_everything_but_the_type(self):
        defaults = transaction_form_defaults(TransactionType.INCOME, today=date(2024, 5, 1))
        assert defaults == {
            "type": TransactionType.INCOME,
            "amount": 0,
            "date": date(2024, 5, 1),
            "category": "",
            "description": "",
        }


class TestCreateCategorySchema:

    def test_valid_category(self):
        category = CreateCategorySchema(name="Salary", icon="💼", type="income")
        assert category.type == TransactionType.INCOME

    @pytest.mark.parametrize("name", ["ab", "x" * 21])
    def test_name_length_is_bounded(self, name):
        with pytest.raises(ValidationError):
            CreateCategorySchema(name=name, icon="💼", type="income")
