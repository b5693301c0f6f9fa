import datetime as dt
from decimal import Decimal
from typing import Any, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.models import TransactionType
from app.schemas.common import FieldError, ResponseEnvelope, field_errors

# largest value a Numeric(12, 2) column holds
MAX_AMOUNT = 9_999_999_999.99


class CreateTransactionSchema(BaseModel):
    amount: float = Field(..., gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    description: Optional[str] = None
    date: dt.date
    category: str
    type: TransactionType

    @field_validator("amount")
    @classmethod
    def amount_in_cents(cls, value: float) -> float:
        if Decimal(str(value)).as_tuple().exponent < -2:
            raise ValueError("Amount must be a multiple of 0.01")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> Any:
        # keep the calendar day the user picked, whatever offset it came with
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and ("T" in value or " " in value):
            try:
                return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
            except ValueError:
                return value
        return value


def validate_create_transaction(data: dict[str, Any]) -> Tuple[Optional[CreateTransactionSchema], List[FieldError]]:
    try:
        return CreateTransactionSchema.model_validate(data), []
    except ValidationError as exc:
        return None, field_errors(exc.errors())


def transaction_form_defaults(type: TransactionType, today: Optional[dt.date] = None) -> dict[str, Any]:
    """Values the create dialog starts from and resets to after a submit or cancel."""
    return {
        "type": type,
        "amount": 0,
        "date": today or dt.date.today(),
        "category": "",
        "description": "",
    }


class TransactionCreateData(BaseModel):
    transaction_id: str
    status: str


class TransactionCreateResponse(ResponseEnvelope):
    data: TransactionCreateData


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    amount: float
    description: str
    date: dt.date
    category: str
    category_icon: str
    type: TransactionType


class TransactionHistoryItem(TransactionOut):
    formatted_amount: str


class TransactionHistoryResponse(ResponseEnvelope):
    data: List[TransactionHistoryItem]


class FormDefaults(BaseModel):
    type: TransactionType
    amount: float
    date: dt.date
    category: str
    description: str


class FormDefaultsResponse(ResponseEnvelope):
    data: FormDefaults
