from typing import List
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import ResponseEnvelope


class UserSettingsUpdate(BaseModel):
    currency: str = Field(..., min_length=3, max_length=3)


class UserSettingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    user_id: str
    currency: str


class UserSettingsResponse(ResponseEnvelope):
    data: UserSettingsOut


class CurrencyOut(BaseModel):
    value: str
    label: str
    locale: str


class CurrenciesResponse(ResponseEnvelope):
    data: List[CurrencyOut]
