from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from app.models import TransactionType
from app.schemas.common import ResponseEnvelope


class Timeframe(str, Enum):
    MONTH = "month"
    YEAR = "year"


class BalanceStats(BaseModel):
    income: float
    expense: float


class BalanceStatsResponse(ResponseEnvelope):
    data: BalanceStats


class CategoryStat(BaseModel):
    type: TransactionType
    category: str
    category_icon: str
    amount: float


class CategoryStatsResponse(ResponseEnvelope):
    data: List[CategoryStat]


class HistoryPeriodsResponse(ResponseEnvelope):
    data: List[int]


class HistoryQuery(BaseModel):
    timeframe: Timeframe
    year: int = Field(..., ge=2000, le=3000)
    month: int = Field(1, ge=1, le=12)


class HistoryPoint(BaseModel):
    year: int
    month: int
    day: Optional[int] = None
    income: float
    expense: float


class HistoryDataResponse(ResponseEnvelope):
    data: List[HistoryPoint]
