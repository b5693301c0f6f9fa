from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps import CurrentUser, get_current_user, get_date_range
from app.schemas.common import make_success_response
from app.schemas.stats import HistoryDataResponse, HistoryPeriodsResponse, HistoryQuery
from app.schemas.transactions import TransactionHistoryResponse
from app.services.date_range import DateRange
from app.services.stats import get_history_data, get_history_periods
from app.services.transactions import transaction_history
from app.services.user_settings import get_or_create_user_settings

router = APIRouter(
    prefix="/api",
    tags=["History"],
)


@router.get("/transactions-history", response_model=TransactionHistoryResponse)
def read_transactions_history(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    date_range: Annotated[DateRange, Depends(get_date_range)],
    db: Session = Depends(get_db),
):
    user_settings = get_or_create_user_settings(db, current_user.id)
    items = transaction_history(db, current_user.id, date_range, user_settings.currency)
    return make_success_response([item.model_dump(mode="json") for item in items])


@router.get("/history-periods", response_model=HistoryPeriodsResponse)
def read_history_periods(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Session = Depends(get_db),
):
    return make_success_response(get_history_periods(db, current_user.id))


@router.get("/history-data", response_model=HistoryDataResponse)
def read_history_data(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    query: Annotated[HistoryQuery, Query()],
    db: Session = Depends(get_db),
):
    points = get_history_data(db, current_user.id, query.timeframe, query.year, query.month)
    return make_success_response([p.model_dump() for p in points])
