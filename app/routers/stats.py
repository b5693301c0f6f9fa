from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps import CurrentUser, get_current_user, get_date_range
from app.schemas.common import make_success_response
from app.schemas.stats import BalanceStatsResponse, CategoryStatsResponse
from app.services.date_range import DateRange
from app.services.stats import get_balance_stats, get_category_stats

router = APIRouter(
    prefix="/api/stats",
    tags=["Stats"],
)


@router.get("/balance", response_model=BalanceStatsResponse)
def read_balance_stats(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    date_range: Annotated[DateRange, Depends(get_date_range)],
    db: Session = Depends(get_db),
):
    stats = get_balance_stats(db, current_user.id, date_range)
    return make_success_response(stats.model_dump())


@router.get("/categories", response_model=CategoryStatsResponse)
def read_category_stats(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    date_range: Annotated[DateRange, Depends(get_date_range)],
    db: Session = Depends(get_db),
):
    stats = get_category_stats(db, current_user.id, date_range)
    return make_success_response([s.model_dump(mode="json") for s in stats])
