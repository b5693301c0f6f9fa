import logging
from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.settings import settings
from app.db import get_db
from app.deps import CurrentUser, get_current_user
from app.models import TransactionType
from app.navigation import build_navbar
from app.schemas.category import CategoryResponse
from app.schemas.common import make_error_response, make_success_response
from app.schemas.pages import DashboardPageResponse, ManagePageResponse, TransactionsPageResponse
from app.services.category_picker import fetch_categories
from app.services.date_range import DateRangeState, DateRangeTooLarge, default_date_range
from app.services.stats import get_balance_stats
from app.services.user_settings import get_or_create_user_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


@router.get("/dashboard", response_model=DashboardPageResponse)
def dashboard_page(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Session = Depends(get_db),
):
    user_settings = get_or_create_user_settings(db, current_user.id)
    date_range = default_date_range()
    balance = get_balance_stats(db, current_user.id, date_range)
    return make_success_response({
        "navbar": build_navbar(request.url.path),
        "currency": user_settings.currency,
        "range": date_range.as_dict(),
        "balance": balance.model_dump(),
    })


@router.get("/manage", response_model=ManagePageResponse)
def manage_page(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Session = Depends(get_db),
):
    user_settings = get_or_create_user_settings(db, current_user.id)
    categories = {
        t.value: [
            CategoryResponse.model_validate(c).model_dump(mode="json")
            for c in fetch_categories(db, current_user.id, t)
        ]
        for t in TransactionType
    }
    return make_success_response({
        "navbar": build_navbar(request.url.path),
        "currency": user_settings.currency,
        "categories": categories,
    })


@router.get("/transactions", response_model=TransactionsPageResponse)
def transactions_page(
    request: Request,
    from_: Optional[date] = Query(None, alias="from"),
    to: Optional[date] = Query(None),
):
    state = DateRangeState(default_date_range())
    try:
        state.update(from_, to)
    except DateRangeTooLarge as exc:
        logger.info(f"Rejected transactions range {from_}..{to}: {exc}")
        return JSONResponse(
            status_code=400,
            content=make_error_response(
                code="VALIDATION_ERROR",
                message=str(exc),
                details={"max_days": exc.max_days, "range": state.range.as_dict()},
            ),
        )

    return make_success_response({
        "navbar": build_navbar(request.url.path),
        "range": state.range.as_dict(),
        "max_days": settings.MAX_DATE_RANGE_DAYS,
    })
