from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.currencies import CURRENCIES
from app.db import get_db
from app.deps import CurrentUser, get_current_user
from app.schemas.common import make_error_response, make_success_response
from app.schemas.user_settings import (
    CurrenciesResponse,
    UserSettingsOut,
    UserSettingsResponse,
    UserSettingsUpdate,
)
from app.services.user_settings import UnsupportedCurrency, get_or_create_user_settings, update_currency

router = APIRouter(
    prefix="/api",
    tags=["User Settings"],
)


@router.get("/user-settings", response_model=UserSettingsResponse)
def read_user_settings(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Session = Depends(get_db),
):
    user_settings = get_or_create_user_settings(db, current_user.id)
    return make_success_response(UserSettingsOut.model_validate(user_settings).model_dump())


@router.put("/user-settings", response_model=UserSettingsResponse)
def update_user_settings(
    payload: UserSettingsUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Session = Depends(get_db),
):
    try:
        user_settings = update_currency(db, current_user.id, payload.currency)
    except UnsupportedCurrency:
        return JSONResponse(
            status_code=400,
            content=make_error_response(
                code="VALIDATION_ERROR",
                message="Invalid currency",
                details={"currency": payload.currency},
            ),
        )
    return make_success_response(UserSettingsOut.model_validate(user_settings).model_dump())


@router.get("/currencies", response_model=CurrenciesResponse)
def read_currencies():
    return make_success_response([c._asdict() for c in CURRENCIES])
