from datetime import date
from typing import Optional

from fastapi import HTTPException, Query, Request, status

from app.core.security import get_session_claims
from app.services.date_range import DateRange, DateRangeTooLarge, check_date_range


class CurrentUser:
    def __init__(self, id: str, email: Optional[str] = None, name: Optional[str] = None):
        self.id = id
        self.email = email
        self.name = name


# --- Validate the session JWT issued at sign-in ---
async def get_current_user(request: Request) -> CurrentUser:
    try:
        payload = get_session_claims(request)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentUser(id=payload["sub"], email=payload.get("email"), name=payload.get("name"))


# --- Date range query parameters shared by the overview endpoints ---
def get_date_range(
    from_: date = Query(..., alias="from"),
    to: date = Query(...),
) -> DateRange:
    try:
        return check_date_range(from_, to)
    except DateRangeTooLarge as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "max_days": exc.max_days},
        )
