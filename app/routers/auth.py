import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from google.oauth2 import id_token
from google.auth.transport import requests as google_requests

from app.core.settings import settings
from app.core.security import create_access_token
from app.deps import CurrentUser, get_current_user
from app.schemas.common import make_success_response, make_error_response
from app.schemas.auth import (
    GoogleAuthRequest,
    GoogleAuthData,
    GoogleUser,
    GoogleAuthResponse,
    MeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["Auth"],
)


@router.post("/google", response_model=GoogleAuthResponse)
def auth_google(payload: GoogleAuthRequest):
    try:
        id_info = id_token.verify_oauth2_token(
            payload.id_token,
            google_requests.Request(),
            settings.GOOGLE_CLIENT_ID,
        )
        if id_info.get("aud") != settings.GOOGLE_CLIENT_ID:
            raise ValueError("Invalid audience")
    except Exception as exc:
        logger.warning(f"Rejected Google sign-in: {exc}")
        return JSONResponse(
            status_code=401,
            content=make_error_response(
                code="UNAUTHORIZED",
                message="Invalid Google ID token",
                details={"reason": str(exc)},
            ),
        )

    user_id = id_info.get("sub")
    email = id_info.get("email")
    name = id_info.get("name") or email

    access_token = create_access_token(sub=user_id, email=email, name=name)

    data = GoogleAuthData(
        access_token=access_token,
        user=GoogleUser(
            user_id=user_id,
            email=email,
            name=name,
        ),
    )
    response = JSONResponse(content=make_success_response(data.model_dump()))
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.ENV != "development",
    )
    logger.info(f"User {user_id} signed in")
    return response


@router.post("/sign-out")
async def sign_out():
    response = JSONResponse(content=make_success_response({"signed_out": True}))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/me", response_model=MeResponse)
async def read_me(current_user: Annotated[CurrentUser, Depends(get_current_user)]):
    return make_success_response(
        {"user_id": current_user.id, "email": current_user.email, "name": current_user.name}
    )
