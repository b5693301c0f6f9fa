from fastapi import APIRouter, Query

from app.navigation import build_navbar
from app.schemas.common import make_success_response
from app.schemas.pages import NavbarResponse

router = APIRouter(
    prefix="/api",
    tags=["Navigation"],
)


@router.get("/navbar", response_model=NavbarResponse)
async def read_navbar(path: str = Query("/dashboard")):
    return make_success_response(build_navbar(path))
