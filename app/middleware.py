import logging
import re
from typing import Iterable
from urllib.parse import urlencode

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse

from app.core.security import get_session_claims
from app.core.settings import settings

logger = logging.getLogger(__name__)


class RouteMatcher:
    def __init__(self, patterns: Iterable[str]):
        self.patterns = [re.compile(p) for p in patterns]

    def __call__(self, path: str) -> bool:
        return any(p.fullmatch(path) for p in self.patterns)


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Redirect unauthenticated requests for protected pages to the sign-in path."""

    def __init__(self, app, patterns: Iterable[str] | None = None, sign_in_url: str | None = None):
        super().__init__(app)
        self.is_protected_route = RouteMatcher(settings.PROTECTED_ROUTES if patterns is None else patterns)
        self.sign_in_url = sign_in_url or settings.SIGN_IN_URL

    async def dispatch(self, request: Request, call_next):
        if self.is_protected_route(request.url.path):
            try:
                request.state.user = get_session_claims(request)
            except Exception as exc:
                logger.info(f"Redirecting unauthenticated request for {request.url.path}: {exc}")
                query = urlencode({"redirect_url": request.url.path})
                return RedirectResponse(f"{self.sign_in_url}?{query}", status_code=307)
        return await call_next(request)
