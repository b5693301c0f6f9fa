from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from starlette.requests import HTTPConnection

from app.core.settings import settings


def create_access_token(sub: str, email: str, name: str) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": sub,
        "email": email,
        "name": name,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def extract_token(request: HTTPConnection) -> Optional[str]:
    """Bearer token from the Authorization header, falling back to the session cookie."""
    authorization_header = request.headers.get("authorization")
    if authorization_header and authorization_header.lower().startswith("bearer "):
        return authorization_header.split(" ", 1)[1].strip() or None
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_session_claims(request: HTTPConnection) -> Dict[str, Any]:
    token = extract_token(request)
    if not token:
        raise ValueError("Missing session token")
    payload = decode_access_token(token)
    if not payload.get("sub"):
        raise ValueError("Token missing identity")
    return payload
