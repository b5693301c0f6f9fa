from typing import Any, Iterable, Optional
from pydantic import BaseModel


class ErrorObject(BaseModel):
    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class ResponseEnvelope(BaseModel):
    success: bool
    data: Any | None
    error: Optional[ErrorObject] = None


class FieldError(BaseModel):
    field: str
    message: str


def make_success_response(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data, "error": None}


def make_error_response(code: str, message: str, details: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return {
        "success": False,
        "data": None,
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        },
    }


def field_errors(errors: Iterable[dict[str, Any]], skip_prefixes: tuple = ("body", "query", "path")) -> list[FieldError]:
    """Flatten pydantic error dicts into ``FieldError`` items keyed by dotted field path."""
    result = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in skip_prefixes:
            loc = loc[1:]
        result.append(FieldError(field=".".join(loc) or "__root__", message=err.get("msg", "Invalid value")))
    return result
