from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, status, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import validation_error_response
from app.db import get_db
from app.deps import CurrentUser, get_current_user
from app.models import TransactionType
from app.schemas.common import make_error_response, make_success_response
from app.schemas.transactions import (
    FormDefaults,
    FormDefaultsResponse,
    TransactionCreateData,
    TransactionCreateResponse,
    transaction_form_defaults,
    validate_create_transaction,
)
from app.services.transactions import (
    CategoryNotFound,
    TransactionNotFound,
    create_transaction as create_transaction_record,
    delete_transaction as delete_transaction_record,
)

router = APIRouter(
    prefix="/api/transactions",
    tags=["Transactions"],
)


@router.post(
    "",
    response_model=TransactionCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    payload: Annotated[dict[str, Any], Body()],
    db: Session = Depends(get_db),
):
    values, errors = validate_create_transaction(payload)
    if errors:
        return validation_error_response(errors, message="Invalid transaction")

    try:
        db_tx = create_transaction_record(db, current_user.id, values)
    except CategoryNotFound as exc:
        return JSONResponse(
            status_code=400,
            content=make_error_response(
                code="VALIDATION_ERROR",
                message="Category not found",
                details={"category": exc.name, "type": values.type.value},
            ),
        )
    except SQLAlchemyError:
        return JSONResponse(
            status_code=500,
            content=make_error_response(
                code="INTERNAL_ERROR",
                message="Failed to create transaction",
                details={},
            ),
        )

    data = TransactionCreateData(
        transaction_id=str(db_tx.id),
        status="created",
    )
    return make_success_response(data.model_dump())


@router.get("/form-defaults", response_model=FormDefaultsResponse)
def read_form_defaults(type: TransactionType):
    data = FormDefaults(**transaction_form_defaults(type))
    return make_success_response(data.model_dump(mode="json"))


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: UUID,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Session = Depends(get_db),
):
    try:
        delete_transaction_record(db, current_user.id, transaction_id)
    except TransactionNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found.")
    except SQLAlchemyError:
        return JSONResponse(
            status_code=500,
            content=make_error_response(
                code="INTERNAL_ERROR",
                message="Failed to delete transaction",
                details={},
            ),
        )
    return make_success_response({"transaction_id": str(transaction_id), "status": "deleted"})
