import logging
from typing import Optional, Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps import CurrentUser, get_current_user
from app.models import Category, TransactionType
from app.schemas.category import (
    CategoryCreateResponse,
    CategoryListResponse,
    CategoryResponse,
    CreateCategorySchema,
    DeleteCategorySchema,
)
from app.schemas.common import make_success_response
from app.services.category_picker import CategoryPicker, fetch_categories, filter_categories, find_category

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/categories",
    tags=["Categories"]
)

@router.get("", response_model=CategoryListResponse)
def read_categories(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    type: Optional[TransactionType] = None,
    q: Optional[str] = None,
    db: Session = Depends(get_db)
):
    if type:
        categories = CategoryPicker.load(db, current_user.id, type).search(q)
    else:
        categories = filter_categories(fetch_categories(db, current_user.id), q)
    return make_success_response(
        [CategoryResponse.model_validate(cat).model_dump(mode="json") for cat in categories]
    )

@router.post("", response_model=CategoryCreateResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: CreateCategorySchema,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Session = Depends(get_db)
):
    existing = find_category(db, current_user.id, category_in.name, category_in.type)
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category with this name already exists.")

    db_category = Category(
        **category_in.model_dump(),
        user_id=current_user.id,
    )
    db.add(db_category)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent request inserted the same name first
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category with this name already exists.")
    db.refresh(db_category)
    logger.info(f"Created {db_category.type.value} category '{db_category.name}' for user {current_user.id}")
    return make_success_response(CategoryResponse.model_validate(db_category).model_dump(mode="json"))

@router.delete("", response_model=CategoryCreateResponse)
def delete_category(
    category_in: DeleteCategorySchema,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Session = Depends(get_db)
):
    db_category = find_category(db, current_user.id, category_in.name, category_in.type)
    if not db_category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found.")

    data = CategoryResponse.model_validate(db_category).model_dump(mode="json")
    db.delete(db_category)
    db.commit()
    logger.info(f"Deleted {category_in.type.value} category '{category_in.name}' for user {current_user.id}")
    return make_success_response(data)
