from typing import List
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict

from app.models import TransactionType
from app.schemas.common import ResponseEnvelope


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=20)
    icon: str = Field("", max_length=20)


class CreateCategorySchema(CategoryBase):
    type: TransactionType


class DeleteCategorySchema(BaseModel):
    name: str
    type: TransactionType


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    icon: str
    type: TransactionType


class CategoryListResponse(ResponseEnvelope):
    data: List[CategoryResponse]


class CategoryCreateResponse(ResponseEnvelope):
    data: CategoryResponse
