from typing import List
from pydantic import BaseModel

from app.schemas.category import CategoryResponse
from app.schemas.common import ResponseEnvelope
from app.schemas.stats import BalanceStats


class NavbarItem(BaseModel):
    label: str
    link: str
    is_active: bool


class NavbarResponse(ResponseEnvelope):
    data: List[NavbarItem]


class DateRangeData(BaseModel):
    # {"from": "YYYY-MM-DD", "to": "YYYY-MM-DD"}
    range: dict


class DashboardPage(DateRangeData):
    navbar: List[NavbarItem]
    currency: str
    balance: BalanceStats


class DashboardPageResponse(ResponseEnvelope):
    data: DashboardPage


class ManageCategories(BaseModel):
    income: List[CategoryResponse]
    expense: List[CategoryResponse]


class ManagePage(BaseModel):
    navbar: List[NavbarItem]
    currency: str
    categories: ManageCategories


class ManagePageResponse(ResponseEnvelope):
    data: ManagePage


class TransactionsPage(DateRangeData):
    navbar: List[NavbarItem]
    max_days: int


class TransactionsPageResponse(ResponseEnvelope):
    data: TransactionsPage
