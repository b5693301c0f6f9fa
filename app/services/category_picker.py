from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import Category, TransactionType


def fetch_categories(db: Session, user_id: str, type: Optional[TransactionType] = None) -> List[Category]:
    query = select(Category).where(Category.user_id == user_id)
    if type:
        query = query.where(Category.type == type)
    return list(db.execute(query.order_by(Category.name.asc())).scalars().all())


def find_category(db: Session, user_id: str, name: str, type: TransactionType) -> Optional[Category]:
    return db.execute(
        select(Category).filter_by(user_id=user_id, name=name, type=type)
    ).scalar_one_or_none()


def filter_categories(categories: List[Category], query: Optional[str]) -> List[Category]:
    if not query:
        return list(categories)
    needle = query.strip().lower()
    return [c for c in categories if needle in c.name.lower()]


class CategoryPicker:
    """Selection state for choosing one category of a transaction type.

    The value is a category name; ``on_change`` is told about every
    selection so the owning form can store it.
    """

    def __init__(
        self,
        type: TransactionType,
        categories: List[Category],
        value: str = "",
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self.type = type
        self.categories = [c for c in categories if c.type == type]
        self.value = value
        self.on_change = on_change

    @classmethod
    def load(cls, db: Session, user_id: str, type: TransactionType, **kwargs) -> "CategoryPicker":
        return cls(type, fetch_categories(db, user_id, type), **kwargs)

    @property
    def selected(self) -> Optional[Category]:
        for category in self.categories:
            if category.name == self.value:
                return category
        return None

    def search(self, query: Optional[str]) -> List[Category]:
        return filter_categories(self.categories, query)

    def select(self, name: str) -> None:
        self.value = name
        if self.on_change:
            self.on_change(name)
