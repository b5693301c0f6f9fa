import logging
from datetime import date
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.currencies import format_amount
from app.models import MonthHistory, Transaction, TransactionType, YearHistory
from app.schemas.transactions import CreateTransactionSchema, TransactionHistoryItem
from app.services.category_picker import find_category
from app.services.date_range import DateRange
from app.services.query_cache import query_cache

logger = logging.getLogger(__name__)

OVERVIEW = "overview"


class CategoryNotFound(ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__("category not found")


class TransactionNotFound(LookupError):
    pass


def _history_rows(db: Session, user_id: str, day: date):
    month_row = db.execute(
        select(MonthHistory)
        .filter_by(user_id=user_id, day=day.day, month=day.month, year=day.year)
        .with_for_update()
    ).scalar_one_or_none()
    if not month_row:
        month_row = MonthHistory(
            user_id=user_id, day=day.day, month=day.month, year=day.year,
            income=Decimal(0), expense=Decimal(0),
        )
        db.add(month_row)

    year_row = db.execute(
        select(YearHistory)
        .filter_by(user_id=user_id, month=day.month, year=day.year)
        .with_for_update()
    ).scalar_one_or_none()
    if not year_row:
        year_row = YearHistory(
            user_id=user_id, month=day.month, year=day.year,
            income=Decimal(0), expense=Decimal(0),
        )
        db.add(year_row)
    return month_row, year_row


def _apply_to_history(db: Session, user_id: str, day: date, type: TransactionType, delta: Decimal) -> None:
    for row in _history_rows(db, user_id, day):
        if type == TransactionType.INCOME:
            row.income = Decimal(row.income) + delta
        else:
            row.expense = Decimal(row.expense) + delta


def create_transaction(db: Session, user_id: str, payload: CreateTransactionSchema) -> Transaction:
    """Persist a validated transaction and fold it into the history totals.

    The transaction row and both history rows are written in one commit;
    cached overview queries for the user are dropped only after it succeeds.
    """
    category = find_category(db, user_id, payload.category, payload.type)
    if not category:
        raise CategoryNotFound(payload.category)

    amount = Decimal(str(payload.amount))
    try:
        db_tx = Transaction(
            user_id=user_id,
            amount=amount,
            description=payload.description or "",
            date=payload.date,
            category=category.name,
            category_icon=category.icon,
            type=payload.type,
        )
        db.add(db_tx)
        _apply_to_history(db, user_id, payload.date, payload.type, amount)
        db.commit()
        db.refresh(db_tx)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to create {payload.type.value} transaction for user {user_id}")
        raise

    query_cache.invalidate((OVERVIEW, user_id))
    logger.info(f"Created {db_tx.type.value} transaction {db_tx.id} ({amount}) for user {user_id}")
    return db_tx


def delete_transaction(db: Session, user_id: str, transaction_id: UUID) -> None:
    db_tx = db.execute(
        select(Transaction).filter_by(id=transaction_id, user_id=user_id)
    ).scalar_one_or_none()
    if not db_tx:
        raise TransactionNotFound(str(transaction_id))

    try:
        _apply_to_history(db, user_id, db_tx.date, db_tx.type, -Decimal(db_tx.amount))
        db.delete(db_tx)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to delete transaction {transaction_id} for user {user_id}")
        raise

    query_cache.invalidate((OVERVIEW, user_id))
    logger.info(f"Deleted transaction {transaction_id} for user {user_id}")


def transaction_history(db: Session, user_id: str, date_range: DateRange, currency: str) -> List[TransactionHistoryItem]:
    rows = db.execute(
        select(Transaction)
        .where(
            Transaction.user_id == user_id,
            Transaction.date >= date_range.from_,
            Transaction.date <= date_range.to,
        )
        .order_by(Transaction.date.desc(), Transaction.created_at.desc())
    ).scalars().all()

    items = []
    for tx in rows:
        item = TransactionHistoryItem(
            id=tx.id,
            amount=float(tx.amount),
            description=tx.description,
            date=tx.date,
            category=tx.category,
            category_icon=tx.category_icon,
            type=tx.type,
            formatted_amount=format_amount(tx.amount, currency),
        )
        items.append(item)
    return items
