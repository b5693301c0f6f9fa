import calendar
from datetime import date
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models import MonthHistory, Transaction, TransactionType, YearHistory
from app.schemas.stats import BalanceStats, CategoryStat, HistoryPoint, Timeframe
from app.services.date_range import DateRange
from app.services.query_cache import query_cache
from app.services.transactions import OVERVIEW


def _balance(db: Session, user_id: str, date_range: DateRange) -> BalanceStats:
    totals = db.execute(
        select(Transaction.type, func.sum(Transaction.amount))
        .where(
            Transaction.user_id == user_id,
            Transaction.date >= date_range.from_,
            Transaction.date <= date_range.to,
        )
        .group_by(Transaction.type)
    ).all()
    by_type = {tx_type: float(total or 0) for tx_type, total in totals}
    return BalanceStats(
        income=by_type.get(TransactionType.INCOME, 0.0),
        expense=by_type.get(TransactionType.EXPENSE, 0.0),
    )


def get_balance_stats(db: Session, user_id: str, date_range: DateRange) -> BalanceStats:
    key = (OVERVIEW, user_id, "balance", date_range.from_, date_range.to)
    return query_cache.get_or_load(key, lambda: _balance(db, user_id, date_range))


def _category_stats(db: Session, user_id: str, date_range: DateRange) -> List[CategoryStat]:
    total = func.sum(Transaction.amount)
    rows = db.execute(
        select(Transaction.type, Transaction.category, Transaction.category_icon, total)
        .where(
            Transaction.user_id == user_id,
            Transaction.date >= date_range.from_,
            Transaction.date <= date_range.to,
        )
        .group_by(Transaction.type, Transaction.category, Transaction.category_icon)
        .order_by(total.desc())
    ).all()
    return [
        CategoryStat(type=tx_type, category=name, category_icon=icon, amount=float(amount or 0))
        for tx_type, name, icon, amount in rows
    ]


def get_category_stats(db: Session, user_id: str, date_range: DateRange) -> List[CategoryStat]:
    key = (OVERVIEW, user_id, "categories", date_range.from_, date_range.to)
    return query_cache.get_or_load(key, lambda: _category_stats(db, user_id, date_range))


def get_history_periods(db: Session, user_id: str) -> List[int]:
    def load():
        years = db.execute(
            select(MonthHistory.year)
            .where(MonthHistory.user_id == user_id)
            .distinct()
            .order_by(MonthHistory.year.asc())
        ).scalars().all()
        return list(years) or [date.today().year]

    return query_cache.get_or_load((OVERVIEW, user_id, "periods"), load)


def _year_history(db: Session, user_id: str, year: int) -> List[HistoryPoint]:
    rows = db.execute(
        select(YearHistory.month, func.sum(YearHistory.income), func.sum(YearHistory.expense))
        .where(YearHistory.user_id == user_id, YearHistory.year == year)
        .group_by(YearHistory.month)
    ).all()
    by_month = {month: (income, expense) for month, income, expense in rows}

    points = []
    for month in range(1, 13):
        income, expense = by_month.get(month, (0, 0))
        points.append(HistoryPoint(year=year, month=month, income=float(income or 0), expense=float(expense or 0)))
    return points


def _month_history(db: Session, user_id: str, year: int, month: int) -> List[HistoryPoint]:
    rows = db.execute(
        select(MonthHistory.day, func.sum(MonthHistory.income), func.sum(MonthHistory.expense))
        .where(
            MonthHistory.user_id == user_id,
            MonthHistory.year == year,
            MonthHistory.month == month,
        )
        .group_by(MonthHistory.day)
    ).all()
    by_day = {day: (income, expense) for day, income, expense in rows}

    points = []
    for day in range(1, calendar.monthrange(year, month)[1] + 1):
        income, expense = by_day.get(day, (0, 0))
        points.append(
            HistoryPoint(year=year, month=month, day=day, income=float(income or 0), expense=float(expense or 0))
        )
    return points


def get_history_data(db: Session, user_id: str, timeframe: Timeframe, year: int, month: int = 1) -> List[HistoryPoint]:
    if timeframe == Timeframe.YEAR:
        key = (OVERVIEW, user_id, "history", timeframe.value, year)
        return query_cache.get_or_load(key, lambda: _year_history(db, user_id, year))
    key = (OVERVIEW, user_id, "history", timeframe.value, year, month)
    return query_cache.get_or_load(key, lambda: _month_history(db, user_id, year, month))
