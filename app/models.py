import uuid
import enum
from sqlalchemy import Column, String, DateTime, Date, Integer, Numeric, UniqueConstraint, Text, Enum, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

# --- Enums ---
class TransactionType(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


TRANSACTION_TYPE = Enum(TransactionType, name="transaction_type", values_callable=_enum_values)

# --- Models ---

class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String(50), nullable=False)
    icon = Column(String(20), nullable=False, default="")
    type = Column(TRANSACTION_TYPE, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "name", "type", name="uq_category_user_name_type"),
    )

    def __repr__(self):
        return f"<Category(name='{self.name}', type='{self.type.value}', user_id='{self.user_id}')>"


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(Date, nullable=False, index=True)
    # category is referenced by name; no FK so deleting a category keeps history intact
    category = Column(String(50), nullable=False)
    category_icon = Column(String(20), nullable=False, default="")
    type = Column(TRANSACTION_TYPE, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    def __repr__(self):
        return f"<Transaction(type='{self.type.value}', amount='{self.amount}', date='{self.date}')>"


class UserSettings(Base):
    __tablename__ = "user_settings"

    user_id = Column(String, primary_key=True)
    currency = Column(String(3), nullable=False)


class MonthHistory(Base):
    """Daily income/expense totals, one row per user and calendar day."""
    __tablename__ = "month_history"

    user_id = Column(String, primary_key=True)
    day = Column(Integer, primary_key=True)
    month = Column(Integer, primary_key=True)
    year = Column(Integer, primary_key=True)
    income = Column(Numeric(14, 2), nullable=False, default=0)
    expense = Column(Numeric(14, 2), nullable=False, default=0)


class YearHistory(Base):
    """Monthly income/expense totals, one row per user and calendar month."""
    __tablename__ = "year_history"

    user_id = Column(String, primary_key=True)
    month = Column(Integer, primary_key=True)
    year = Column(Integer, primary_key=True)
    income = Column(Numeric(14, 2), nullable=False, default=0)
    expense = Column(Numeric(14, 2), nullable=False, default=0)
