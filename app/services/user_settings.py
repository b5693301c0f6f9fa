import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.settings import settings
from app.currencies import is_supported_currency
from app.models import UserSettings

logger = logging.getLogger(__name__)


class UnsupportedCurrency(ValueError):
    pass


def get_or_create_user_settings(db: Session, user_id: str) -> UserSettings:
    user_settings = db.execute(select(UserSettings).filter_by(user_id=user_id)).scalar_one_or_none()
    if user_settings:
        return user_settings

    user_settings = UserSettings(user_id=user_id, currency=settings.DEFAULT_CURRENCY)
    db.add(user_settings)
    db.commit()
    db.refresh(user_settings)
    logger.info(f"Created default settings ({user_settings.currency}) for user {user_id}")
    return user_settings


def update_currency(db: Session, user_id: str, currency: str) -> UserSettings:
    if not is_supported_currency(currency):
        raise UnsupportedCurrency(currency)

    user_settings = get_or_create_user_settings(db, user_id)
    user_settings.currency = currency
    db.commit()
    db.refresh(user_settings)
    return user_settings
