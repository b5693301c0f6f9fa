import logging
import threading

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.settings import settings
from app.models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker | None = None
_lock = threading.Lock()


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # in-memory databases live and die with their connection: share one
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=settings.SQL_ECHO, **kwargs)

    # pool_pre_ping/pool_recycle guard against dropped/stale connections causing OperationalError
    return create_engine(
        url,
        echo=settings.SQL_ECHO,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine, _session_factory
    if _engine is None:
        with _lock:
            if _engine is None:
                _engine = _build_engine(settings.DATABASE_URL)
                _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
                logger.info(f"Database engine created for {_engine.url.render_as_string(hide_password=True)}")
    return _engine


def get_sessionmaker() -> sessionmaker:
    get_engine()
    return _session_factory


def dispose_engine() -> None:
    global _engine, _session_factory
    with _lock:
        if _engine is not None:
            _engine.dispose()
            logger.info("Database engine disposed")
        _engine = None
        _session_factory = None


def get_db():
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()


# Alembic owns the schema in deployed environments; this is for dev and tests
def init_db():
    Base.metadata.create_all(bind=get_engine())
