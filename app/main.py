import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.core.settings import settings
from app.db import dispose_engine, init_db
from app.middleware import AuthGateMiddleware
from app.routers.auth import router as auth_router
from app.routers.categories import router as categories_router
from app.routers.history import router as history_router
from app.routers.navbar import router as navbar_router
from app.routers.pages import router as pages_router
from app.routers.stats import router as stats_router
from app.routers.transactions import router as transactions_router
from app.routers.user_settings import router as user_settings_router

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Budget Tracker API ({settings.ENV})")
    if settings.AUTO_CREATE_TABLES:
        init_db()
    yield
    dispose_engine()
    logger.info("Budget Tracker API stopped")


app = FastAPI(
    title="Budget Tracker API",
    description="Backend for the personal budget tracker: categories, transactions and history",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(AuthGateMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(categories_router)
app.include_router(transactions_router)
app.include_router(history_router)
app.include_router(stats_router)
app.include_router(user_settings_router)
app.include_router(navbar_router)
app.include_router(pages_router)

@app.get("/healthz", tags=["Health Check"])
async def health_check():
    return {"status": "ok"}
