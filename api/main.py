from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from budgets import router as budgets_router
from core import db
from core.config import Settings, load_settings
from core.errors import install_exception_handlers
from core.logs import configure_logging
from expenses import router as expenses_router
from user_budgets import router as user_budgets_router
from users import router as users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool(app.state.settings)
    try:
        yield
    finally:
        await db.close_pool()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Application factory. Settings are resolved here, so a missing
    JWT_SECRET or DATABASE_URL stops the process before it serves anything.

        uvicorn main:create_app --factory --app-dir api
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="budget-tracker-api", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_exception_handlers(app)

    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(users_router.router, tags=["users"])
    app.include_router(budgets_router.router, tags=["budgets"])
    app.include_router(user_budgets_router.router, tags=["user_budgets"])
    app.include_router(expenses_router.router, tags=["expenses"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app
