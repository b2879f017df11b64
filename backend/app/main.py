"""FastAPI application factory."""

import logging
import time
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.application.services import UserService
from app.config import get_settings
from app.infrastructure.database import Base, engine
from app.infrastructure.database.session import session_scope
from app.infrastructure.database.repositories import SQLAlchemyUserRepository
from app.infrastructure.dependencies import get_password_hasher
from app.infrastructure.logging.colored_logger import RequestLogger
from app.infrastructure.logging.log_config import setup_logging
from app.presentation.api.error_handlers import register_exception_handlers
from app.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _seed_admin() -> None:
    """Create the bootstrap administrator when ADMIN_EMAIL/ADMIN_PASSWORD are set.

    Idempotent: an existing account with that email is left untouched.
    """
    settings = get_settings()
    if not (settings.admin_email and settings.admin_password):
        logger.info("No admin credentials configured; skipping admin seed")
        return

    async with session_scope() as session:
        service = UserService(SQLAlchemyUserRepository(session), get_password_hasher())
        await service.ensure_admin(
            email=settings.admin_email,
            password=settings.admin_password,
            name=settings.admin_name,
            surname=settings.admin_surname,
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging, create tables, seed the admin."""
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await _seed_admin()

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    request_log = RequestLogger()

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            request_log.failure(
                request.method, request.url.path, exc, (time.perf_counter() - start) * 1000
            )
            raise
        request_log.request(
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
